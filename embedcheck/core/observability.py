"""Structured logging and call tracing for embedcheck.

Importing this module sets up structlog only. Applications call
``configure_logging`` to also claim the root logger at a given level.
``trace_call`` wraps validation entry points so each pass logs its inputs,
duration and outcome under one ``execution_id``.
"""

import functools
import inspect
import json
import logging
import sys
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

from embedcheck.config.settings import get_settings

F = TypeVar("F", bound=Callable[..., Any])

_CALLSITE = structlog.processors.CallsiteParameterAdder(
    parameters=[
        structlog.processors.CallsiteParameter.FUNC_NAME,
        structlog.processors.CallsiteParameter.LINENO,
    ],
)


def _build_processors(json_output: bool) -> list[Any]:
    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        _CALLSITE,
        renderer,
    ]


def configure_logging(level: str | None = None, *, json_output: bool | None = None) -> None:
    """Route stdlib and structlog records to stderr.

    Args:
        level: Log level name; defaults to ``APP_LOG_LEVEL``
        json_output: Render JSON lines; defaults to on in production or when
            stderr is not a terminal
    """
    settings = get_settings()
    level = (level or settings.app_log_level).upper()
    if json_output is None:
        json_output = settings.is_production or not sys.stderr.isatty()

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    _configure_structlog(json_output)


def _configure_structlog(json_output: bool) -> None:
    # Uncached so loggers created before a reconfigure pick up the new chain
    structlog.configure(
        processors=_build_processors(json_output),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


# Host applications own the root logger; only structlog is set up on import
_configure_structlog(get_settings().is_production or not sys.stderr.isatty())

logger = structlog.get_logger(__name__)


def _loggable(value: Any, max_length: int) -> Any:
    """Reduce a value to something JSON-friendly and short enough to log."""
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    try:
        encoded = json.dumps(value, default=str)
    except (TypeError, ValueError):
        encoded = None
    if encoded is not None and len(encoded) <= max_length:
        return json.loads(encoded)
    text = encoded if encoded is not None else str(value)
    return text[:max_length] + "..." if len(text) > max_length else text


def trace_call(
    *,
    capture_result: bool = True,
    capture_args: bool = True,
    max_arg_length: int = 200,
    log_level: str = "DEBUG",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Log start, duration and outcome of each call to the wrapped function.

    Sync and async functions are both supported. Exceptions are logged as
    ``call_failed`` and re-raised unchanged.

    Example:
        >>> @trace_call(capture_args=False, add_metadata={"operation": "check"})
        ... async def check(raw: str) -> CheckResult:
        ...     ...
    """
    level = log_level.lower()
    metadata = dict(add_metadata or {})

    def decorator(func: F) -> F:
        name = f"{func.__module__}.{func.__qualname__}"

        class _Trace:
            def __init__(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
                self.execution_id = f"{name}_{time.time_ns() // 1000}"
                self.started = time.perf_counter()
                bind_contextvars(execution_id=self.execution_id)
                fields: dict[str, Any] = {}
                if capture_args:
                    fields["args"] = [_loggable(a, max_arg_length) for a in args]
                    fields["kwargs"] = {k: _loggable(v, max_arg_length) for k, v in kwargs.items()}
                self._emit(level, "call_started", **fields)

            def _emit(self, method: str, event: str, **fields: Any) -> None:
                getattr(logger, method)(
                    event,
                    function_name=name,
                    execution_id=self.execution_id,
                    **fields,
                    **metadata,
                )

            def _elapsed_ms(self) -> float:
                return (time.perf_counter() - self.started) * 1000

            def succeeded(self, result: Any) -> None:
                fields = {"result": _loggable(result, max_arg_length)} if capture_result else {}
                self._emit(level, "call_succeeded", duration_ms=self._elapsed_ms(), **fields)

            def failed(self, exc: Exception) -> None:
                self._emit(
                    "error",
                    "call_failed",
                    duration_ms=self._elapsed_ms(),
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                    exc_info=True,
                )

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                trace = _Trace(args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    trace.failed(exc)
                    raise
                finally:
                    unbind_contextvars("execution_id")
                trace.succeeded(result)
                return result

            return cast(F, async_wrapper)

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _Trace(args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                trace.failed(exc)
                raise
            finally:
                unbind_contextvars("execution_id")
            trace.succeeded(result)
            return result

        return cast(F, sync_wrapper)

    return decorator
