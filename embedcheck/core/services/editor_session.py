"""Live validation for an embed editor.

The UI calls ``on_input`` on every change of the text buffer. The session
owns the image cache and prober for its lifetime, so a link checked once
is never fetched again while the user keeps typing.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from embedcheck.config.settings import get_settings
from embedcheck.contracts.check_result import CheckResult
from embedcheck.core.image_cache import ImageCheckCache
from embedcheck.core.ports import ImageProbePort
from embedcheck.core.validation.embed_validator import check_json
from embedcheck.core.validation.primitives import is_string_empty

logger = structlog.get_logger(__name__)

ReportListener = Callable[[CheckResult | None], Awaitable[None] | None]


class EmbedEditorSession:
    """Sequence-stamps validation calls and keeps only the newest report.

    Calls may overlap because each one can wait on image probes. Only the
    most recently issued call renders; results for older buffer contents
    are dropped whenever they arrive.
    """

    def __init__(
        self,
        *,
        prober: ImageProbePort | None = None,
        cache: ImageCheckCache | None = None,
        probe_images: bool | None = None,
        listener: ReportListener | None = None,
    ) -> None:
        settings = get_settings()
        if probe_images is None:
            probe_images = settings.image_probe_enabled
        if prober is None and probe_images:
            from embedcheck.adapters.image_prober import ImageProber

            prober = ImageProber()
            self._owns_prober = True
        else:
            self._owns_prober = False

        self.cache = cache if cache is not None else ImageCheckCache(settings.image_cache_ttl_seconds)
        self._prober = prober
        self._listener = listener
        self._issued = 0
        self._report: CheckResult | None = None

    @property
    def report(self) -> CheckResult | None:
        """The report currently on screen; None when the input is blank."""
        return self._report

    async def on_input(self, text: str) -> CheckResult | None:
        """Validate the new buffer contents and return the report now on screen.

        Blank input (only spaces and newlines) skips validation and clears
        the report. A call overtaken by newer input renders nothing, even when
        it finishes before the newer call does, and returns whatever report
        is already on screen.
        """
        self._issued += 1
        stamp = self._issued

        if is_string_empty(text):
            await self._render(None)
            return self._report

        result = await check_json(text, prober=self._prober, cache=self.cache)
        if stamp != self._issued:
            logger.debug("stale_report_dropped", stamp=stamp, latest=self._issued)
            return self._report

        await self._render(result)
        return self._report

    async def close(self) -> None:
        if self._owns_prober and self._prober is not None:
            await self._prober.close()

    async def __aenter__(self) -> EmbedEditorSession:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _render(self, result: CheckResult | None) -> None:
        self._report = result
        if self._listener is not None:
            outcome = self._listener(result)
            if outcome is not None:
                await outcome
