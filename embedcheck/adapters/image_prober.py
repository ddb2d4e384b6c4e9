"""HTTP adapter implementing the ImageProbePort.

Fetches each image URL once per cache, classifies the response from its
status line and Content-Type header, and never reads the body.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import aiohttp
from aiohttp import hdrs

from embedcheck.config.settings import get_settings
from embedcheck.contracts.check_result import (
    ImageCheckOutcome,
    ImageCheckStatus,
    ImageIssue,
)
from embedcheck.contracts.embed import SUPPORTED_IMAGE_TYPES
from embedcheck.core.image_cache import ImageCheckCache
from embedcheck.core.metrics import mark_cache_hit, mark_image_probe
from embedcheck.core.ports import ImageProbePort
from embedcheck.core.validation.image_checks import image_syntax_issue
from embedcheck.core.validation.messages import image_outcome_message
from embedcheck.core.validation.primitives import is_present

logger = logging.getLogger(__name__)


def classify_response(status: int, reason: str | None, content_type: str | None) -> ImageCheckOutcome:
    """Classify a fetched response without looking at its body."""
    if not 200 <= status < 300:
        return ImageCheckOutcome(
            status=ImageCheckStatus.BAD_STATUS, status_code=status, reason=reason or ""
        )

    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if not media_type.startswith("image/"):
        return ImageCheckOutcome(status=ImageCheckStatus.NOT_AN_IMAGE, content_type=media_type or None)
    if media_type not in SUPPORTED_IMAGE_TYPES:
        return ImageCheckOutcome(status=ImageCheckStatus.UNSUPPORTED_TYPE, content_type=media_type)
    return ImageCheckOutcome(status=ImageCheckStatus.OK, content_type=media_type)


class ImageProber(ImageProbePort):
    """Check embed image links over HTTP with aiohttp."""

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession | None = None,
        request_timeout: float | None = None,
        user_agent: str | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        settings = get_settings()
        timeout = request_timeout if request_timeout is not None else settings.image_probe_timeout_seconds
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = {hdrs.USER_AGENT: user_agent or settings.image_probe_user_agent}
        self._session = session
        self._owns_session = session is None
        self._semaphore = asyncio.Semaphore(max_concurrency or settings.image_probe_max_concurrency)
        # Probes currently on the wire, shared by overlapping callers
        self._in_flight: dict[str, asyncio.Future[ImageCheckOutcome]] = {}

    async def __aenter__(self) -> ImageProber:
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def check_image(
        self, url: Any, label: str, cache: ImageCheckCache
    ) -> ImageIssue | None:
        if not is_present(url):
            return None
        issue = image_syntax_issue(url, label)
        if issue is not None:
            return issue

        # Fetch and memoize the same text the syntax check parsed
        url = url.strip()
        outcome = cache.get(url)
        if outcome is not None:
            mark_cache_hit()
        else:
            outcome = await self._probe_shared(url)
            cache.set(url, outcome)

        text = image_outcome_message(label, outcome)
        if text is None or outcome.severity is None:
            return None
        return ImageIssue(text=text, severity=outcome.severity)

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self._headers)
            self._owns_session = True
        return self._session

    async def _probe_shared(self, url: str) -> ImageCheckOutcome:
        pending = self._in_flight.get(url)
        if pending is not None:
            return await asyncio.shield(pending)

        task = asyncio.ensure_future(self._probe(url))
        self._in_flight[url] = task
        try:
            return await asyncio.shield(task)
        finally:
            if task.done():
                self._in_flight.pop(url, None)
            else:
                task.add_done_callback(lambda _t: self._in_flight.pop(url, None))

    async def _probe(self, url: str) -> ImageCheckOutcome:
        session = await self._ensure_session()
        started = time.perf_counter()

        async with self._semaphore:
            try:
                async with session.get(url, timeout=self._timeout, headers=self._headers) as resp:
                    outcome = classify_response(
                        resp.status, resp.reason, resp.headers.get(hdrs.CONTENT_TYPE)
                    )
            except Exception as exc:
                logger.warning("Image probe failed url=%s error=%r", url, exc)
                outcome = ImageCheckOutcome(status=ImageCheckStatus.UNREACHABLE)

        mark_image_probe(outcome.status.value, time.perf_counter() - started)
        if not outcome.is_ok:
            logger.info("Image probe flagged url=%s status=%s", url, outcome.status.value)
        return outcome
