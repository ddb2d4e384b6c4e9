"""Per-URL memo of image probe outcomes.

The cache is owned by whoever drives validation (usually an editor
session) and handed to the prober on every call; there is no module-level
state. Without a TTL an entry lives as long as the cache object.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from embedcheck.contracts.check_result import ImageCheckOutcome


class ImageCheckCache:
    def __init__(
        self,
        ttl_seconds: float | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: dict[str, tuple[float | None, ImageCheckOutcome]] = {}
        self._ttl = None if ttl_seconds is None else float(ttl_seconds)
        self._clock = clock

    def get(self, url: str) -> ImageCheckOutcome | None:
        """Return the stored outcome for the exact URL string, if still fresh."""
        item = self._store.get(url)
        if item is None:
            return None
        expires_at, outcome = item
        if expires_at is not None and self._clock() >= expires_at:
            self._store.pop(url, None)
            return None
        return outcome

    def set(self, url: str, outcome: ImageCheckOutcome) -> None:
        # Last writer wins; outcomes for one URL are expected to agree
        expires_at = None if self._ttl is None else self._clock() + self._ttl
        self._store[url] = (expires_at, outcome)

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self.get(url) is not None

    def __len__(self) -> int:
        return len(self._store)
