"""Port interfaces between the validation core and network adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from embedcheck.contracts.check_result import ImageIssue
    from embedcheck.core.image_cache import ImageCheckCache

__all__ = ["ImageProbePort"]


class ImageProbePort(ABC):
    """Port for checking that an embed image link points at a usable image."""

    @abstractmethod
    async def check_image(
        self, url: Any, label: str, cache: ImageCheckCache
    ) -> ImageIssue | None:
        """Return a label-prefixed issue for ``url`` or None when there is nothing to report.

        Unset URLs report nothing. Malformed URLs are errors; every
        network or content-type finding is a warning. Outcomes are read
        from and written to ``cache``.
        """
        pass

    async def close(self) -> None:
        """Release network resources held by the adapter."""
        return None
