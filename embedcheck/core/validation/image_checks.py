"""Offline checks for image link properties."""

from __future__ import annotations

from typing import Any

from embedcheck.contracts.check_result import ImageIssue, Severity
from embedcheck.core.validation.messages import message
from embedcheck.core.validation.primitives import is_present, is_valid_url


def image_syntax_issue(url: Any, label: str) -> ImageIssue | None:
    """Return an error when an image link is malformed; unset links are fine."""
    if not is_present(url):
        return None
    if not isinstance(url, str):
        return ImageIssue(text=message("image_not_string", label=label), severity=Severity.ERROR)
    if not is_valid_url(url):
        return ImageIssue(text=message("image_invalid_url", label=label), severity=Severity.ERROR)
    return None
