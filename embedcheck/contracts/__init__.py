"""Contract models and document shapes."""

from .check_result import CheckResult, ImageCheckOutcome, ImageCheckStatus, ImageIssue, Severity
from .embed import (
    EMBED_LIMITS,
    MAX_COLOR,
    SUPPORTED_IMAGE_TYPES,
    VALID_KEYS,
    EmbedAuthor,
    EmbedField,
    EmbedFooter,
    EmbedMedia,
    EmbedPayload,
)

__all__ = [
    "CheckResult",
    "ImageCheckOutcome",
    "ImageCheckStatus",
    "ImageIssue",
    "Severity",
    "EMBED_LIMITS",
    "MAX_COLOR",
    "SUPPORTED_IMAGE_TYPES",
    "VALID_KEYS",
    "EmbedAuthor",
    "EmbedField",
    "EmbedFooter",
    "EmbedMedia",
    "EmbedPayload",
]
