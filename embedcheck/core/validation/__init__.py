"""Validation utilities for embed JSON documents."""

from .embed_validator import check_json, parse_embed, validate_document
from .image_checks import image_syntax_issue
from .messages import MESSAGES, message
from .primitives import (
    field_position,
    get_string_errors,
    is_iso_date,
    is_present,
    is_string_empty,
    is_valid_color,
    is_valid_url,
    ordinal,
)

__all__ = [
    # Document validation
    "check_json",
    "parse_embed",
    "validate_document",
    "image_syntax_issue",
    # Messages
    "MESSAGES",
    "message",
    # Primitives
    "field_position",
    "get_string_errors",
    "is_iso_date",
    "is_present",
    "is_string_empty",
    "is_valid_color",
    "is_valid_url",
    "ordinal",
]
