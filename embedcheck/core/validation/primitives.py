"""Stateless predicates and formatters shared by the embed validator."""

from __future__ import annotations

import re
from typing import Any

from yarl import URL

from embedcheck.contracts.embed import MAX_COLOR
from embedcheck.core.validation.messages import message

# YYYY-MM-DDTHH:MM:SS[.mmm]Z, UTC only
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]{3})?Z")

_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_present(value: Any) -> bool:
    """Return True when an embed property counts as set.

    Missing, null, false, zero and the empty string are all "not set".
    Containers count as set even when empty, so ``"footer": {}`` is still
    checked as a footer.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return True


def is_valid_url(value: Any) -> bool:
    """Check that value is an absolute http(s) URL with a host.

    URL properties are optional, so an unset value passes.
    """
    if not is_present(value):
        return True
    if not isinstance(value, str):
        return False
    try:
        url = URL(value.strip())
        if not url.absolute or url.scheme.lower() not in _ALLOWED_SCHEMES:
            return False
        # Accessing the port validates it (out of range raises)
        _ = url.port
        host = url.host
    except (ValueError, TypeError):
        return False
    # Paths and queries may hold spaces; hosts may not
    return bool(host) and not any(ch.isspace() for ch in host)


def is_iso_date(value: Any) -> bool:
    """Check for a UTC ISO-8601 timestamp with optional milliseconds."""
    if not isinstance(value, str):
        return False
    return _ISO_DATE_RE.fullmatch(value) is not None


def is_valid_color(value: Any) -> bool:
    """Check that value is a number in the 24-bit RGB range."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return 0 <= value <= MAX_COLOR


def ordinal(number: int) -> str:
    """Format a 1-based position as an English ordinal (1st, 2nd, 11th)."""
    if 10 <= number % 100 <= 20:
        return f"{number}th"
    return f"{number}{_ORDINAL_SUFFIXES.get(number % 10, 'th')}"


def field_position(index: int) -> str:
    """Ordinal for the field at 0-based ``index`` ("1st", "2nd")."""
    return ordinal(index + 1)


def is_string_empty(value: Any) -> bool:
    """Return True if value is unset, not a string, or only spaces and newlines.

    Only ' ' and '\\n' are stripped; tabs and other whitespace count as content.
    """
    if not is_present(value) or not isinstance(value, str):
        return True
    return value.replace(" ", "").replace("\n", "") == ""


def get_string_errors(
    value: Any,
    label: str,
    allow_empty: bool = True,
    max_length: int | None = None,
) -> str | None:
    """Return the first problem with a text property, or None if it is fine."""
    if allow_empty and not is_present(value):
        return None
    if not is_present(value) or (not allow_empty and is_string_empty(value)):
        return message("string_empty", label=label)
    if not isinstance(value, str):
        return message("string_not_string", label=label)
    if max_length and len(value) > max_length:
        return message("string_too_long", label=label, max_length=max_length)
    return None
