"""Embed JSON Validation Module.

Checks the raw JSON source of a rich message embed against the platform's
structural rules and limits, and probes every image it links to.

Usage:
    from embedcheck.core.validation import check_json

    result = await check_json(raw_text, prober=prober, cache=cache)
    if not result.is_valid:
        print(result.errors)

Each call is one linear pass. Rules are independent and all of them run;
only a JSON parse failure stops the pass early. Nothing raises for any
input string: every malformed shape becomes a listed error.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import structlog

from embedcheck.contracts.check_result import CheckResult, ImageIssue, Severity
from embedcheck.contracts.embed import EMBED_LIMITS, VALID_KEYS
from embedcheck.core.image_cache import ImageCheckCache
from embedcheck.core.metrics import mark_validation
from embedcheck.core.observability import trace_call
from embedcheck.core.ports import ImageProbePort
from embedcheck.core.validation.image_checks import image_syntax_issue
from embedcheck.core.validation.messages import message
from embedcheck.core.validation.primitives import (
    field_position,
    get_string_errors,
    is_iso_date,
    is_present,
    is_string_empty,
    is_valid_color,
    is_valid_url,
)

logger = structlog.get_logger(__name__)

# (top-level key, sub-key holding the link, label used in messages)
_IMAGE_SLOTS: tuple[tuple[str, str, str], ...] = (
    ("footer", "icon_url", "Footer icon"),
    ("image", "url", "Image"),
    ("thumbnail", "url", "Thumbnail"),
    ("author", "icon_url", "Author icon"),
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_int(literal: str) -> int | float:
    # Past the int digit limit, fall back to float (inf when out of range)
    try:
        return int(literal)
    except ValueError:
        return float(literal)


def parse_embed(raw_text: str) -> dict[str, Any] | None:
    """Parse embed source; None when it is not a JSON object."""
    try:
        document = json.loads(raw_text, parse_constant=_reject_constant, parse_int=_parse_int)
    except (ValueError, TypeError, RecursionError):
        return None
    if not isinstance(document, dict):
        return None
    return document


async def _collect_image_issues(
    document: dict[str, Any],
    prober: ImageProbePort | None,
    cache: ImageCheckCache,
) -> dict[str, ImageIssue | None]:
    """Run every image check for the document at once, keyed by top-level key."""
    keys: list[str] = []
    checks = []
    for key, sub_key, label in _IMAGE_SLOTS:
        container = document.get(key)
        if not isinstance(container, dict):
            continue
        url = container.get(sub_key)
        keys.append(key)
        if prober is None:
            checks.append(_syntax_only(url, label))
        else:
            checks.append(prober.check_image(url, label, cache))

    results = await asyncio.gather(*checks)
    return dict(zip(keys, results))


async def _syntax_only(url: Any, label: str) -> ImageIssue | None:
    return image_syntax_issue(url, label)


class _Report:
    """Accumulates findings in rule order; None entries are dropped."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def error(self, text: str | None) -> None:
        if text is not None:
            self.errors.append(text)

    def warning(self, text: str | None) -> None:
        if text is not None:
            self.warnings.append(text)

    def issue(self, issue: ImageIssue | None) -> None:
        if issue is None:
            return
        if issue.severity is Severity.ERROR:
            self.errors.append(issue.text)
        else:
            self.warnings.append(issue.text)

    def result(self) -> CheckResult:
        return CheckResult(errors=self.errors, warnings=self.warnings)


def _check_fields(fields: Any, report: _Report) -> None:
    if not is_present(fields):
        return
    if not isinstance(fields, list):
        report.error(message("fields_not_array"))
        return
    if len(fields) > EMBED_LIMITS["fields"]:
        report.error(message("too_many_fields", limit=EMBED_LIMITS["fields"]))

    for index, entry in enumerate(fields):
        position = field_position(index)
        if not is_present(entry):
            report.error(message("field_empty", position=position))
            continue
        if not isinstance(entry, dict):
            report.error(message("field_not_object", position=position))
            continue

        report.error(
            get_string_errors(
                entry.get("name"), f"{position} field's name", False, EMBED_LIMITS["field_name"]
            )
        )
        report.error(
            get_string_errors(
                entry.get("value"), f"{position} field's value", False, EMBED_LIMITS["field_value"]
            )
        )
        if "inline" in entry and not isinstance(entry["inline"], bool):
            report.error(message("field_inline_not_boolean", position=position))


def _has_no_content(document: dict[str, Any]) -> bool:
    # A bare link still produces a message preview, so it counts as content
    author = document.get("author")
    footer = document.get("footer")
    fields = document.get("fields")
    return (
        is_string_empty(document.get("title"))
        and not is_present(document.get("url"))
        and is_string_empty(document.get("description"))
        and (not isinstance(author, dict) or is_string_empty(author.get("name")))
        and (not isinstance(footer, dict) or is_string_empty(footer.get("text")))
        and (not is_present(fields) or (isinstance(fields, list) and not fields))
    )


def validate_document(
    raw_text: str,
    document: dict[str, Any],
    image_issues: dict[str, ImageIssue | None],
) -> CheckResult:
    """Apply every rule to a parsed document, given its image check results."""
    report = _Report()

    title = document.get("title")
    description = document.get("description")
    url = document.get("url")
    timestamp = document.get("timestamp")
    color = document.get("color")
    footer = document.get("footer")
    image = document.get("image")
    thumbnail = document.get("thumbnail")
    author = document.get("author")

    report.error(get_string_errors(title, "Title", True, EMBED_LIMITS["title"]))
    report.error(get_string_errors(description, "Description", True, EMBED_LIMITS["description"]))

    if is_present(url) and not is_valid_url(url):
        report.error(message("url_invalid"))
    if is_string_empty(title) and is_present(url):
        report.warning(message("url_without_title"))

    if is_present(timestamp) and not is_iso_date(timestamp):
        report.error(message("timestamp_invalid"))

    if is_present(color) and not is_valid_color(color):
        report.error(message("color_invalid"))

    if is_present(footer):
        if isinstance(footer, dict):
            report.error(get_string_errors(footer.get("text"), "Footer", True, EMBED_LIMITS["footer_text"]))
            report.issue(image_issues.get("footer"))
            if is_string_empty(footer.get("text")) and is_present(footer.get("icon_url")):
                report.warning(message("footer_icon_without_text"))
        else:
            report.error(message("not_an_object", label="Footer"))

    for key, label, value in (("image", "Image", image), ("thumbnail", "Thumbnail", thumbnail)):
        if not is_present(value):
            continue
        if isinstance(value, dict):
            report.issue(image_issues.get(key))
        else:
            report.error(message("not_an_object", label=label))

    if is_present(author):
        if isinstance(author, dict):
            report.error(get_string_errors(author.get("name"), "Author name", True, EMBED_LIMITS["author_name"]))
            if not is_valid_url(author.get("url")):
                report.error(message("author_url_invalid"))
            report.issue(image_issues.get("author"))
            if is_string_empty(author.get("name")) and (
                is_present(author.get("url")) or is_present(author.get("icon_url"))
            ):
                report.warning(message("author_without_name"))
        else:
            report.error(message("not_an_object", label="Author"))

    _check_fields(document.get("fields"), report)

    if _has_no_content(document):
        report.error(message("no_content"))

    if len(raw_text) > EMBED_LIMITS["total_chars"]:
        report.error(message("json_too_long", limit=EMBED_LIMITS["total_chars"]))

    for key in document:
        if key not in VALID_KEYS:
            report.warning(message("invalid_key", key=key))

    return report.result()


@trace_call(capture_args=False, capture_result=True, log_level="DEBUG", add_metadata={"operation": "check_json"})
async def check_json(
    raw_text: str,
    *,
    prober: ImageProbePort | None = None,
    cache: ImageCheckCache | None = None,
) -> CheckResult:
    """Validate embed JSON source and return its errors and warnings.

    Args:
        raw_text: The literal JSON text being edited
        prober: Image link checker; None checks link syntax only (offline)
        cache: Per-URL probe memo owned by the caller; a throwaway one is
            used when omitted

    Returns:
        CheckResult with errors and warnings in rule order
    """
    document = parse_embed(raw_text)
    if document is None:
        mark_validation("unparseable")
        return CheckResult(errors=[message("json_invalid")])

    if cache is None:
        cache = ImageCheckCache()

    image_issues = await _collect_image_issues(document, prober, cache)
    result = validate_document(raw_text, document, image_issues)

    mark_validation("valid" if result.is_valid else "invalid")
    logger.debug(
        "embed_checked",
        error_count=len(result.errors),
        warning_count=len(result.warnings),
        length=len(raw_text),
    )
    return result
