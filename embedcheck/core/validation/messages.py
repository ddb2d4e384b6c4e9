"""User-facing message templates, keyed by rule.

Consumers match on this exact wording, so every string the validator
emits is built here.
"""

from __future__ import annotations

from typing import Any

from embedcheck.contracts.check_result import ImageCheckOutcome, ImageCheckStatus

MESSAGES: dict[str, str] = {
    # Document
    "json_invalid": "JSON is invalid",
    "json_too_long": "JSON is too long (>{limit} characters)",
    "no_content": "No content (title, description, author, footer, or fields).",
    "invalid_key": '"{key}" is not a valid key',
    # Text properties
    "string_empty": "{label} is empty",
    "string_not_string": "{label} is not a string",
    "string_too_long": "{label} is too long (>{max_length} characters)",
    # Scalars
    "url_invalid": "URL is invalid",
    "url_without_title": "URL will not be shown if there is no title",
    "timestamp_invalid": "Timestamp is invalid",
    "color_invalid": "Color is invalid",
    # Objects
    "not_an_object": "{label} is not an object",
    "footer_icon_without_text": "Footer icon will not be shown without text",
    "author_url_invalid": "Author has an invalid URL",
    "author_without_name": "Author URL and icon will not be shown without a name",
    # Fields
    "fields_not_array": "Fields is not an array",
    "too_many_fields": "Too many fields (>{limit})",
    "field_empty": "{position} field is empty",
    "field_not_object": "{position} field is not an object",
    "field_inline_not_boolean": "{position} field inline is not a boolean",
    # Images
    "image_not_string": "{label} is not a string",
    "image_invalid_url": "{label} is not a valid URL",
    "image_unreachable": "{label} could not be checked",
    "image_bad_status": "{label} gave bad response ({status_code} {reason})",
    "image_not_an_image": "{label} is not an image",
    "image_unsupported_type": (
        "{label} is an unsupported image type (should be png, jpeg, gif, or webp)"
    ),
}

_OUTCOME_RULES = {
    ImageCheckStatus.UNREACHABLE: "image_unreachable",
    ImageCheckStatus.BAD_STATUS: "image_bad_status",
    ImageCheckStatus.NOT_AN_IMAGE: "image_not_an_image",
    ImageCheckStatus.UNSUPPORTED_TYPE: "image_unsupported_type",
}


def message(rule: str, **params: Any) -> str:
    """Render the template for ``rule``; unknown rules raise KeyError."""
    return MESSAGES[rule].format(**params)


def image_outcome_message(label: str, outcome: ImageCheckOutcome) -> str | None:
    """Message for a probe outcome under ``label``; None when the image is fine."""
    rule = _OUTCOME_RULES.get(outcome.status)
    if rule is None:
        return None
    return message(
        rule,
        label=label,
        status_code=outcome.status_code,
        reason=outcome.reason or "",
    )
