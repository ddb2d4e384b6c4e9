"""
Embed document shape and platform limits.

The validator works on raw parsed JSON, so these TypedDicts describe the
expected shape rather than enforce it.
"""

from typing import Literal, TypedDict

from typing_extensions import NotRequired


class EmbedFooter(TypedDict, total=False):
    text: str
    icon_url: str


class EmbedMedia(TypedDict, total=False):
    url: str


class EmbedAuthor(TypedDict, total=False):
    name: str
    url: str
    icon_url: str


class EmbedField(TypedDict):
    name: str
    value: str
    inline: NotRequired[bool]


EmbedType = Literal["rich", "image", "video", "gifv", "article", "link"]


class EmbedPayload(TypedDict, total=False):
    title: str
    type: EmbedType
    description: str
    url: str
    timestamp: str
    color: int
    footer: EmbedFooter
    image: EmbedMedia
    thumbnail: EmbedMedia
    author: EmbedAuthor
    fields: list[EmbedField]


# Top-level keys the validator recognizes; anything else is only a warning
VALID_KEYS: tuple[str, ...] = (
    "title",
    "type",
    "description",
    "url",
    "timestamp",
    "color",
    "footer",
    "image",
    "thumbnail",
    "author",
    "fields",
)

# Reference: https://discord.com/developers/docs/resources/message#embed-object-embed-limits
EMBED_LIMITS = {
    "title": 256,
    "description": 4096,
    "fields": 25,
    "field_name": 256,
    "field_value": 1024,
    "footer_text": 2048,
    "author_name": 256,
    "total_chars": 6000,
}

MAX_COLOR = 0xFFFFFF

SUPPORTED_IMAGE_TYPES: frozenset[str] = frozenset(
    {"image/png", "image/jpeg", "image/gif", "image/webp"}
)
