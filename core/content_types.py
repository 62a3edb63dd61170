"""Closed set of content types a stored link can be tagged with."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence


class ContentType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    ARTICLE = "article"
    AUDIO = "audio"
    DOCUMENT = "document"
    TWITTER = "twitter"

    def __str__(self) -> str:  # pragma: no cover - convenience
        return self.value


SUPPORTED_CONTENT_TYPE_VALUES: Sequence[str] = tuple(item.value for item in ContentType)


def parse_content_type(value: Optional[str]) -> Optional[ContentType]:
    """Return the ContentType whose value is exactly ``value``, or None."""
    if not isinstance(value, str):
        return None
    try:
        return ContentType(value)
    except ValueError:
        return None


__all__ = [
    "ContentType",
    "SUPPORTED_CONTENT_TYPE_VALUES",
    "parse_content_type",
]
