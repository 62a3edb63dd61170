"""Extract embeddable ids from video and tweet links."""

from __future__ import annotations

import re
from typing import Dict, Optional

_YOUTUBE_PATTERNS = (
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?(?:.*&)?v=([^&#]+)", re.IGNORECASE),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/embed/([^/?#]+)", re.IGNORECASE),
    re.compile(r"(?:https?://)?(?:www\.)?youtu\.be/([^/?#]+)", re.IGNORECASE),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/shorts/([^/?#]+)", re.IGNORECASE),
)
_TWEET_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?(?:twitter|x)\.com/\w+/status/(\d+)",
    re.IGNORECASE,
)


def youtube_video_id(url: str) -> Optional[str]:
    for pattern in _YOUTUBE_PATTERNS:
        match = pattern.search(url or "")
        if match and match.group(1):
            return match.group(1)
    return None


def tweet_id(url: str) -> Optional[str]:
    match = _TWEET_PATTERN.search(url or "")
    return match.group(1) if match else None


def describe_embed(content_type: str, link: str) -> Optional[Dict[str, str]]:
    """Return ``{"provider", "id"}`` when the link can be rendered inline."""
    if content_type == "video":
        video_id = youtube_video_id(link)
        if video_id:
            return {"provider": "youtube", "id": video_id}
    if content_type == "twitter":
        status_id = tweet_id(link)
        if status_id:
            return {"provider": "twitter", "id": status_id}
    return None


__all__ = ["describe_embed", "tweet_id", "youtube_video_id"]
