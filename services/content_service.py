"""Persistence helpers for saved links."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from core.content_types import SUPPORTED_CONTENT_TYPE_VALUES, parse_content_type
from models.content import Content
from models.user import User
from services.media_links import describe_embed

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255
_VALID_TYPES_TEXT = ", ".join(SUPPORTED_CONTENT_TYPE_VALUES)


class ContentServiceError(RuntimeError):
    def __init__(self, code: str, message: str, status_code: int):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


@dataclass(frozen=True)
class DeletedContent:
    id: int
    title: str


def _require_text(payload: Mapping[str, Any], field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ContentServiceError("content.invalid_payload", f"Field '{field}' is required.", 400)
    return value.strip()


def _require_user_id(payload: Mapping[str, Any]) -> int:
    value = payload.get("user_id")
    if value is None or isinstance(value, bool):
        raise ContentServiceError("content.invalid_payload", "Field 'user_id' is required.", 400)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ContentServiceError("content.invalid_payload", "Field 'user_id' must be an integer.", 400) from exc


def invalid_content_type_error(value: Any) -> ContentServiceError:
    return ContentServiceError(
        "content.invalid_type",
        f"Invalid content_type '{value}'. Valid types are: {_VALID_TYPES_TEXT}.",
        400,
    )


def create_content(session: Session, payload: Mapping[str, Any]) -> Content:
    """Validate and insert a new content row owned by ``payload['user_id']``."""
    title = _require_text(payload, "title")
    link = _require_text(payload, "link")
    _require_text(payload, "content_type")
    user_id = _require_user_id(payload)

    raw_type = payload["content_type"]
    content_type = parse_content_type(raw_type)
    if content_type is None:
        raise invalid_content_type_error(raw_type)
    if len(title) > MAX_TITLE_LENGTH:
        raise ContentServiceError(
            "content.invalid_payload",
            f"Title must be at most {MAX_TITLE_LENGTH} characters.",
            400,
        )
    if session.get(User, user_id) is None:
        raise ContentServiceError("content.owner_not_found", "Owner user does not exist.", 404)

    content = Content(title=title, link=link, content_type=content_type.value, user_id=user_id)
    session.add(content)
    session.commit()
    session.refresh(content)
    logger.info("Created content id=%s type=%s for user id=%s", content.id, content.content_type, user_id)
    return content


def get_content(session: Session, content_id: int) -> Optional[Content]:
    return session.get(Content, content_id)


def list_contents(session: Session, user_id: int, content_type: Optional[str] = None) -> List[Content]:
    """Return contents owned by ``user_id``, newest first, optionally narrowed to one type."""
    query = session.query(Content).filter(Content.user_id == user_id)
    if content_type:
        parsed = parse_content_type(content_type)
        if parsed is None:
            raise invalid_content_type_error(content_type)
        query = query.filter(Content.content_type == parsed.value)
    return query.order_by(Content.created_at.desc(), Content.id.desc()).all()


def delete_content(session: Session, content_id: int) -> DeletedContent:
    """Delete a content row and, through the cascade, its share links."""
    content = session.get(Content, content_id)
    if content is None:
        raise ContentServiceError("content.not_found", "Content not found.", 404)
    deleted = DeletedContent(id=content.id, title=content.title)
    session.delete(content)
    session.commit()
    logger.info("Deleted content id=%s", deleted.id)
    return deleted


def serialize_content(content: Content) -> Dict[str, Any]:
    return {
        "id": content.id,
        "title": content.title,
        "link": content.link,
        "content_type": content.content_type,
        "user_id": content.user_id,
        "created_at": content.created_at,
        "updated_at": content.updated_at,
        "embed": describe_embed(content.content_type, content.link),
    }


__all__ = [
    "ContentServiceError",
    "DeletedContent",
    "create_content",
    "delete_content",
    "get_content",
    "invalid_content_type_error",
    "list_contents",
    "serialize_content",
]
