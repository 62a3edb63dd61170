"""Service layer for share link operations."""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from core.settings import DEFAULT_SHARE_LINK_TTL_DAYS
from models.content import Content
from models.share_link import ShareLink

logger = logging.getLogger(__name__)

TOKEN_BYTES = 16
_NOT_FOUND_MESSAGE = "Share link not found or expired."


class ShareLinkError(RuntimeError):
    def __init__(self, code: str, message: str, status_code: int):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _generate_token() -> str:
    """Generate a 128-bit cryptographically secure hex token."""
    return secrets.token_hex(TOKEN_BYTES)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from stores that drop tzinfo."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def create_share_link(
    db: Session,
    content_id: int,
    *,
    expires_in_days: Optional[int] = DEFAULT_SHARE_LINK_TTL_DAYS,
    now: Optional[datetime] = None,
) -> ShareLink:
    """Create a share link for an existing content row.

    Args:
        db: Database session
        content_id: ID of the content being shared
        expires_in_days: Days until the link expires (None = never expires)
        now: Reference time for the expiry, defaults to the current UTC time

    Returns:
        ShareLink: The created share link

    Raises:
        ShareLinkError: when the content does not exist
    """
    if db.get(Content, content_id) is None:
        raise ShareLinkError("share.content_not_found", "Content not found.", 404)

    token = _generate_token()
    while db.query(ShareLink).filter(ShareLink.token == token).first():
        token = _generate_token()

    issued_at = now or _now()
    expires_at = None
    if expires_in_days is not None:
        expires_at = issued_at + timedelta(days=expires_in_days)

    share_link = ShareLink(
        token=token,
        content_id=content_id,
        created_at=issued_at,
        expires_at=expires_at,
    )

    db.add(share_link)
    db.commit()
    db.refresh(share_link)
    logger.info("Created share link id=%s for content id=%s", share_link.id, content_id)

    return share_link


def get_share_link(db: Session, token: str, *, now: Optional[datetime] = None) -> Optional[ShareLink]:
    """Retrieve a live share link by token.

    Unknown and expired tokens both return None; only the log tells them apart.
    """
    if not token:
        return None
    reference = now or _now()
    share_link = (
        db.query(ShareLink)
        .filter(
            ShareLink.token == token,
            or_(ShareLink.expires_at.is_(None), ShareLink.expires_at > reference),
        )
        .first()
    )
    if share_link is None:
        if db.query(ShareLink.id).filter(ShareLink.token == token).first():
            logger.info("Share link resolution refused: token expired")
        else:
            logger.info("Share link resolution refused: unknown token")
    return share_link


def resolve_shared_content(
    db: Session,
    token: str,
    *,
    now: Optional[datetime] = None,
) -> Tuple[ShareLink, Content]:
    """Return the live share link and its content; no ownership check is made."""
    share_link = get_share_link(db, token, now=now)
    if share_link is None or share_link.content is None:
        raise ShareLinkError("share.not_found", _NOT_FOUND_MESSAGE, 404)
    return share_link, share_link.content


__all__ = [
    "ShareLinkError",
    "as_utc",
    "create_share_link",
    "get_share_link",
    "resolve_shared_content",
]
