"""User data access helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from models.user import User


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    created_at: Optional[datetime]


def _to_record(user: User) -> UserRecord:
    return UserRecord(id=user.id, username=user.username, created_at=user.created_at)


def list_users(session: Session) -> List[UserRecord]:
    """Return every user ordered by id; password hashes are never loaded into the result."""

    users = session.query(User).order_by(User.id).all()
    return [_to_record(user) for user in users]


__all__ = ["UserRecord", "list_users"]
