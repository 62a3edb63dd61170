"""User directory endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from schemas.api.auth import UserListResponse, UserSummarySchema
from services import user_service
from web.deps import get_current_user
from web.middleware.auth_context import AuthenticatedUser

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=UserListResponse, summary="List registered users")
def read_users(
    db: Session = Depends(get_db),
    _user: AuthenticatedUser = Depends(get_current_user),
) -> UserListResponse:
    records = user_service.list_users(db)
    return UserListResponse(
        users=[
            UserSummarySchema(id=record.id, username=record.username, created_at=record.created_at)
            for record in records
        ]
    )


__all__ = ["router"]
