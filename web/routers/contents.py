"""Saved content endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.settings import Settings
from database import get_db
from schemas.api.content import (
    ContentCreateRequest,
    ContentCreateResponse,
    ContentDeleteResponse,
    ContentListResponse,
    ContentSchema,
)
from services import content_service
from services.content_service import ContentServiceError
from web.deps import ensure_owner, get_current_user, get_settings
from web.middleware.auth_context import AuthenticatedUser

router = APIRouter(prefix="/contents", tags=["Contents"])


def _raise(exc: ContentServiceError) -> None:
    raise HTTPException(
        status_code=exc.status_code,
        detail={"code": exc.code, "message": str(exc)},
    ) from exc


@router.post(
    "",
    response_model=ContentCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a link",
)
def create_content(
    payload: ContentCreateRequest,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> ContentCreateResponse:
    ensure_owner(settings, user, payload.user_id)
    try:
        content = content_service.create_content(db, payload.model_dump())
    except ContentServiceError as exc:
        _raise(exc)
    return ContentCreateResponse(content=ContentSchema(**content_service.serialize_content(content)))


@router.get(
    "/{user_id}",
    response_model=ContentListResponse,
    summary="List links owned by a user",
)
def list_contents(
    user_id: int,
    content_type: Optional[str] = Query(default=None, description="Only return this content type."),
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> ContentListResponse:
    # The path id is a user id, not a content id.
    ensure_owner(settings, user, user_id)
    try:
        contents = content_service.list_contents(db, user_id, content_type=content_type)
    except ContentServiceError as exc:
        _raise(exc)
    return ContentListResponse(
        contents=[ContentSchema(**content_service.serialize_content(item)) for item in contents]
    )


@router.delete(
    "/{content_id}",
    response_model=ContentDeleteResponse,
    summary="Delete a link and its share links",
)
def delete_content(
    content_id: int,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> ContentDeleteResponse:
    if settings.enforce_content_ownership:
        existing = content_service.get_content(db, content_id)
        if existing is not None:
            ensure_owner(settings, user, existing.user_id)
    try:
        deleted = content_service.delete_content(db, content_id)
    except ContentServiceError as exc:
        _raise(exc)
    return ContentDeleteResponse(id=deleted.id, title=deleted.title)


__all__ = ["router"]
