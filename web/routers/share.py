"""API endpoints for share link functionality."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.settings import Settings
from database import get_db
from schemas.api.content import ContentSchema
from schemas.api.share import (
    ShareCreateRequest,
    ShareCreateResponse,
    SharedContentResponse,
    ShareMetadataSchema,
)
from services import content_service, share_link_service
from services.share_link_service import ShareLinkError, as_utc
from web.deps import ensure_owner, get_current_user, get_settings
from web.middleware.auth_context import AuthenticatedUser

router = APIRouter(prefix="/brain", tags=["Share"])


def _raise(exc: ShareLinkError) -> None:
    raise HTTPException(
        status_code=exc.status_code,
        detail={"code": exc.code, "message": str(exc)},
    ) from exc


def build_share_url(settings: Settings, token: str) -> str:
    return f"{settings.share_base_url}/api/v1/brain/shared/{token}"


# Authenticated endpoint
@router.post(
    "/share",
    response_model=ShareCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a public share link for a saved link",
)
def create_share_link(
    payload: ShareCreateRequest,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> ShareCreateResponse:
    if settings.enforce_content_ownership:
        content = content_service.get_content(db, payload.contentId)
        if content is not None:
            ensure_owner(settings, user, content.user_id)
    try:
        share_link = share_link_service.create_share_link(
            db,
            payload.contentId,
            expires_in_days=settings.share_link_ttl_days,
        )
    except ShareLinkError as exc:
        _raise(exc)

    return ShareCreateResponse(
        shareUrl=build_share_url(settings, share_link.token),
        token=share_link.token,
        expiresAt=as_utc(share_link.expires_at),
    )


# Public endpoint (no authentication required)
@router.get(
    "/shared/{share_token}",
    response_model=SharedContentResponse,
    summary="Read shared content",
)
def get_shared_content(share_token: str, db: Session = Depends(get_db)) -> SharedContentResponse:
    try:
        share_link, content = share_link_service.resolve_shared_content(db, share_token)
    except ShareLinkError as exc:
        _raise(exc)

    return SharedContentResponse(
        content=ContentSchema(**content_service.serialize_content(content)),
        share=ShareMetadataSchema(
            token=share_link.token,
            createdAt=as_utc(share_link.created_at),
            expiresAt=as_utc(share_link.expires_at),
        ),
    )


__all__ = ["router"]
