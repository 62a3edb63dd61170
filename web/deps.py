"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from core.settings import Settings
from services.auth_tokens import SessionTokenService
from web.middleware.auth_context import AuthenticatedUser


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> SessionTokenService:
    return request.app.state.token_service


def get_current_user(request: Request) -> AuthenticatedUser:
    user = getattr(request.state, "user", None)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "auth.required", "message": "Authentication required."},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def ensure_owner(settings: Settings, user: AuthenticatedUser, owner_id: int) -> None:
    """Reject access to another user's content when ownership enforcement is switched on."""
    if settings.enforce_content_ownership and user.id != owner_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": "content.forbidden", "message": "You do not own this content."},
        )
