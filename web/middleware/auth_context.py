"""Attach authenticated user information from Authorization headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse

from core.auth.constants import BEARER_PREFIX
from core.logging import get_logger
from services.auth_tokens import AuthTokenError, SessionTokenService

logger = get_logger(__name__)

_PUBLIC_PATHS = frozenset({"/", "/healthz", "/signup", "/login"})
_PUBLIC_PREFIXES = (
    "/api/v1/brain/shared/",
    "/docs",
    "/redoc",
    "/openapi",
)

_INVALID_TOKEN_DETAIL = {"code": "auth.token_invalid", "message": "Invalid or expired token."}


@dataclass(frozen=True)
class AuthenticatedUser:
    id: int
    username: str


def is_public_path(path: str) -> bool:
    path = path or ""
    if path in _PUBLIC_PATHS or path.rstrip("/") in _PUBLIC_PATHS:
        return True
    return any(path.startswith(prefix) for prefix in _PUBLIC_PREFIXES)


def extract_bearer(header_value: Optional[str]) -> Optional[str]:
    if not header_value:
        return None
    value = header_value.strip()
    if value.lower().startswith(BEARER_PREFIX):
        token = value[len(BEARER_PREFIX):].strip()
        return token or None
    return None


async def auth_context_middleware(request: Request, call_next):
    """Verify bearer tokens on protected paths and expose the caller on ``request.state.user``.

    A missing token passes through; ``web.deps.get_current_user`` answers 401
    for protected routes. A token that fails verification is answered with 403
    here, without saying which check failed.
    """
    request.state.user = None
    path = request.url.path if request.url else ""
    if request.method == "OPTIONS" or is_public_path(path):
        return await call_next(request)

    token = extract_bearer(request.headers.get("authorization"))
    if not token:
        return await call_next(request)

    tokens: SessionTokenService = request.app.state.token_service
    try:
        identity = tokens.verify(token)
    except AuthTokenError as exc:
        logger.info("Rejected bearer token on %s %s (%s)", request.method, path, exc.code)
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content=dict(_INVALID_TOKEN_DETAIL))

    request.state.user = AuthenticatedUser(id=identity.user_id, username=identity.username)
    return await call_next(request)


__all__ = ["AuthenticatedUser", "auth_context_middleware", "extract_bearer", "is_public_path"]
