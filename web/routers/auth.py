"""Username/password signup and login endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.api.auth import AuthUserSchema, LoginRequest, LoginResponse, SignupRequest, SignupResponse
from services.auth import AuthServiceError, login_user, register_user
from services.auth_tokens import SessionTokenService
from web.deps import get_token_service

router = APIRouter(tags=["Auth"])


def _raise(exc: AuthServiceError) -> None:
    raise HTTPException(
        status_code=exc.status_code,
        detail={"code": exc.code, "message": str(exc)},
    ) from exc


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> SignupResponse:
    try:
        result = register_user(db, payload.model_dump())
    except AuthServiceError as exc:
        _raise(exc)
    return SignupResponse(id=result.user_id, username=result.username)


@router.post("/login", response_model=LoginResponse, summary="Exchange credentials for a bearer token")
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    tokens: SessionTokenService = Depends(get_token_service),
) -> LoginResponse:
    try:
        result = login_user(db, payload.model_dump(), tokens)
    except AuthServiceError as exc:
        _raise(exc)
    return LoginResponse(
        token=result.token,
        expiresIn=result.expires_in,
        user=AuthUserSchema(id=result.user_id, username=result.username),
    )


__all__ = ["router"]
