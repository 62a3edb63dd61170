"""Issue and verify stateless session tokens (JWT)."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from core.settings import DEFAULT_ACCESS_TOKEN_TTL_SECONDS, Settings


class AuthTokenError(RuntimeError):
    """Raised when a session token cannot be trusted."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class TokenIdentity:
    user_id: int
    username: str


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime
    expires_in: int


class SessionTokenService:
    """Signs identity claims with a shared secret; verification never touches storage."""

    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int = DEFAULT_ACCESS_TOKEN_TTL_SECONDS,
        algorithm: str = "HS256",
        issuer: str = "second-brain",
        audience: str = "second-brain-dashboard",
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionTokenService":
        return cls(
            settings.jwt_secret,
            ttl_seconds=settings.access_token_ttl_seconds,
            algorithm=settings.jwt_algorithm,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )

    def issue(self, user_id: int, username: str, *, now: Optional[datetime] = None) -> IssuedToken:
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(seconds=self.ttl_seconds)
        payload: Dict[str, Any] = {
            "sub": str(user_id),
            "username": username,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid.uuid4()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_at=expires_at, expires_in=self.ttl_seconds)

    def verify(self, token: str) -> TokenIdentity:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthTokenError("auth.token_expired", "Token has expired.") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthTokenError("auth.token_invalid", "Token verification failed.") from exc

        username = payload.get("username")
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise AuthTokenError("auth.token_invalid", "Token subject is malformed.") from exc
        if not isinstance(username, str) or not username:
            raise AuthTokenError("auth.token_invalid", "Token is missing the username claim.")
        return TokenIdentity(user_id=user_id, username=username)


__all__ = [
    "AuthTokenError",
    "IssuedToken",
    "SessionTokenService",
    "TokenIdentity",
]
