"""Username/password account flows: signup and login."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.auth.constants import USERNAME_MAX_LENGTH
from models.user import User
from services.auth.password import hash_password, verify_password
from services.auth_tokens import SessionTokenService

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."


class AuthServiceError(RuntimeError):
    """Account flow failure carrying an API error code and HTTP status."""

    def __init__(self, code: str, message: str, status_code: int):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


@dataclass(frozen=True)
class RegisterResult:
    user_id: int
    username: str


@dataclass(frozen=True)
class LoginResult:
    token: str
    expires_in: int
    user_id: int
    username: str


def _read_credentials(payload: Mapping[str, Any]) -> tuple[str, str]:
    username = payload.get("username")
    password = payload.get("password")
    if not isinstance(username, str) or not username.strip():
        raise AuthServiceError("auth.invalid_payload", "Username and password are required.", 400)
    if not isinstance(password, str) or not password:
        raise AuthServiceError("auth.invalid_payload", "Username and password are required.", 400)
    # Usernames are case-sensitive; only surrounding whitespace is dropped.
    username = username.strip()
    if len(username) > USERNAME_MAX_LENGTH:
        raise AuthServiceError(
            "auth.invalid_payload",
            f"Username must be at most {USERNAME_MAX_LENGTH} characters.",
            400,
        )
    return username, password


def _find_user(session: Session, username: str) -> Optional[User]:
    return session.query(User).filter(User.username == username).first()


class RegisterUserUseCase:
    """Creates a user; the unique index on username is the authoritative duplicate guard."""

    def __init__(self, session: Session, payload: Mapping[str, Any]):
        self.session = session
        self.payload = payload

    def execute(self) -> RegisterResult:
        username, password = _read_credentials(self.payload)
        if _find_user(self.session, username) is not None:
            raise self._conflict(username)

        user = User(username=username, password_hash=hash_password(password))
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise self._conflict(username) from exc
        self.session.refresh(user)
        logger.info("Registered user id=%s", user.id)
        return RegisterResult(user_id=user.id, username=user.username)

    @staticmethod
    def _conflict(username: str) -> AuthServiceError:
        logger.info("Signup rejected: username already exists (%s)", username)
        return AuthServiceError("auth.username_taken", "Username already exists.", 409)


class LoginUserUseCase:
    """Checks credentials and issues a session token."""

    def __init__(self, session: Session, payload: Mapping[str, Any], tokens: SessionTokenService):
        self.session = session
        self.payload = payload
        self.tokens = tokens

    def execute(self) -> LoginResult:
        username, password = _read_credentials(self.payload)
        user = _find_user(self.session, username)
        # Unknown users and wrong passwords share one response.
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed for username=%s", username)
            raise AuthServiceError("auth.invalid_credentials", _INVALID_CREDENTIALS_MESSAGE, 401)

        issued = self.tokens.issue(user.id, user.username)
        logger.info("Login succeeded for user id=%s", user.id)
        return LoginResult(
            token=issued.token,
            expires_in=issued.expires_in,
            user_id=user.id,
            username=user.username,
        )


def register_user(session: Session, payload: Mapping[str, Any]) -> RegisterResult:
    return RegisterUserUseCase(session, payload).execute()


def login_user(session: Session, payload: Mapping[str, Any], tokens: SessionTokenService) -> LoginResult:
    return LoginUserUseCase(session, payload, tokens).execute()
