"""Auth service submodule exports."""

from __future__ import annotations

from .common import (
    AuthServiceError,
    LoginResult,
    RegisterResult,
    login_user,
    register_user,
)
from .password import hash_password, verify_password

__all__ = [
    "AuthServiceError",
    "LoginResult",
    "RegisterResult",
    "hash_password",
    "login_user",
    "register_user",
    "verify_password",
]
