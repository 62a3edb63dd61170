"""Pydantic schemas for username/password authentication API."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from core.auth.constants import USERNAME_MAX_LENGTH


class CredentialsRequest(BaseModel):
    username: str = Field(..., max_length=USERNAME_MAX_LENGTH, description="Case-sensitive username.")
    password: str = Field(..., description="Plaintext password (Argon2 hash target).")


class SignupRequest(CredentialsRequest):
    pass


class LoginRequest(CredentialsRequest):
    pass


class AuthUserSchema(BaseModel):
    id: int
    username: str


class SignupResponse(AuthUserSchema):
    pass


class LoginResponse(BaseModel):
    token: str
    expiresIn: int = Field(..., description="Token lifetime in seconds.")
    user: AuthUserSchema


class UserSummarySchema(BaseModel):
    id: int
    username: str
    created_at: Optional[datetime] = None


class UserListResponse(BaseModel):
    users: List[UserSummarySchema]
