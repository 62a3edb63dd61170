"""Argon2 password hashing."""

from __future__ import annotations

import logging

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from core.env import env_int

logger = logging.getLogger(__name__)

_ARGON_TIME_COST = env_int("AUTH_ARGON2_TIME_COST", 3, minimum=1)
_ARGON_MEMORY_COST = env_int("AUTH_ARGON2_MEMORY_COST", 65536, minimum=8192)
_ARGON_PARALLELISM = env_int("AUTH_ARGON2_PARALLELISM", 1, minimum=1)

_PASSWORD_HASHER = PasswordHasher(
    time_cost=_ARGON_TIME_COST,
    memory_cost=_ARGON_MEMORY_COST,
    parallelism=_ARGON_PARALLELISM,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """Return an Argon2id digest; a new salt is drawn on every call."""
    return _PASSWORD_HASHER.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Return True only when ``password`` reproduces ``password_hash``."""
    try:
        return _PASSWORD_HASHER.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError, UnicodeError) as exc:
        logger.warning("Stored password hash could not be verified: %s", exc)
        return False


__all__ = ["hash_password", "verify_password"]
