"""Auth-related shared utilities."""

from .constants import BEARER_PREFIX, USERNAME_MAX_LENGTH

__all__ = ["BEARER_PREFIX", "USERNAME_MAX_LENGTH"]
