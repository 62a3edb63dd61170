"""Centralized constants for authentication flows."""

from __future__ import annotations

BEARER_PREFIX = "bearer "
USERNAME_MAX_LENGTH = 100

__all__ = ["BEARER_PREFIX", "USERNAME_MAX_LENGTH"]
