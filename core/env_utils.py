"""Helper for loading an optional .env file."""

from __future__ import annotations

from pathlib import Path
from dotenv import load_dotenv

from core.logging import get_logger

logger = get_logger(__name__)


def load_dotenv_if_available(path: Path | None = None) -> bool:
    """Load variables from a .env file when it exists; real env vars win."""

    env_path = path or Path(".env")
    if not env_path.exists():
        return False
    load_dotenv(dotenv_path=env_path, override=False)
    logger.debug("Loaded environment variables from %s", env_path)
    return True


__all__ = ["load_dotenv_if_available"]
