"""Runtime configuration for the Second Brain API.

``Settings`` is the single configuration object accepted by ``create_app``.
``load_settings`` reads it from the environment (and an optional ``.env``);
tests construct it directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy.engine import URL

from core.env import env_bool, env_float, env_int, env_list, env_str
from core.env_utils import load_dotenv_if_available
from core.logging import get_logger

logger = get_logger(__name__)

DEVELOPMENT_ENVIRONMENTS = frozenset({"development", "dev", "local", "test"})
DEV_FALLBACK_JWT_SECRET = "second-brain-insecure-dev-secret"
DEFAULT_ACCESS_TOKEN_TTL_SECONDS = 60 * 60 * 24
DEFAULT_SHARE_LINK_TTL_DAYS = 30


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str
    environment: str = "development"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "second-brain"
    jwt_audience: str = "second-brain-dashboard"
    access_token_ttl_seconds: int = DEFAULT_ACCESS_TOKEN_TTL_SECONDS
    share_link_ttl_days: int = DEFAULT_SHARE_LINK_TTL_DAYS
    share_base_url: str = "http://localhost:3001"
    cors_origins: Tuple[str, ...] = ("http://localhost:3000",)
    db_connect_attempts: int = 5
    db_connect_retry_seconds: float = 5.0
    enforce_content_ownership: bool = False

    @property
    def is_development(self) -> bool:
        return self.environment in DEVELOPMENT_ENVIRONMENTS


def _database_url_from_parts() -> str:
    url = URL.create(
        drivername="postgresql+psycopg2",
        username=env_str("DB_USER", "postgres"),
        password=env_str("DB_PASSWORD", "postgres"),
        host=env_str("DB_HOST", "postgres"),
        port=env_int("DB_PORT", 5432, minimum=1),
        database=env_str("DB_NAME", "brainley"),
    )
    return url.render_as_string(hide_password=False)


def _resolve_jwt_secret(environment: str) -> str:
    secret = env_str("AUTH_JWT_SECRET") or env_str("AUTH_SECRET")
    if secret:
        return secret
    if environment not in DEVELOPMENT_ENVIRONMENTS:
        raise RuntimeError(
            f"AUTH_JWT_SECRET must be set when APP_ENV={environment}. "
            "Refusing to start with the development signing secret."
        )
    logger.warning("AUTH_JWT_SECRET not set; using the insecure development secret (APP_ENV=%s).", environment)
    return DEV_FALLBACK_JWT_SECRET


def load_settings(*, load_dotenv: bool = True, environment: Optional[str] = None) -> Settings:
    """Build Settings from environment variables; raises when the secret is missing outside development."""
    if load_dotenv:
        load_dotenv_if_available()

    env_name = (environment or env_str("APP_ENV", "development") or "development").lower()
    database_url = env_str("DATABASE_URL") or _database_url_from_parts()
    share_base_url = (env_str("SHARE_BASE_URL", "http://localhost:3001") or "").rstrip("/")

    return Settings(
        database_url=database_url,
        jwt_secret=_resolve_jwt_secret(env_name),
        environment=env_name,
        jwt_algorithm=env_str("AUTH_JWT_ALG", "HS256") or "HS256",
        access_token_ttl_seconds=env_int(
            "AUTH_ACCESS_TOKEN_TTL_SECONDS", DEFAULT_ACCESS_TOKEN_TTL_SECONDS, minimum=60
        ),
        share_link_ttl_days=env_int("SHARE_LINK_TTL_DAYS", DEFAULT_SHARE_LINK_TTL_DAYS, minimum=1),
        share_base_url=share_base_url,
        cors_origins=env_list("CORS_ORIGINS", ("http://localhost:3000",)),
        db_connect_attempts=env_int("DB_CONNECT_ATTEMPTS", 5, minimum=1),
        db_connect_retry_seconds=env_float("DB_CONNECT_RETRY_SECONDS", 5.0, minimum=0.0),
        enforce_content_ownership=env_bool("ENFORCE_CONTENT_OWNERSHIP", False),
    )


__all__ = ["DEV_FALLBACK_JWT_SECRET", "Settings", "load_settings"]
