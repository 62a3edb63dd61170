from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from core.env import env_int, env_str
from core.logging import get_logger
from core.settings import Settings, load_settings
from database import Database
from services.auth_tokens import SessionTokenService
from web import routers
from web.errors import register_exception_handlers
from web.middleware.auth_context import auth_context_middleware

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
    bootstrap_database: bool = True,
) -> FastAPI:
    """Build the API around an explicit Database handle and token service.

    ``bootstrap_database`` controls the startup connectivity wait and schema
    creation; tests that prepare their own schema turn it off.
    """
    settings = settings or load_settings()
    database = database or Database.from_url(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if bootstrap_database:
            database.wait_until_ready(
                attempts=settings.db_connect_attempts,
                delay_seconds=settings.db_connect_retry_seconds,
            )
            database.create_schema()
        try:
            yield
        finally:
            logger.info("Shutting down; disposing database engine.")
            database.dispose()

    app = FastAPI(
        title="Second Brain API",
        description="Bookmark links by content type and share them through expiring public links.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.token_service = SessionTokenService.from_settings(settings)

    @app.middleware("http")
    async def attach_auth_context(request: Request, call_next):
        """Verify bearer tokens before any protected handler runs."""
        return await auth_context_middleware(request, call_next)

    # Outermost: auth rejections carry CORS headers too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(routers.health.router)
    app.include_router(routers.auth.router)
    app.include_router(routers.users.router)
    app.include_router(routers.contents.router)
    app.include_router(routers.share.router, prefix="/api/v1")
    return app


def run() -> None:
    """Serve the API with uvicorn; HOST/PORT come from the environment."""
    uvicorn.run(
        "web.main:create_app",
        factory=True,
        host=env_str("HOST", "0.0.0.0") or "0.0.0.0",
        port=env_int("PORT", 3001, minimum=1),
    )


if __name__ == "__main__":
    run()
