"""Database handle: engine, session factory and the FastAPI session dependency."""

import time
from dataclasses import dataclass
from typing import Callable, Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite URLs get thread sharing and FK enforcement."""
    connect_args = {}
    engine_kwargs = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args["check_same_thread"] = False
        if ":memory:" in database_url:
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, connect_args=connect_args, **engine_kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@dataclass
class Database:
    """Explicit handle on the connection pool, attached to ``app.state.database``."""

    engine: Engine
    session_factory: sessionmaker

    @classmethod
    def from_url(cls, database_url: str) -> "Database":
        engine = build_engine(database_url)
        factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
        return cls(engine=engine, session_factory=factory)

    def session(self) -> Session:
        return self.session_factory()

    def ping(self) -> Optional[str]:
        """Run ``SELECT 1``; return None when healthy, else the error message."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            return str(exc)
        return None

    def wait_until_ready(
        self,
        *,
        attempts: int = 5,
        delay_seconds: float = 5.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Ping the store until it answers; raise RuntimeError after ``attempts`` failures."""
        for attempt in range(1, attempts + 1):
            error = self.ping()
            if error is None:
                logger.info("Database connected after %d attempt(s).", attempt)
                return
            logger.warning(
                "Database connection attempt %d/%d failed: %s",
                attempt,
                attempts,
                error,
            )
            if attempt < attempts:
                sleep(delay_seconds)
        raise RuntimeError(f"Failed to connect to database after {attempts} attempts")

    def create_schema(self) -> None:
        import models  # noqa: F401  registers tables on Base.metadata

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables initialised.")

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request, closed on every exit path."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
