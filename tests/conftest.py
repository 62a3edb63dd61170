import os
from pathlib import Path
from typing import Callable, Dict, Generator, Iterator, Tuple

os.environ.setdefault("APP_ENV", "test")
# Cheap Argon2 parameters keep the suite fast; production defaults live in services.auth.password.
os.environ.setdefault("AUTH_ARGON2_TIME_COST", "1")
os.environ.setdefault("AUTH_ARGON2_MEMORY_COST", "8192")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from core.settings import Settings
from database import Database
from web.main import create_app

TEST_JWT_SECRET = "unit-test-secret-0123456789abcdefghijklmnop"


def make_settings(database_url: str, **overrides) -> Settings:
    values = {
        "database_url": database_url,
        "jwt_secret": TEST_JWT_SECRET,
        "environment": "test",
        "share_base_url": "http://testserver",
        "db_connect_attempts": 1,
        "db_connect_retry_seconds": 0.0,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    return f"sqlite+pysqlite:///{tmp_path / 'brain.db'}"


@pytest.fixture()
def database(database_url: str) -> Generator[Database, None, None]:
    handle = Database.from_url(database_url)
    handle.create_schema()
    try:
        yield handle
    finally:
        handle.dispose()


@pytest.fixture()
def db_session(database: Database) -> Generator[Session, None, None]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app_factory(database: Database, database_url: str) -> Callable[..., FastAPI]:
    def build(**overrides) -> FastAPI:
        return create_app(make_settings(database_url, **overrides), database=database, bootstrap_database=False)

    return build


@pytest.fixture()
def client(app_factory: Callable[..., FastAPI]) -> Iterator[TestClient]:
    test_client = TestClient(app_factory())
    try:
        yield test_client
    finally:
        test_client.close()


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client: TestClient, username: str, password: str) -> Tuple[int, Dict[str, str]]:
    """Sign up and log in; return the user id and ready-to-use auth headers."""
    signup = client.post("/signup", json={"username": username, "password": password})
    assert signup.status_code == 201, signup.text
    login = client.post("/login", json={"username": username, "password": password})
    assert login.status_code == 200, login.text
    return signup.json()["id"], bearer(login.json()["token"])
