from typing import List

import pytest
from fastapi.testclient import TestClient

from conftest import make_settings
from database import Database
from web.main import create_app


def test_wait_until_ready_retries_then_succeeds(monkeypatch: pytest.MonkeyPatch) -> None:
    database = Database.from_url("sqlite+pysqlite:///:memory:")
    outcomes = iter(["refused", "refused", None])
    monkeypatch.setattr(database, "ping", lambda: next(outcomes))
    sleeps: List[float] = []

    database.wait_until_ready(attempts=5, delay_seconds=2.5, sleep=sleeps.append)

    assert sleeps == [2.5, 2.5]


def test_wait_until_ready_gives_up_after_attempts(monkeypatch: pytest.MonkeyPatch) -> None:
    database = Database.from_url("sqlite+pysqlite:///:memory:")
    monkeypatch.setattr(database, "ping", lambda: "connection refused")
    sleeps: List[float] = []

    with pytest.raises(RuntimeError, match="after 3 attempts"):
        database.wait_until_ready(attempts=3, delay_seconds=1.0, sleep=sleeps.append)

    assert len(sleeps) == 2


def test_sqlite_foreign_keys_are_enforced(database: Database) -> None:
    with database.engine.connect() as connection:
        assert connection.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1


def test_startup_bootstraps_schema(tmp_path) -> None:
    url = f"sqlite+pysqlite:///{tmp_path / 'startup.db'}"
    app = create_app(make_settings(url), database=Database.from_url(url))

    with TestClient(app) as client:
        assert client.get("/healthz").json()["status"] == "ok"
        signup = client.post("/signup", json={"username": "alice", "password": "pw123"})
        assert signup.status_code == 201
