import pytest
from sqlalchemy.orm import Session

from models.user import User
from services.auth import AuthServiceError, register_user
from services.auth import common as auth_common


def test_register_user_persists_hashed_password(db_session: Session) -> None:
    result = register_user(db_session, {"username": "alice", "password": "pw123"})

    stored = db_session.get(User, result.user_id)
    assert stored is not None
    assert stored.username == "alice"
    assert stored.password_hash != "pw123"


def test_unique_index_catches_signup_that_slips_past_lookup(
    db_session: Session, monkeypatch: pytest.MonkeyPatch
) -> None:
    register_user(db_session, {"username": "alice", "password": "pw123"})
    # Another request inserted the same username between our lookup and commit.
    monkeypatch.setattr(auth_common, "_find_user", lambda session, username: None)

    with pytest.raises(AuthServiceError) as exc:
        register_user(db_session, {"username": "alice", "password": "other"})

    assert exc.value.status_code == 409
    assert exc.value.code == "auth.username_taken"

    monkeypatch.undo()
    bob = register_user(db_session, {"username": "bob", "password": "pw456"})
    assert db_session.query(User).count() == 2
    assert db_session.get(User, bob.user_id).username == "bob"
