from typing import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from conftest import register_and_login
from services import content_service


def _create(client: TestClient, headers, user_id: int, **overrides):
    payload = {"title": "t", "link": "http://x", "content_type": "article", "user_id": user_id}
    payload.update(overrides)
    return client.post("/contents", json=payload, headers=headers)


def test_create_content_returns_created_row(client: TestClient) -> None:
    user_id, headers = register_and_login(client, "alice", "pw123")

    response = _create(client, headers, user_id)

    assert response.status_code == 201
    content = response.json()["content"]
    assert content["title"] == "t"
    assert content["link"] == "http://x"
    assert content["content_type"] == "article"
    assert content["user_id"] == user_id
    assert content["created_at"]


def test_create_content_requires_token(client: TestClient) -> None:
    user_id, _ = register_and_login(client, "alice", "pw123")
    assert _create(client, {}, user_id).status_code == 401


def test_invalid_content_type_is_rejected_with_valid_types(client: TestClient) -> None:
    user_id, headers = register_and_login(client, "alice", "pw123")

    response = _create(client, headers, user_id, content_type="pdf")

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "content.invalid_type"
    assert "image, video, article, audio, document, twitter" in body["message"]


def test_missing_field_is_bad_request(client: TestClient) -> None:
    _, headers = register_and_login(client, "alice", "pw123")

    response = client.post("/contents", json={"title": "t", "link": "http://x"}, headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "validation.invalid_payload"
    assert "content_type" in response.json()["message"]


def test_list_contents_by_user_id(client: TestClient) -> None:
    alice_id, alice_headers = register_and_login(client, "alice", "pw123")
    bob_id, bob_headers = register_and_login(client, "bob", "pw456")
    mine = _create(client, alice_headers, alice_id).json()["content"]
    _create(client, bob_headers, bob_id)

    response = client.get(f"/contents/{alice_id}", headers=alice_headers)

    assert response.status_code == 200
    assert [item["id"] for item in response.json()["contents"]] == [mine["id"]]


def test_list_contents_filters_by_type(client: TestClient) -> None:
    user_id, headers = register_and_login(client, "alice", "pw123")
    _create(client, headers, user_id)
    video = _create(client, headers, user_id, content_type="video", link="https://youtu.be/abc").json()["content"]

    response = client.get(f"/contents/{user_id}", params={"content_type": "video"}, headers=headers)

    assert response.status_code == 200
    contents = response.json()["contents"]
    assert [item["id"] for item in contents] == [video["id"]]
    assert contents[0]["embed"] == {"provider": "youtube", "id": "abc"}


def test_store_failure_is_internal_error(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    user_id, headers = register_and_login(client, "alice", "pw123")

    def broken(*_args, **_kwargs):
        raise OperationalError("SELECT * FROM contents", {}, Exception("connection lost"))

    monkeypatch.setattr(content_service, "list_contents", broken)
    response = client.get(f"/contents/{user_id}", headers=headers)

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "internal.store_error"
    assert "SELECT" not in body["message"]


def test_delete_content_returns_id_and_title(client: TestClient) -> None:
    user_id, headers = register_and_login(client, "alice", "pw123")
    content = _create(client, headers, user_id, title="Old link").json()["content"]

    response = client.delete(f"/contents/{content['id']}", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"id": content["id"], "title": "Old link"}
    assert client.get(f"/contents/{user_id}", headers=headers).json()["contents"] == []


def test_delete_missing_content_is_not_found(client: TestClient) -> None:
    _, headers = register_and_login(client, "alice", "pw123")

    response = client.delete("/contents/424242", headers=headers)

    assert response.status_code == 404
    assert response.json()["code"] == "content.not_found"


@pytest.mark.xfail(
    strict=True,
    reason="Known gap: delete does not check that the caller owns the content unless "
    "ENFORCE_CONTENT_OWNERSHIP is enabled.",
)
def test_delete_rejects_other_users_content_by_default(client: TestClient) -> None:
    alice_id, alice_headers = register_and_login(client, "alice", "pw123")
    _, bob_headers = register_and_login(client, "bob", "pw456")
    content = _create(client, alice_headers, alice_id).json()["content"]

    response = client.delete(f"/contents/{content['id']}", headers=bob_headers)

    assert response.status_code == 403


def test_ownership_enforcement_blocks_other_users(app_factory: Callable[..., FastAPI]) -> None:
    client = TestClient(app_factory(enforce_content_ownership=True))
    alice_id, alice_headers = register_and_login(client, "alice", "pw123")
    _, bob_headers = register_and_login(client, "bob", "pw456")
    content = _create(client, alice_headers, alice_id).json()["content"]

    assert client.get(f"/contents/{alice_id}", headers=bob_headers).status_code == 403
    assert client.delete(f"/contents/{content['id']}", headers=bob_headers).status_code == 403
    assert _create(client, bob_headers, alice_id).status_code == 403
    share = client.post("/api/v1/brain/share", json={"contentId": content["id"]}, headers=bob_headers)
    assert share.status_code == 403

    assert client.get(f"/contents/{alice_id}", headers=alice_headers).status_code == 200
    assert client.delete(f"/contents/{content['id']}", headers=alice_headers).status_code == 200
