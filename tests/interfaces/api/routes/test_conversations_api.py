"""Integration tests for the conversation and channel endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from isle.infrastructure.security import create_access_token


@pytest.fixture()
def client():
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def _auth(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def test_direct_messaging_flow(client: TestClient, make_user) -> None:
    alice = make_user("alice")
    bob = make_user("bob")

    opened = client.post(
        "/conversations/direct", json={"recipient_id": bob.id}, headers=_auth(alice)
    )
    assert opened.status_code == 200
    conversation_id = opened.json()["id"]
    reopened = client.post(
        "/conversations/direct", json={"recipient_id": alice.id}, headers=_auth(bob)
    )
    assert reopened.json()["id"] == conversation_id

    sent = client.post(
        f"/conversations/{conversation_id}/messages",
        json={"content": "hi bob"},
        headers=_auth(alice),
    )
    assert sent.status_code == 201
    message_id = sent.json()["id"]

    unread = client.get(f"/conversations/{conversation_id}/unread-count", headers=_auth(bob))
    assert unread.json() == {"count": 1}
    assert client.get("/conversations/unread-count", headers=_auth(bob)).json() == {"count": 1}

    listing = client.get("/conversations/", headers=_auth(bob))
    assert listing.status_code == 200
    [summary] = listing.json()
    assert summary["id"] == conversation_id
    assert summary["unread_count"] == 1
    assert summary["last_message"]["id"] == message_id

    read = client.post(f"/conversations/{conversation_id}/read", headers=_auth(bob))
    assert read.status_code == 200
    assert read.json()["last_read_at"] is not None
    assert client.get("/conversations/unread-count", headers=_auth(bob)).json() == {"count": 0}

    reply = client.post(
        f"/conversations/{conversation_id}/messages",
        json={"content": "hello", "reply_to_id": message_id},
        headers=_auth(bob),
    )
    assert reply.json()["reply_to_id"] == message_id

    messages = client.get(f"/conversations/{conversation_id}/messages", headers=_auth(alice))
    assert [item["content"] for item in messages.json()["items"]] == ["hi bob", "hello"]


def test_conversation_errors_map_to_status_codes(client: TestClient, make_user) -> None:
    alice = make_user("alice")
    bob = make_user("bob")
    mallory = make_user("mallory")
    conversation_id = client.post(
        "/conversations/direct", json={"recipient_id": bob.id}, headers=_auth(alice)
    ).json()["id"]

    with_self = client.post(
        "/conversations/direct", json={"recipient_id": alice.id}, headers=_auth(alice)
    )
    assert with_self.status_code == 422
    assert with_self.json()["error_code"] == "INVALID_REFERENCE"

    intruder = client.post(
        f"/conversations/{conversation_id}/messages",
        json={"content": "let me in"},
        headers=_auth(mallory),
    )
    assert intruder.status_code == 403
    assert intruder.json()["error_code"] == "FORBIDDEN"

    blank = client.post(
        f"/conversations/{conversation_id}/messages",
        json={"content": "   "},
        headers=_auth(alice),
    )
    assert blank.status_code == 400

    missing = client.get("/conversations/9999", headers=_auth(alice))
    assert missing.status_code == 404
    assert missing.json() == {
        "detail": "Conversation '9999' not found",
        "error_code": "NOT_FOUND",
        "extra": {"resource": "Conversation"},
    }


def test_channel_membership_flow(client: TestClient, make_user) -> None:
    owner = make_user("owner")
    member = make_user("member")

    created = client.post(
        "/conversations/channels",
        json={"name": "general", "description": "Anything goes"},
        headers=_auth(owner),
    )
    assert created.status_code == 201
    channel_id = created.json()["id"]
    assert created.json()["channel"] is True

    channels = client.get("/conversations/channels", headers=_auth(member))
    assert [item["id"] for item in channels.json()] == [channel_id]

    joined = client.post(f"/conversations/channels/{channel_id}/join", headers=_auth(member))
    assert joined.status_code == 200
    assert joined.json()["user_id"] == member.id

    detail = client.get(f"/conversations/{channel_id}", headers=_auth(member))
    assert {item["user_id"] for item in detail.json()["participants"]} == {owner.id, member.id}

    left = client.delete(
        f"/conversations/channels/{channel_id}/participants/me", headers=_auth(member)
    )
    assert left.status_code == 204
    assert client.get("/conversations/", headers=_auth(member)).json() == []
