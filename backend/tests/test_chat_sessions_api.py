"""
Tests for chat history management.
"""
import pytest

from vidhisahayak.models import ChatMessage
from vidhisahayak.services.chat_session_service import ChatSessionService

SESSIONS_URL = "/api/v1/chat/sessions"


@pytest.fixture
def conversation(db, user):
    service = ChatSessionService(db)
    session = service.create_session(user, title="rent agreement in Hyderabad")
    service.append_message(session.id, "user", "rent agreement in Hyderabad", language="en-IN")
    service.append_message(session.id, "assistant", "Use the Telangana e-registration portal.", provider="gemini")
    return session


def test_list_sessions(client, auth_headers, conversation):
    response = client.get(SESSIONS_URL, headers=auth_headers)
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["total"] == 1
    assert data["page"] == 1
    assert data["sessions"][0]["id"] == conversation.id
    assert data["sessions"][0]["message_count"] == 2


def test_list_only_shows_own_sessions(client, db, other_user, headers_for, conversation):
    ChatSessionService(db).create_session(other_user, title="mine")
    data = client.get(SESSIONS_URL, headers=headers_for(other_user)).json()["data"]
    assert [s["title"] for s in data["sessions"]] == ["mine"]


def test_pagination(client, db, user, auth_headers):
    service = ChatSessionService(db)
    for i in range(3):
        service.create_session(user, title=f"chat {i}")

    data = client.get(SESSIONS_URL, params={"page": 2, "per_page": 2}, headers=auth_headers).json()["data"]
    assert data["total"] == 3
    assert len(data["sessions"]) == 1


def test_get_session_with_messages(client, auth_headers, conversation):
    response = client.get(f"{SESSIONS_URL}/{conversation.id}", headers=auth_headers)
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["title"] == "rent agreement in Hyderabad"
    assert [(m["role"], m["provider"]) for m in data["messages"]] == [("user", None), ("assistant", "gemini")]


def test_rename_session(client, auth_headers, conversation):
    response = client.put(f"{SESSIONS_URL}/{conversation.id}", json={"title": "Rental"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Rental"
    assert response.json()["data"]["message_count"] == 2


def test_rename_rejects_empty_title(client, auth_headers, conversation):
    response = client.put(f"{SESSIONS_URL}/{conversation.id}", json={"title": ""}, headers=auth_headers)
    assert response.status_code == 422


def test_delete_session_removes_messages(client, db, auth_headers, conversation):
    session_id = conversation.id
    response = client.delete(f"{SESSIONS_URL}/{session_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["message"] == "Chat session deleted successfully"

    assert client.get(f"{SESSIONS_URL}/{session_id}", headers=auth_headers).status_code == 404
    assert db.query(ChatMessage).filter(ChatMessage.session_id == session_id).count() == 0


def test_history_transcript(client, auth_headers, conversation):
    response = client.get(f"{SESSIONS_URL}/{conversation.id}/history", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["history"] == (
        "You: rent agreement in Hyderabad\n"
        "VidhiSahayak: Use the Telangana e-registration portal."
    )


@pytest.mark.parametrize("method,suffix", [
    ("get", ""),
    ("delete", ""),
    ("get", "/history"),
])
def test_other_users_session_is_not_found(client, other_user, headers_for, conversation, method, suffix):
    response = getattr(client, method)(f"{SESSIONS_URL}/{conversation.id}{suffix}", headers=headers_for(other_user))
    assert response.status_code == 404
    assert response.json()["success"] == 0


def test_requires_authentication(client):
    response = client.get(SESSIONS_URL)
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_unavailable_without_database(stateless_client):
    response = stateless_client.get(SESSIONS_URL, headers={"Authorization": "Bearer anything"})
    assert response.status_code == 503
