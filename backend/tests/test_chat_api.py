"""
Tests for the chat endpoint: language, category guidance, provider fallback
and session persistence.
"""
from sqlalchemy.exc import OperationalError

from vidhisahayak.models import ChatMessage, ChatSession
from vidhisahayak.services.chat_service import ChatService
from vidhisahayak.services.chat_session_service import ChatSessionService
from vidhisahayak.services.llm_providers import ProviderChain, ProviderError, ProviderRateLimited

CHAT_URL = "/api/v1/chat"


def test_reply_from_first_provider(client, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", ["Draft the agreement first."]), fake_provider("openai", configured=False))

    response = client.post(CHAT_URL, json={"message": "I need a rent agreement"})
    assert response.status_code == 200

    body = response.json()
    assert body["success"] == 1
    data = body["data"]
    assert data["reply"] == "Draft the agreement first."
    assert data["provider_used"] == "gemini"
    assert data["model_used"] == "gemini-test-model"
    assert data["detected_lang"] == "en-IN"
    assert data["providers"] == {"gemini": True, "perplexity": False, "openai": False}
    assert data["category"]["slug"] == "rental"
    assert data["session_id"]


def test_category_guidance_reaches_the_provider(client, chat_chain, fake_provider):
    gemini = fake_provider("gemini", ["ok"])
    chat_chain(gemini)

    client.post(CHAT_URL, json={"message": "How do I make an affidavit for name change?"})

    system_prompt = gemini.calls[0]["system_prompt"]
    assert "RELEVANT CATEGORY: Affidavit" in system_prompt
    assert "Visit notary with ID" in system_prompt


def test_detected_language_instructs_the_provider(client, chat_chain, fake_provider):
    gemini = fake_provider("gemini", ["సరే"])
    chat_chain(gemini)

    response = client.post(CHAT_URL, json={"message": "Explain rental agreement in Telugu"})

    assert response.json()["data"]["detected_lang"] == "te-IN"
    assert gemini.calls[0]["system_prompt"].endswith(
        "Reply entirely in Telugu, using its native script, even if the question was written in another language."
    )


def test_client_language_choice_wins(client, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", ["ok"]))
    response = client.post(CHAT_URL, json={"message": "Explain in Telugu", "lang": "ta-IN"})
    assert response.json()["data"]["detected_lang"] == "ta-IN"


def test_falls_back_to_next_provider(client, chat_chain, fake_provider):
    chat_chain(
        fake_provider("gemini", [ProviderRateLimited("gemini", "429", 429)]),
        fake_provider("perplexity", [ProviderError("perplexity", "HTTP 500", 500)]),
        fake_provider("openai", ["from openai"]),
    )

    data = client.post(CHAT_URL, json={"message": "hello"}).json()["data"]
    assert data["reply"] == "from openai"
    assert data["provider_used"] == "openai"


def test_all_providers_failing_still_answers(client, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", [ProviderError("gemini", "down")]))

    response = client.post(CHAT_URL, json={"message": "surety bond"})
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["provider_used"] == "none"
    assert data["model_used"] is None
    assert data["reply"].startswith('I heard: "surety bond".')


def test_blank_message_is_rejected(client, chat_chain, fake_provider):
    gemini = fake_provider("gemini", ["unused"])
    chat_chain(gemini)

    response = client.post(CHAT_URL, json={"message": "   "})
    assert response.status_code == 400

    body = response.json()
    assert body["success"] == 0
    assert body["metadata"]["errors"] == ["Message cannot be empty"]
    assert gemini.calls == []


def test_missing_message_is_a_validation_error(client):
    response = client.post(CHAT_URL, json={})
    assert response.status_code == 422
    assert response.json()["data"]["message"] == "Invalid request"


def test_turns_are_stored(client, db, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", ["First answer"]))

    session_id = client.post(CHAT_URL, json={"message": "rent agreement", "lang": "hi-IN"}).json()["data"]["session_id"]

    session = db.query(ChatSession).filter(ChatSession.id == session_id).one()
    assert session.user_id is None
    assert session.title == "rent agreement"

    messages = db.query(ChatMessage).filter(ChatMessage.session_id == session_id).order_by(ChatMessage.id).all()
    assert [(m.role, m.content) for m in messages] == [("user", "rent agreement"), ("assistant", "First answer")]
    assert [m.language for m in messages] == ["hi-IN", "hi-IN"]
    assert messages[1].provider == "gemini"


def test_history_is_sent_on_follow_up(client, chat_chain, fake_provider):
    gemini = fake_provider("gemini", ["Which state?", "In Telangana, use the e-registration portal."])
    chat_chain(gemini)

    session_id = client.post(CHAT_URL, json={"message": "rent agreement"}).json()["data"]["session_id"]
    follow_up = client.post(CHAT_URL, json={"message": "Telangana", "session_id": session_id}).json()["data"]

    assert follow_up["session_id"] == session_id
    assert [m.to_dict() for m in gemini.calls[0]["messages"]] == [{"role": "user", "content": "rent agreement"}]
    assert [m.to_dict() for m in gemini.calls[1]["messages"]] == [
        {"role": "user", "content": "rent agreement"},
        {"role": "assistant", "content": "Which state?"},
        {"role": "user", "content": "Telangana"},
    ]


def test_unknown_session_starts_a_new_one(client, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", ["ok"]))
    data = client.post(CHAT_URL, json={"message": "hi", "session_id": "does-not-exist"}).json()["data"]
    assert data["session_id"] not in (None, "does-not-exist")


def test_signed_in_user_owns_new_session(client, db, user, auth_headers, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", ["ok"]))
    session_id = client.post(CHAT_URL, json={"message": "hi"}, headers=auth_headers).json()["data"]["session_id"]
    assert db.query(ChatSession).filter(ChatSession.id == session_id).one().user_id == user.id


def test_anonymous_session_is_claimed_on_sign_in(client, db, user, auth_headers, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", ["one", "two"]))

    session_id = client.post(CHAT_URL, json={"message": "hi"}).json()["data"]["session_id"]
    data = client.post(CHAT_URL, json={"message": "again", "session_id": session_id}, headers=auth_headers).json()["data"]

    assert data["session_id"] == session_id
    db.expire_all()
    assert db.query(ChatSession).filter(ChatSession.id == session_id).one().user_id == user.id


def test_another_users_session_is_not_continued(client, user, other_user, headers_for, chat_chain, fake_provider):
    gemini = fake_provider("gemini", ["one", "two"])
    chat_chain(gemini)

    session_id = client.post(CHAT_URL, json={"message": "private"}, headers=headers_for(user)).json()["data"]["session_id"]
    data = client.post(
        CHAT_URL, json={"message": "peek", "session_id": session_id}, headers=headers_for(other_user)
    ).json()["data"]

    assert data["session_id"] != session_id
    assert [m.content for m in gemini.calls[1]["messages"]] == ["peek"]


def test_invalid_token_is_treated_as_anonymous(client, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", ["ok"]))
    response = client.post(CHAT_URL, json={"message": "hi"}, headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 200


def test_stateless_without_database(stateless_client, chat_chain, fake_provider):
    gemini = fake_provider("gemini", ["one", "two"])
    chat_chain(gemini)

    first = stateless_client.post(CHAT_URL, json={"message": "rent agreement"}).json()["data"]
    stateless_client.post(CHAT_URL, json={"message": "Telangana", "session_id": "anything"})

    assert first["session_id"] is None
    assert [m.content for m in gemini.calls[1]["messages"]] == ["Telangana"]


def test_languages(client):
    response = client.get(f"{CHAT_URL}/languages")
    assert response.status_code == 200
    codes = [option["code"] for option in response.json()["data"]]
    assert codes[0] == "auto"
    assert "te-IN" in codes


def test_unsupported_language_is_a_validation_error(client, chat_chain, fake_provider):
    gemini = fake_provider("gemini", ["unused"])
    chat_chain(gemini)

    response = client.post(CHAT_URL, json={"message": "rent agreement", "lang": "hi"})
    assert response.status_code == 422
    assert gemini.calls == []


def test_auto_language_is_accepted(client, chat_chain, fake_provider):
    chat_chain(fake_provider("gemini", ["ok"]))
    response = client.post(CHAT_URL, json={"message": "నమస్కారం", "lang": "auto"})
    assert response.status_code == 200
    assert response.json()["data"]["detected_lang"] == "te-IN"


def test_service_ignores_unsupported_client_language(fake_provider):
    gemini = fake_provider("gemini", ["ok"])
    reply = ChatService(db=None, chain=ProviderChain([gemini])).handle("rent agreement", lang="hi")

    assert reply.detected_lang == "en-IN"
    assert "Reply entirely in" not in gemini.calls[0]["system_prompt"]


def test_history_window_keeps_the_last_messages(db, fake_provider):
    gemini = fake_provider("gemini", [f"a{i}" for i in range(1, 8)])
    service = ChatService(db=db, chain=ProviderChain([gemini]), history_limit=4)

    session_id = None
    for i in range(1, 8):
        session_id = service.handle(f"q{i}", session_id=session_id).session_id

    assert [m.content for m in gemini.calls[-1]["messages"]] == ["a5", "q6", "a6", "q7"]
    assert [m.role for m in gemini.calls[-1]["messages"]] == ["assistant", "user", "assistant", "user"]


def test_persistence_failure_answers_stateless(client, monkeypatch, chat_chain, fake_provider):
    gemini = fake_provider("gemini", ["Still here."])
    chat_chain(gemini)

    def fail(*args, **kwargs):
        raise OperationalError("INSERT INTO ai_chat_messages", {}, Exception("database is down"))

    monkeypatch.setattr(ChatSessionService, "append_message", fail)

    response = client.post(CHAT_URL, json={"message": "rent agreement"})
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["reply"] == "Still here."
    assert data["session_id"] is None
    assert [m.content for m in gemini.calls[0]["messages"]] == ["rent agreement"]
