"""
Integration Tests for Chat

Tests the chat pipeline end to end: credit charging, history storage,
provider failures and symptom extraction into profiles.
"""

import pytest

from senali.infrastructure.llm import LLMProviderError
from senali.infrastructure.llm.provider import ProviderNotConfiguredError, RateLimitError

pytestmark = pytest.mark.integration


async def set_credits_to_zero(client, admin_headers, uid: str = "parent1") -> None:
    response = await client.post(
        "/api/admin/update-credits",
        json={"user_id": uid, "credit_change": -10_000},
        headers=admin_headers,
    )
    assert response.json()["new_credits"] == 0


class TestSendMessage:
    """Tests for POST /chat."""

    async def test_reply_charges_one_credit(self, client, headers, fake_llm):
        fake_llm.queue("That sounds exhausting. Let's try a visual routine.")

        response = await client.post(
            "/api/chat",
            json={"message": "Mornings are chaos"},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["response"] == "That sounds exhausting. Let's try a visual routine."
        assert body["model"] == "fake-model"
        assert body["tokens"] == 42
        assert body["remaining_credits"] == 24
        assert body["processing_time_ms"] >= 0

        me = await client.get("/api/auth/me", headers=headers)
        assert me.json()["credits"] == 24

    async def test_history_is_stored_in_order(self, client, headers, fake_llm):
        fake_llm.queue("First answer", "Second answer")

        await client.post("/api/chat", json={"message": "First question"}, headers=headers)
        await client.post("/api/chat", json={"message": "Second question"}, headers=headers)

        response = await client.get("/api/chat/history", headers=headers)

        assert response.status_code == 200
        messages = response.json()
        assert [(m["role"], m["content"]) for m in messages] == [
            ("user", "First question"),
            ("assistant", "First answer"),
            ("user", "Second question"),
            ("assistant", "Second answer"),
        ]
        assert messages[1]["tokens"] == 42

    async def test_stored_history_is_sent_to_model(self, client, headers, fake_llm):
        fake_llm.queue("First answer", "Second answer")

        await client.post("/api/chat", json={"message": "First question"}, headers=headers)
        await client.post("/api/chat", json={"message": "Second question"}, headers=headers)

        prompt = fake_llm.prompts[-1]
        assert prompt.user_message == "Second question"
        assert prompt.conversation_history == [
            {"role": "user", "content": "First question"},
            {"role": "assistant", "content": "First answer"},
        ]

    async def test_client_context_replaces_stored_history(self, client, headers, fake_llm):
        await client.post("/api/chat", json={"message": "Stored question"}, headers=headers)

        await client.post(
            "/api/chat",
            json={
                "message": "Follow up",
                "context": [
                    {"role": "user", "content": "Client question"},
                    {"role": "assistant", "content": "Client answer"},
                ],
            },
            headers=headers,
        )

        assert fake_llm.prompts[-1].conversation_history == [
            {"role": "user", "content": "Client question"},
            {"role": "assistant", "content": "Client answer"},
        ]

    async def test_family_profiles_reach_the_prompt(self, client, headers, fake_llm):
        await client.post("/api/profiles", json={"name": "Alex", "age": 8}, headers=headers)

        await client.post("/api/chat", json={"message": "Hello"}, headers=headers)

        assert "Alex" in fake_llm.prompts[-1].user_context

    async def test_empty_message_rejected(self, client, headers):
        response = await client.post("/api/chat", json={"message": ""}, headers=headers)
        assert response.status_code == 422

    async def test_requires_authentication(self, client):
        response = await client.post("/api/chat", json={"message": "Hi"})
        assert response.status_code == 401


class TestCredits:
    """Tests for credit enforcement."""

    async def test_no_credits_is_402(self, client, headers, admin_headers, fake_llm):
        await client.get("/api/auth/me", headers=headers)
        await set_credits_to_zero(client, admin_headers)

        response = await client.post("/api/chat", json={"message": "Hi"}, headers=headers)

        assert response.status_code == 402
        assert "Insufficient credits" in response.json()["error"]
        assert fake_llm.prompts == []

    async def test_empty_reply_is_not_charged(self, client, headers, fake_llm):
        fake_llm.queue("   ")

        response = await client.post("/api/chat", json={"message": "Hi"}, headers=headers)

        assert response.status_code == 502
        assert response.json()["error"] == "No response generated"

        me = await client.get("/api/auth/me", headers=headers)
        assert me.json()["credits"] == 25
        history = await client.get("/api/chat/history", headers=headers)
        assert history.json() == []


class TestProviderFailures:
    """Tests for LLM provider errors mapped to HTTP responses."""

    async def test_provider_error_is_502(self, client, headers, fake_llm):
        fake_llm.queue(LLMProviderError("upstream failed", provider="fake"))

        response = await client.post("/api/chat", json={"message": "Hi"}, headers=headers)

        assert response.status_code == 502
        assert response.json()["error"] == "AI service error. Please try again."

        me = await client.get("/api/auth/me", headers=headers)
        assert me.json()["credits"] == 25

    async def test_rate_limited_is_429(self, client, headers, fake_llm):
        fake_llm.queue(RateLimitError(provider="fake", retry_after_seconds=30))

        response = await client.post("/api/chat", json={"message": "Hi"}, headers=headers)

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "30"

    async def test_not_configured_is_503(self, client, headers, fake_llm):
        fake_llm.queue(ProviderNotConfiguredError(provider="fake"))

        response = await client.post("/api/chat", json={"message": "Hi"}, headers=headers)

        assert response.status_code == 503
        assert response.json()["error"] == "AI service is not configured"

    async def test_unexpected_error_is_sanitized_500(self, client, headers, fake_llm):
        fake_llm.queue(RuntimeError("secret internal detail"))

        response = await client.post(
            "/api/chat",
            json={"message": "Hi"},
            headers={**headers, "X-Correlation-ID": "corr-500"},
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal server error",
            "correlation_id": "corr-500",
        }


class TestClearHistory:
    """Tests for DELETE /chat/history."""

    async def test_clear_returns_deleted_count(self, client, headers):
        await client.post("/api/chat", json={"message": "One"}, headers=headers)
        await client.post("/api/chat", json={"message": "Two"}, headers=headers)

        response = await client.delete("/api/chat/history", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": 4}

        history = await client.get("/api/chat/history", headers=headers)
        assert history.json() == []

    async def test_clear_only_own_history(self, client, headers, auth_headers):
        await client.post("/api/chat", json={"message": "Mine"}, headers=headers)
        await client.post("/api/chat", json={"message": "Theirs"}, headers=auth_headers("parent2"))

        await client.delete("/api/chat/history", headers=headers)

        other = await client.get("/api/chat/history", headers=auth_headers("parent2"))
        assert len(other.json()) == 2


class TestSymptomFindings:
    """Tests for chat observations merged into profiles."""

    async def test_findings_attach_to_single_child(self, client, headers):
        created = await client.post(
            "/api/profiles",
            json={"name": "Alex", "age": 8},
            headers=headers,
        )
        profile_id = created.json()["id"]

        await client.post(
            "/api/chat",
            json={"message": "He is always distracted when doing homework"},
            headers=headers,
        )

        profile = await client.get(f"/api/profiles/{profile_id}", headers=headers)
        assert profile.json()["assessment"]["adhd"]["easily_distracted"] == "very_often"

    async def test_findings_attach_to_named_child(self, client, headers):
        created = await client.post(
            "/api/profiles",
            json={"name": "Sam", "age": 9},
            headers=headers,
        )
        profile_id = created.json()["id"]

        await client.post(
            "/api/chat",
            json={"message": "My son Sam frequently blurts things out in class"},
            headers=headers,
        )

        profile = await client.get(f"/api/profiles/{profile_id}", headers=headers)
        assert profile.json()["assessment"]["adhd"]["blurts_out_answers"] == "often"

    async def test_failed_reply_records_no_findings(self, client, headers, fake_llm):
        created = await client.post(
            "/api/profiles",
            json={"name": "Alex", "age": 8},
            headers=headers,
        )
        profile_id = created.json()["id"]
        fake_llm.queue(LLMProviderError("upstream failed", provider="fake"))

        await client.post(
            "/api/chat",
            json={"message": "He is always distracted"},
            headers=headers,
        )

        profile = await client.get(f"/api/profiles/{profile_id}", headers=headers)
        assert profile.json()["assessment"] == {}
