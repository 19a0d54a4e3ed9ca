"""
Integration Tests for Screening

Tests the checklist questions, rule-table screening, assessment
insights and the AI diagnostic summary.
"""

import json

import pytest

pytestmark = pytest.mark.integration

INATTENTIVE_SIX = {f"adhd_{i}": "yes" if i <= 6 else "no" for i in range(1, 10)}

SUMMARY_REPLY = json.dumps({
    "diagnoses": [{
        "condition": "ADHD (Inattentive Type)",
        "probability": "high",
        "confidence": 80,
        "reasoning": "Six of nine inattentive items were answered yes.",
        "recommended_actions": ["Talk to your pediatrician"],
    }],
    "summary": "Attention concerns stand out.",
    "overall_assessment": "A professional evaluation is recommended.",
})


async def create_profile(client, headers) -> str:
    response = await client.post(
        "/api/profiles",
        json={"name": "Alex", "age": 8},
        headers=headers,
    )
    return response.json()["id"]


async def save_answers(client, headers, profile_id: str, answers: dict) -> None:
    response = await client.put(
        f"/api/profiles/{profile_id}/symptoms",
        json={"answers": answers},
        headers=headers,
    )
    assert response.status_code == 200


class TestQuestions:
    """Tests for GET /screening/questions."""

    async def test_question_bank(self, client):
        response = await client.get("/api/screening/questions")

        assert response.status_code == 200
        questions = response.json()
        assert len(questions) == 27
        assert questions[0]["id"] == "adhd_1"
        assert questions[0]["category"] == "adhd_inattentive"
        assert questions[0]["weight"] == 1


class TestScreenProfile:
    """Tests for POST /profiles/{id}/screening."""

    async def test_scores_stored_answers(self, client, headers):
        profile_id = await create_profile(client, headers)
        await save_answers(client, headers, profile_id, INATTENTIVE_SIX)

        response = await client.post(f"/api/profiles/{profile_id}/screening", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["profile_id"] == profile_id
        assert [r["condition"] for r in body["results"]] == ["ADHD (Inattentive Type)"]
        assert body["results"][0]["probability"] == "high"
        assert body["disclaimer"]

    async def test_scores_given_answers_without_storing(self, client, headers):
        profile_id = await create_profile(client, headers)

        response = await client.post(
            f"/api/profiles/{profile_id}/screening",
            json={"responses": {"autism_r1": "yes", "autism_r2": "yes"}},
            headers=headers,
        )

        assert [r["condition"] for r in response.json()["results"]] == [
            "Autism Spectrum Disorder",
        ]
        assert response.json()["results"][0]["probability"] == "moderate"

        profile = await client.get(f"/api/profiles/{profile_id}", headers=headers)
        assert profile.json()["symptoms"] == {}

    async def test_no_answers_no_results(self, client, headers):
        profile_id = await create_profile(client, headers)

        response = await client.post(f"/api/profiles/{profile_id}/screening", headers=headers)
        assert response.json()["results"] == []

    async def test_invalid_responses_are_400(self, client, headers):
        profile_id = await create_profile(client, headers)

        response = await client.post(
            f"/api/profiles/{profile_id}/screening",
            json={"responses": {"adhd_1": "definitely"}},
            headers=headers,
        )
        assert response.status_code == 400

    async def test_other_users_profile_is_404(self, client, headers, auth_headers):
        profile_id = await create_profile(client, headers)

        response = await client.post(
            f"/api/profiles/{profile_id}/screening",
            headers=auth_headers("parent2"),
        )
        assert response.status_code == 404


class TestInsights:
    """Tests for GET /profiles/{id}/insights."""

    async def test_empty_assessment(self, client, headers):
        profile_id = await create_profile(client, headers)

        response = await client.get(f"/api/profiles/{profile_id}/insights", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["profile_id"] == profile_id
        assert body["adhd"]["likelihood"] == "insufficient_data"
        assert body["autism"]["likelihood"] == "insufficient_data"
        assert body["odd"]["likelihood"] == "insufficient_data"
        assert len(body["general_recommendations"]) == 3

    async def test_insights_follow_assessment(self, client, headers):
        profile_id = await create_profile(client, headers)
        await client.put(
            f"/api/profiles/{profile_id}/assessment",
            json={"adhd": {"easily_distracted": "very_often"}},
            headers=headers,
        )

        response = await client.get(f"/api/profiles/{profile_id}/insights", headers=headers)

        assert response.json()["adhd"]["inattention_score"] == 1


class TestDiagnosticSummary:
    """Tests for POST /profiles/{id}/diagnostic-summary."""

    async def test_summary_charges_one_credit(self, client, headers, fake_llm):
        profile_id = await create_profile(client, headers)
        await save_answers(client, headers, profile_id, INATTENTIVE_SIX)
        fake_llm.queue(SUMMARY_REPLY)

        response = await client.post(
            f"/api/profiles/{profile_id}/diagnostic-summary",
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["profile_id"] == profile_id
        assert body["remaining_credits"] == 24
        assert body["ai_analysis"]["summary"] == "Attention concerns stand out."
        assert body["ai_analysis"]["diagnoses"][0]["probability"] == "high"
        assert body["ai_analysis"]["diagnoses"][0]["confidence"] == 80
        assert [r["condition"] for r in body["rule_based_results"]] == [
            "ADHD (Inattentive Type)",
        ]

        prompt = fake_llm.prompts[-1]
        assert prompt.json_mode is True
        assert prompt.temperature == 0.3

    async def test_infinite_confidence_is_clamped(self, client, headers, fake_llm):
        profile_id = await create_profile(client, headers)
        await save_answers(client, headers, profile_id, INATTENTIVE_SIX)
        fake_llm.queue(SUMMARY_REPLY.replace('"confidence": 80', '"confidence": 1e999'))

        response = await client.post(
            f"/api/profiles/{profile_id}/diagnostic-summary",
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["ai_analysis"]["diagnoses"][0]["confidence"] == 100

    async def test_empty_checklist_is_400(self, client, headers, fake_llm):
        profile_id = await create_profile(client, headers)

        response = await client.post(
            f"/api/profiles/{profile_id}/diagnostic-summary",
            headers=headers,
        )

        assert response.status_code == 400
        assert fake_llm.prompts == []

    async def test_invalid_json_is_not_charged(self, client, headers, fake_llm):
        profile_id = await create_profile(client, headers)
        await save_answers(client, headers, profile_id, INATTENTIVE_SIX)
        fake_llm.queue("ADHD seems likely.")

        response = await client.post(
            f"/api/profiles/{profile_id}/diagnostic-summary",
            headers=headers,
        )

        assert response.status_code == 502
        me = await client.get("/api/auth/me", headers=headers)
        assert me.json()["credits"] == 25

    async def test_no_credits_is_402(self, client, headers, admin_headers, fake_llm):
        profile_id = await create_profile(client, headers)
        await save_answers(client, headers, profile_id, INATTENTIVE_SIX)
        await client.post(
            "/api/admin/update-credits",
            json={"user_id": "parent1", "credit_change": -25},
            headers=admin_headers,
        )

        response = await client.post(
            f"/api/profiles/{profile_id}/diagnostic-summary",
            headers=headers,
        )

        assert response.status_code == 402
        assert fake_llm.prompts == []
