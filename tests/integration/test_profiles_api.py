"""
Integration Tests for Family Profiles

Tests profile CRUD, tier limits, ownership and checklist/assessment
updates.
"""

import pytest

pytestmark = pytest.mark.integration

MISSING_ID = "00000000-0000-0000-0000-000000000000"


async def activate_premium(client, headers) -> None:
    response = await client.post(
        "/api/subscriptions/activate",
        json={"subscription_id": "sub_123", "platform": "ios"},
        headers=headers,
    )
    assert response.status_code == 200


async def create_profile(client, headers, **fields) -> dict:
    data = {"name": "Alex", "age": 8, **fields}
    response = await client.post("/api/profiles", json=data, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateProfile:
    """Tests for POST /profiles."""

    async def test_create_defaults_to_child(self, client, headers):
        response = await client.post(
            "/api/profiles",
            json={"name": "  Alex ", "age": 8, "school_info": "Grade 3"},
            headers=headers,
        )

        assert response.status_code == 201
        profile = response.json()
        assert profile["name"] == "Alex"
        assert profile["relationship"] == "child"
        assert profile["school_info"] == "Grade 3"
        assert profile["symptoms"] == {}
        assert profile["assessment"] == {}

    async def test_free_account_limited_to_one(self, client, headers):
        await create_profile(client, headers)

        response = await client.post(
            "/api/profiles",
            json={"name": "Sam", "age": 5},
            headers=headers,
        )

        assert response.status_code == 403
        assert "premium" in response.json()["error"]

    async def test_premium_has_no_limit(self, client, headers):
        await activate_premium(client, headers)

        await create_profile(client, headers, name="Alex")
        await create_profile(client, headers, name="Sam")
        await create_profile(client, headers, name="Robin", relationship="spouse", age=38)

        response = await client.get("/api/profiles", headers=headers)
        assert [p["name"] for p in response.json()] == ["Alex", "Sam", "Robin"]

    async def test_duplicate_name_is_409(self, client, headers):
        await activate_premium(client, headers)
        await create_profile(client, headers, name="Alex")

        response = await client.post(
            "/api/profiles",
            json={"name": "alex"},
            headers=headers,
        )
        assert response.status_code == 409

    async def test_invalid_age_is_422(self, client, headers):
        response = await client.post(
            "/api/profiles",
            json={"name": "Alex", "age": 500},
            headers=headers,
        )
        assert response.status_code == 422


class TestProfileOwnership:
    """Tests for per-user isolation."""

    async def test_other_users_profile_is_404(self, client, headers, auth_headers):
        profile = await create_profile(client, headers)

        response = await client.get(
            f"/api/profiles/{profile['id']}",
            headers=auth_headers("parent2"),
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Profile not found"

    async def test_list_is_per_user(self, client, headers, auth_headers):
        await create_profile(client, headers)

        response = await client.get("/api/profiles", headers=auth_headers("parent2"))
        assert response.json() == []

    async def test_unknown_profile_is_404(self, client, headers):
        response = await client.get(f"/api/profiles/{MISSING_ID}", headers=headers)
        assert response.status_code == 404


class TestUpdateProfile:
    """Tests for PATCH and DELETE /profiles/{id}."""

    async def test_partial_update(self, client, headers):
        profile = await create_profile(client, headers, notes="Loves trains")

        response = await client.patch(
            f"/api/profiles/{profile['id']}",
            json={"age": 9},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["age"] == 9
        assert response.json()["notes"] == "Loves trains"
        assert response.json()["name"] == "Alex"

    async def test_null_relationship_is_ignored(self, client, headers):
        profile = await create_profile(client, headers)

        response = await client.patch(
            f"/api/profiles/{profile['id']}",
            json={"relationship": None},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["relationship"] == "child"

    async def test_rename_conflict_is_409(self, client, headers):
        await activate_premium(client, headers)
        await create_profile(client, headers, name="Alex")
        sam = await create_profile(client, headers, name="Sam")

        response = await client.patch(
            f"/api/profiles/{sam['id']}",
            json={"name": "Alex"},
            headers=headers,
        )
        assert response.status_code == 409

    async def test_rename_to_own_name(self, client, headers):
        profile = await create_profile(client, headers)

        response = await client.patch(
            f"/api/profiles/{profile['id']}",
            json={"name": "Alex"},
            headers=headers,
        )
        assert response.status_code == 200

    async def test_delete(self, client, headers):
        profile = await create_profile(client, headers)

        response = await client.delete(f"/api/profiles/{profile['id']}", headers=headers)
        assert response.status_code == 204

        response = await client.get(f"/api/profiles/{profile['id']}", headers=headers)
        assert response.status_code == 404

        response = await client.delete(f"/api/profiles/{profile['id']}", headers=headers)
        assert response.status_code == 404

    async def test_delete_frees_free_tier_slot(self, client, headers):
        profile = await create_profile(client, headers)
        await client.delete(f"/api/profiles/{profile['id']}", headers=headers)

        await create_profile(client, headers, name="Sam")


class TestSymptomsAndAssessment:
    """Tests for PUT /profiles/{id}/symptoms and /assessment."""

    async def test_symptoms_merge(self, client, headers):
        profile = await create_profile(client, headers)
        url = f"/api/profiles/{profile['id']}/symptoms"

        await client.put(url, json={"answers": {"adhd_1": "yes"}}, headers=headers)
        response = await client.put(url, json={"answers": {"adhd_2": "UNSURE"}}, headers=headers)

        assert response.status_code == 200
        assert response.json()["symptoms"] == {"adhd_1": "yes", "adhd_2": "unsure"}

    async def test_unknown_question_is_400(self, client, headers):
        profile = await create_profile(client, headers)

        response = await client.put(
            f"/api/profiles/{profile['id']}/symptoms",
            json={"answers": {"adhd_99": "yes"}},
            headers=headers,
        )
        assert response.status_code == 400

    async def test_invalid_answer_is_400(self, client, headers):
        profile = await create_profile(client, headers)

        response = await client.put(
            f"/api/profiles/{profile['id']}/symptoms",
            json={"answers": {"adhd_1": "maybe"}},
            headers=headers,
        )
        assert response.status_code == 400

    async def test_assessment_merges_forms(self, client, headers):
        profile = await create_profile(client, headers)
        url = f"/api/profiles/{profile['id']}/assessment"

        await client.put(url, json={"adhd": {"easily_distracted": "often"}}, headers=headers)
        response = await client.put(
            url,
            json={"odd": {"often_loses_temper": "sometimes"}},
            headers=headers,
        )

        assert response.status_code == 200
        assessment = response.json()["assessment"]
        assert assessment["adhd"] == {"easily_distracted": "often"}
        assert assessment["odd"] == {"often_loses_temper": "sometimes"}
        assert assessment["autism"] == {}

    async def test_assessment_rejects_wrong_scale(self, client, headers):
        profile = await create_profile(client, headers)

        response = await client.put(
            f"/api/profiles/{profile['id']}/assessment",
            json={"autism": {"sensory_reactivity": "often"}},
            headers=headers,
        )
        assert response.status_code == 400
