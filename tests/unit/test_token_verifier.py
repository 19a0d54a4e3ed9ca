"""
Unit Tests for Firebase Token Verification

Tests how Firebase Admin errors map to verifier errors. The SDK call is
replaced; no network access.
"""

import pytest
from firebase_admin import auth

from senali.infrastructure.auth import (
    FirebaseTokenVerifier,
    InvalidTokenError,
    VerifierUnavailableError,
)
from senali.infrastructure.auth import token_verifier


@pytest.fixture
def verifier(monkeypatch):
    instance = FirebaseTokenVerifier(project_id="senali-test", check_revoked=True)
    monkeypatch.setattr(instance, "_get_app", lambda: None)
    return instance


def fail_with(monkeypatch, error: Exception) -> None:
    def verify_id_token(token, app=None, check_revoked=False):
        raise error

    monkeypatch.setattr(token_verifier.auth, "verify_id_token", verify_id_token)


class TestFirebaseTokenVerifier:

    async def test_claims_become_principal(self, verifier, monkeypatch):
        def verify_id_token(token, app=None, check_revoked=False):
            assert check_revoked is True
            return {"uid": "u1", "email": "p@example.com", "name": "Pat"}

        monkeypatch.setattr(token_verifier.auth, "verify_id_token", verify_id_token)

        principal = await verifier.verify("good-token")

        assert principal.uid == "u1"
        assert principal.email == "p@example.com"
        assert principal.fallback_display_name == "Pat"

    async def test_empty_token_rejected(self, verifier):
        with pytest.raises(InvalidTokenError):
            await verifier.verify("")

    async def test_malformed_token_rejected(self, verifier, monkeypatch):
        fail_with(monkeypatch, ValueError("Illegal ID token"))

        with pytest.raises(InvalidTokenError):
            await verifier.verify("junk")

    async def test_disabled_user_rejected(self, verifier, monkeypatch):
        fail_with(monkeypatch, auth.UserDisabledError("The user record is disabled."))

        with pytest.raises(InvalidTokenError):
            await verifier.verify("token")

    async def test_unreachable_keys_are_not_an_invalid_token(self, verifier, monkeypatch):
        fail_with(monkeypatch, auth.CertificateFetchError("Failed to fetch public key", None))

        with pytest.raises(VerifierUnavailableError):
            await verifier.verify("token")
