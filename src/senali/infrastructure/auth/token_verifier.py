"""
ID Token Verification

Validates Firebase ID tokens presented as bearer tokens. The mobile and
web clients sign in with Firebase Authentication; the backend only
verifies tokens and never issues its own.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from starlette.concurrency import run_in_threadpool

from senali.config import get_settings
from senali.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Identity extracted from a verified ID token."""

    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None

    @property
    def fallback_display_name(self) -> str:
        """Display name, else the email local part, else the uid."""
        if self.name:
            return self.name
        if self.email:
            return self.email.split("@", 1)[0]
        return self.uid


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be verified."""


class VerifierUnavailableError(Exception):
    """The token could not be checked; the signing keys are unreachable."""


class TokenVerifier(ABC):
    """Verifies bearer tokens and returns the authenticated principal."""

    @abstractmethod
    async def verify(self, token: str) -> AuthenticatedPrincipal:
        """
        Verify a token.

        Raises:
            InvalidTokenError: Token is missing, malformed, expired or revoked,
                or belongs to a disabled account
            VerifierUnavailableError: Verification could not be attempted
        """


class FirebaseTokenVerifier(TokenVerifier):
    """
    Firebase Admin SDK verifier.

    The default firebase_admin app is initialised once per process from
    (in order) an inline service account JSON, a credentials file, or
    application-default credentials.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_file: Optional[str] = None,
        credentials_json: Optional[str] = None,
        check_revoked: bool = False,
    ) -> None:
        self._project_id = project_id
        self._credentials_file = credentials_file
        self._credentials_json = credentials_json
        self._check_revoked = check_revoked
        self._app: Optional[firebase_admin.App] = None

    def _get_app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app

        if firebase_admin._apps:
            self._app = firebase_admin.get_app()
            return self._app

        if self._credentials_json:
            cred = credentials.Certificate(json.loads(self._credentials_json))
        elif self._credentials_file:
            cred = credentials.Certificate(self._credentials_file)
        else:
            cred = credentials.ApplicationDefault()

        options = {"projectId": self._project_id} if self._project_id else None
        self._app = firebase_admin.initialize_app(cred, options)
        logger.info("Firebase app initialized", project_id=self._project_id)
        return self._app

    async def verify(self, token: str) -> AuthenticatedPrincipal:
        if not token:
            raise InvalidTokenError("Missing ID token")

        app = self._get_app()
        try:
            claims = await run_in_threadpool(
                auth.verify_id_token,
                token,
                app=app,
                check_revoked=self._check_revoked,
            )
        except auth.CertificateFetchError as e:
            logger.error("Firebase signing keys unreachable", error=str(e))
            raise VerifierUnavailableError("Token verification unavailable") from e
        except (ValueError, auth.InvalidIdTokenError, auth.UserDisabledError) as e:
            logger.info("ID token rejected", error_type=type(e).__name__)
            raise InvalidTokenError("Invalid or expired ID token") from e

        return AuthenticatedPrincipal(
            uid=claims["uid"],
            email=claims.get("email"),
            name=claims.get("name"),
            picture=claims.get("picture"),
        )


@lru_cache()
def get_token_verifier() -> TokenVerifier:
    """
    Get the process-wide token verifier.

    Overridden in tests through app.dependency_overrides.
    """
    settings = get_settings()
    return FirebaseTokenVerifier(
        project_id=settings.firebase.project_id,
        credentials_file=settings.firebase.credentials_file,
        credentials_json=settings.firebase.credentials_json.get_secret_value() or None,
        check_revoked=settings.firebase.check_revoked,
    )
