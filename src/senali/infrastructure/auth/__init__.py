"""Authentication infrastructure (Firebase ID tokens)."""

from senali.infrastructure.auth.token_verifier import (
    AuthenticatedPrincipal,
    FirebaseTokenVerifier,
    InvalidTokenError,
    TokenVerifier,
    VerifierUnavailableError,
    get_token_verifier,
)

__all__ = [
    "AuthenticatedPrincipal",
    "FirebaseTokenVerifier",
    "InvalidTokenError",
    "TokenVerifier",
    "VerifierUnavailableError",
    "get_token_verifier",
]
