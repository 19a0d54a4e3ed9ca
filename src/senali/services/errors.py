"""
Service Errors

Exceptions raised by application services. Each carries the HTTP status
the API layer maps it to, so services stay unaware of FastAPI.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for expected, user-facing service failures."""

    status_code: int = 400

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ServiceError):
    """Resource missing or owned by another user."""

    status_code = 404


class ConflictError(ServiceError):
    """Resource would violate a uniqueness rule."""

    status_code = 409


class InsufficientCreditsError(ServiceError):
    """Balance does not cover the AI request."""

    status_code = 402

    def __init__(self, credits: int, required: int) -> None:
        super().__init__(
            "Insufficient credits. Please purchase more credits or subscribe to continue."
        )
        self.credits = credits
        self.required = required


class ProfileLimitError(ServiceError):
    """Free tier profile allowance reached."""

    status_code = 403

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"Free accounts can create {limit} family profile(s). "
            "Upgrade to premium for unlimited profiles."
        )
        self.limit = limit


class SubscriptionStateError(ServiceError):
    """Operation not allowed for the account's current subscription."""

    status_code = 400


class InvalidAnswerError(ServiceError):
    """Unknown question id or rating."""

    status_code = 400


class ModelOutputError(ServiceError):
    """The LLM answered, but its output cannot be used."""

    status_code = 502
