"""Account services."""

from senali.services.auth.user_service import UserService

__all__ = ["UserService"]
