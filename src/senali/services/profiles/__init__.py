"""Family profile services."""

from senali.services.profiles.profile_service import ProfileService, to_family_member

__all__ = ["ProfileService", "to_family_member"]
