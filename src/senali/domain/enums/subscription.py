"""
Subscription and Billing Enumerations

Tier, lifecycle status and store platform of a user's subscription.
"""

from enum import StrEnum


class SubscriptionTier(StrEnum):
    """Commercial tier of a user account."""

    FREE = "free"
    """Trial credits only; limited family profiles."""

    PREMIUM = "premium"
    """Monthly subscription with credit refills and unlimited profiles."""


class SubscriptionStatus(StrEnum):
    """Lifecycle state of the store subscription."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    CANCELLED = "cancelled"


class StorePlatform(StrEnum):
    """Where a purchase or subscription was made."""

    IOS = "ios"
    ANDROID = "android"
    WEB = "web"
