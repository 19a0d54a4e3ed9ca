"""Credit and subscription services."""

from senali.services.billing.subscription_service import (
    SubscriptionService,
    credit_policy_from_settings,
)

__all__ = ["SubscriptionService", "credit_policy_from_settings"]
