"""
Credit Policy

Pure rules for the credit economy. Services ask the policy whether a
balance suffices and what a grant or refill should set; the spend
itself is an atomic UPDATE in the user repository.

Rules:
- New accounts start with a trial allowance.
- Every AI message costs a fixed number of credits.
- Premium subscribers are refilled to (not topped up by) the monthly
  allowance, at most once per refill interval.
- Admin adjustments never push a balance below zero.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from senali.domain.clock import as_utc
from senali.domain.enums.subscription import SubscriptionStatus, SubscriptionTier


@dataclass(frozen=True)
class CreditPolicy:
    """Credit and subscription limits."""

    trial_credits: int = 25
    monthly_credits: int = 1000
    refill_interval_days: int = 30
    credits_per_message: int = 1
    free_profile_limit: int = 1
    credit_packs: dict[str, int] = field(
        default_factory=lambda: {"small": 500, "medium": 1000, "large": 2500}
    )

    def can_afford(self, credits: int, cost: Optional[int] = None) -> bool:
        """Whether a balance covers one AI request."""
        return credits >= (cost if cost is not None else self.credits_per_message)

    def credits_for_pack(self, pack: str) -> int:
        """
        Credits granted by a named in-app pack.

        Raises:
            KeyError: If the pack is unknown
        """
        return self.credit_packs[pack]

    def refill_due(self, last_refill: Optional[datetime], now: datetime) -> bool:
        """Whether a full refill interval has passed since the last refill."""
        last = as_utc(last_refill)
        if last is None:
            return True
        return as_utc(now) - last >= timedelta(days=self.refill_interval_days)

    @staticmethod
    def adjusted(current: int, change: int) -> int:
        """Apply an admin adjustment, clamped at zero."""
        return max(0, current + change)

    def profile_limit(self, tier: SubscriptionTier) -> Optional[int]:
        """Maximum family profiles for a tier (None = unlimited)."""
        if tier == SubscriptionTier.PREMIUM or self.free_profile_limit < 0:
            return None
        return self.free_profile_limit

    @staticmethod
    def is_active_premium(tier: str, status: str) -> bool:
        """Whether the account currently holds an active premium subscription."""
        return tier == SubscriptionTier.PREMIUM and status == SubscriptionStatus.ACTIVE
