"""
User Database Model

SQLAlchemy ORM model for account, credit and subscription state.
The primary key is the Firebase uid.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from senali.domain.clock import utcnow
from senali.domain.enums.subscription import SubscriptionStatus, SubscriptionTier
from senali.infrastructure.database.connection import Base


class UserModel(Base):
    """
    User table ORM model.

    Table: users
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
        doc="Firebase uid"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Email address from the ID token"
    )
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    has_completed_profile: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Billing
    credits: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        doc="Available AI credits"
    )
    subscription: Mapped[str] = mapped_column(
        String(20),
        default=SubscriptionTier.FREE.value,
        nullable=False,
        index=True,
        doc="Subscription tier (free, premium)"
    )
    subscription_status: Mapped[str] = mapped_column(
        String(20),
        default=SubscriptionStatus.INACTIVE.value,
        nullable=False,
        doc="Subscription lifecycle (inactive, active, cancelled)"
    )
    subscription_platform: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    subscription_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_credit_refill: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Last monthly refill for premium subscribers"
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, subscription='{self.subscription}', credits={self.credits})>"

    @property
    def is_premium(self) -> bool:
        """Whether the user holds an active premium subscription."""
        return (
            self.subscription == SubscriptionTier.PREMIUM.value
            and self.subscription_status == SubscriptionStatus.ACTIVE.value
        )
