"""
Daily Tip Database Model

Generated tips are stored per user together with the user's
feedback on them.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from senali.domain.clock import utcnow
from senali.domain.enums.content import TipCategory, TipDifficulty
from senali.infrastructure.database.connection import Base, JSONType


class DailyTipModel(Base):
    """
    Daily tip table ORM model.

    Table: daily_tips
    """

    __tablename__ = "daily_tips"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    user_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(
        String(30),
        default=TipCategory.GENERAL.value,
        nullable=False,
        index=True,
    )
    difficulty: Mapped[str] = mapped_column(
        String(20),
        default=TipDifficulty.BEGINNER.value,
        nullable=False,
    )
    target_age: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    estimated_time: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    tags: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)

    # Feedback
    liked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    disliked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    bookmarked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    helpful: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    tried: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, doc="1-5 stars")
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<DailyTipModel(id={self.id}, category='{self.category}')>"
