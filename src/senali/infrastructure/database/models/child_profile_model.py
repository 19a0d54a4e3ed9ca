"""
Family Profile Database Model

A family member (usually a child) with the yes/no symptom checklist
and the frequency-based assessment forms stored as JSON.

PRIVACY: Profiles hold health-related observations about minors.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from senali.domain.clock import utcnow
from senali.domain.enums.content import Relationship
from senali.infrastructure.database.connection import Base, JSONType


class ChildProfileModel(Base):
    """
    Family profile table ORM model.

    Table: child_profiles
    """

    __tablename__ = "child_profiles"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_child_profiles_user_name"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    user_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    relationship: Mapped[str] = mapped_column(
        String(20),
        default=Relationship.CHILD.value,
        nullable=False,
    )
    gender: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    medical_diagnoses: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    school_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    symptoms: Mapped[dict] = mapped_column(
        JSONType,
        default=dict,
        nullable=False,
        doc="Checklist answers keyed by question id (yes, no, unsure)"
    )
    assessment: Mapped[dict] = mapped_column(
        JSONType,
        default=dict,
        nullable=False,
        doc="Assessment forms: {'adhd': {...}, 'autism': {...}, 'odd': {...}}"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ChildProfileModel(id={self.id}, relationship='{self.relationship}')>"
