"""
Content Enumerations

Chat roles, family relationships and daily tip taxonomy.
"""

from enum import StrEnum


class MessageRole(StrEnum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Relationship(StrEnum):
    """How a family member relates to the account holder."""

    CHILD = "child"
    SPOUSE = "spouse"
    PARTNER = "partner"
    SELF = "self"
    OTHER = "other"


class TipCategory(StrEnum):
    """Daily tip categories."""

    ADHD = "adhd"
    AUTISM = "autism"
    GENERAL = "general"
    BEHAVIORAL = "behavioral"
    EDUCATIONAL = "educational"
    SOCIAL = "social"


class TipDifficulty(StrEnum):
    """How much effort a tip takes to put in place."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
