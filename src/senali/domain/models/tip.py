"""
Daily Tip Domain Models

Preferences that steer tip generation and the validated tip parsed
from the model's JSON output.
"""

import json
from dataclasses import dataclass, field
from typing import Optional

from senali.domain.enums.content import TipCategory, TipDifficulty


def age_range(age: int) -> str:
    """Map a child's age to the age band used in tip prompts."""
    if age <= 3:
        return "0-3"
    if age <= 6:
        return "3-6"
    if age <= 12:
        return "7-12"
    if age <= 18:
        return "13-18"
    return "adult"


def _optional_text(value: object, max_length: int = 30) -> Optional[str]:
    """Model output as text for a short varchar column, or None when absent."""
    if value is None or value == "":
        return None
    return str(value).strip()[:max_length] or None


@dataclass
class TipPreferences:
    """Optional personalisation for tip generation."""

    child_age: Optional[int] = None
    primary_concerns: list[str] = field(default_factory=list)
    preferred_categories: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return (
            self.child_age is None
            and not self.primary_concerns
            and not self.preferred_categories
        )


@dataclass
class GeneratedTip:
    """A tip as produced by the model, after validation."""

    title: str
    content: str
    category: TipCategory = TipCategory.GENERAL
    difficulty: TipDifficulty = TipDifficulty.BEGINNER
    target_age: Optional[str] = None
    estimated_time: Optional[str] = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_llm_content(cls, content: str) -> "GeneratedTip":
        """
        Parse and validate the model's JSON object.

        Unknown categories fall back to general and unknown difficulties
        to beginner.

        Raises:
            ValueError: If the content is not a JSON object or lacks
                title, content or category
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Tip is not valid JSON: {e.msg}") from e

        if not isinstance(data, dict):
            raise ValueError("Tip is not a JSON object")

        if not data.get("title") or not data.get("content") or not data.get("category"):
            raise ValueError("Invalid tip structure")

        try:
            category = TipCategory(str(data["category"]).lower())
        except ValueError:
            category = TipCategory.GENERAL

        try:
            difficulty = TipDifficulty(str(data.get("difficulty", "")).lower())
        except ValueError:
            difficulty = TipDifficulty.BEGINNER

        tags = data.get("tags") or []
        if not isinstance(tags, list):
            tags = [tags]

        return cls(
            title=str(data["title"]).strip(),
            content=str(data["content"]).strip(),
            category=category,
            difficulty=difficulty,
            target_age=_optional_text(data.get("targetAge") or data.get("target_age")),
            estimated_time=_optional_text(data.get("estimatedTime") or data.get("estimated_time"), 50),
            tags=[str(t) for t in tags if t],
        )
