"""
Family Member View

Read-only view of a family profile used when composing prompts, so
prompt templating stays independent of the persistence layer.
"""

from dataclasses import dataclass, field
from typing import Optional

from senali.domain.models.screening import DiagnosticResult


@dataclass
class FamilyMember:
    """A family member as described to the model."""

    name: str
    age: Optional[int] = None
    relationship: str = "child"
    gender: Optional[str] = None
    medical_diagnoses: Optional[str] = None
    school_info: Optional[str] = None
    notes: Optional[str] = None
    screening_results: list[DiagnosticResult] = field(default_factory=list)
