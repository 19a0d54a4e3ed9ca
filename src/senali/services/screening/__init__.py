"""Symptom screening: question bank, rule tables, insights and extraction."""

from senali.services.screening.questions import ALL_QUESTIONS, QUESTIONS_BY_ID
from senali.services.screening.scoring import calculate_diagnostic_probabilities
from senali.services.screening.insights import generate_assessment_insights
from senali.services.screening.symptom_extractor import ExtractedSymptoms, SymptomExtractor

__all__ = [
    "ALL_QUESTIONS",
    "QUESTIONS_BY_ID",
    "calculate_diagnostic_probabilities",
    "generate_assessment_insights",
    "ExtractedSymptoms",
    "SymptomExtractor",
]
