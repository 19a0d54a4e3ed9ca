"""
Symptom Extractor

Keyword-based extraction of assessment ratings from free-text chat
messages. Ratings are inferred from words near the keyword; the result
is merged into the assessment forms of profiles named in the message.

CLINICAL_REVIEW_REQUIRED: Keyword lists are heuristics. Extracted
ratings are background observations, never shown as a diagnosis.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from senali.domain.enums.screening import (
    AcademicPerformance,
    AssessmentForm,
    Frequency,
    LanguageDevelopment,
    OddFrequency,
    Severity,
)

# Keyword -> assessment item
ADHD_KEYWORDS: dict[str, str] = {
    "attention": "fails_to_pay_attention",
    "focus": "difficulty_maintaining_attention",
    "listening": "does_not_listen_when_spoken_to",
    "instructions": "does_not_follow_instructions",
    "organizing": "difficulty_organizing_tasks",
    "homework": "avoids_tasks_requiring_mental_effort",
    "loses things": "loses_things",
    "distracted": "easily_distracted",
    "forgetful": "forgetful_in_daily_activities",
    "fidgets": "fidgets_with_hands_or_feet",
    "sits still": "leaves_seat_in_classroom",
    "running": "runs_or_climbs_excessively",
    "quiet": "difficulty_playing_quietly",
    "motor": "on_the_go_or_driven_by_motor",
    "talks": "talks_excessively",
    "blurts": "blurts_out_answers",
    "waiting": "difficulty_waiting_turn",
    "interrupts": "interrupts_or_intrudes",
}

AUTISM_KEYWORDS: dict[str, str] = {
    "social": "social_emotional_reciprocity",
    "eye contact": "nonverbal_communication",
    "relationships": "developing_maintaining_relationships",
    "repetitive": "stereotyped_repetitive_motor",
    "routine": "insistence_on_sameness",
    "interests": "restricted_fixated_interests",
    "sensory": "sensory_reactivity",
}

ODD_KEYWORDS: dict[str, str] = {
    "temper": "often_loses_temper",
    "annoyed": "touchy_or_easily_annoyed",
    "angry": "angry_and_resentful",
    "argues": "argues_with_authority",
    "defiant": "actively_defies_rules",
    "annoys": "deliberately_annoys",
    "blames": "blames_others",
    "vindictive": "spiteful_or_vindictive",
}

# Checked in order; the first match wins
FREQUENCY_CUES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("never",), "never"),
    (("always", "constantly", "very often"), "very_often"),
    (("often", "frequently"), "often"),
    (("sometimes", "occasionally", "rarely"), "occasionally"),
)

SEVERITY_CUES: tuple[tuple[tuple[str, ...], Severity], ...] = (
    (("not present", "none"), Severity.NOT_PRESENT),
    (("severe", "significant"), Severity.SEVERE),
    (("moderate", "medium"), Severity.MODERATE),
    (("mild", "slight"), Severity.MILD),
)

# Searched across the whole message when school or grades come up
PERFORMANCE_CUES: tuple[tuple[str, AcademicPerformance], ...] = (
    ("excellent", AcademicPerformance.EXCELLENT),
    ("great", AcademicPerformance.ABOVE_AVERAGE),
    ("good", AcademicPerformance.ABOVE_AVERAGE),
    ("above average", AcademicPerformance.ABOVE_AVERAGE),
    ("average", AcademicPerformance.AVERAGE),
    ("okay", AcademicPerformance.AVERAGE),
    ("problematic", AcademicPerformance.PROBLEMATIC),
    ("problem", AcademicPerformance.SOMEWHAT_OF_A_PROBLEM),
    ("difficult", AcademicPerformance.SOMEWHAT_OF_A_PROBLEM),
    ("struggles", AcademicPerformance.PROBLEMATIC),
    ("struggling", AcademicPerformance.PROBLEMATIC),
    ("failing", AcademicPerformance.PROBLEMATIC),
    ("doing well", AcademicPerformance.ABOVE_AVERAGE),
)
PERFORMANCE_TOPICS = ("school", "grades")

LANGUAGE_TOPICS = ("language", "talking")
LANGUAGE_CUES: tuple[tuple[tuple[str, ...], LanguageDevelopment], ...] = (
    (("delayed", "late"), LanguageDevelopment.DELAYED),
    (("regression", "lost"), LanguageDevelopment.REGRESSION),
)

NAME_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"my (?:son|daughter|child)\s+(\w+)", re.IGNORECASE),
    re.compile(r"(\w+)\s+(?:is|has|does|struggles|can't|won't)\b", re.IGNORECASE),
    re.compile(r"for\s+(\w+),?\s+(?:he|she|they)\b", re.IGNORECASE),
    re.compile(r"(\w+)'s\s+(?:behavior|behaviour|attention|focus)", re.IGNORECASE),
)

COMMON_WORDS: frozenset[str] = frozenset({
    "he", "she", "they", "it", "this", "that", "there", "what", "who",
    "child", "son", "daughter", "kid", "school", "home", "teacher",
    "parent", "family", "everything", "nothing", "something",
})

CONTEXT_WINDOW_WORDS = 20


@dataclass
class ExtractedSymptoms:
    """Findings from one message."""

    names: list[str] = field(default_factory=list)
    ratings: dict[AssessmentForm, dict[str, str]] = field(
        default_factory=lambda: {form: {} for form in AssessmentForm}
    )

    @property
    def is_empty(self) -> bool:
        return not any(self.ratings.values())


def _contains_phrase(text: str, phrase: str) -> bool:
    return re.search(rf"\b{re.escape(phrase)}\b", text) is not None


class SymptomExtractor:
    """
    Extracts assessment ratings and child names from chat text.

    Usage:
        findings = SymptomExtractor().extract("My son Sam is always distracted")
    """

    def __init__(self, window: int = CONTEXT_WINDOW_WORDS) -> None:
        self._window = window

    def extract(self, message: str) -> ExtractedSymptoms:
        """Extract names and ratings from a message."""
        findings = ExtractedSymptoms(names=self.extract_names(message))
        lower = message.lower()

        for keyword, item in ADHD_KEYWORDS.items():
            if keyword in lower:
                findings.ratings[AssessmentForm.ADHD][item] = self._frequency(
                    message, keyword, Frequency.OCCASIONALLY
                )

        for keyword, item in AUTISM_KEYWORDS.items():
            if keyword in lower:
                severity = self._severity(message, keyword)
                if severity is not None:
                    findings.ratings[AssessmentForm.AUTISM][item] = severity

        performance = self._academic_performance(lower)
        if performance is not None:
            findings.ratings[AssessmentForm.ADHD]["academic_performance"] = performance

        language = self._language_development(lower)
        if language is not None:
            findings.ratings[AssessmentForm.AUTISM]["language_development"] = language

        for keyword, item in ODD_KEYWORDS.items():
            if keyword in lower:
                findings.ratings[AssessmentForm.ODD][item] = self._frequency(
                    message, keyword, OddFrequency.SOMETIMES
                )

        return findings

    def extract_names(self, message: str) -> list[str]:
        """
        Find likely names of family members mentioned in the message.

        A candidate must be longer than two characters, capitalised,
        and not a common pronoun or noun.
        """
        names: list[str] = []
        for pattern in NAME_PATTERNS:
            for match in pattern.finditer(message):
                name = match.group(1)
                if name and len(name) > 2 and name not in names and self._is_likely_name(name):
                    names.append(name)
        return names

    @staticmethod
    def _is_likely_name(word: str) -> bool:
        return word[0].isupper() and word.lower() not in COMMON_WORDS

    def context_around(self, message: str, keyword: str) -> str:
        """
        Words within the window on either side of the keyword's first
        occurrence; the whole message when the keyword is absent.
        """
        position = message.lower().find(keyword.lower())
        if position == -1:
            return message

        words = message.split()
        keyword_index = len(message[:position].split())
        # Keyword starting mid-word belongs to the preceding word
        if position > 0 and not message[position - 1].isspace():
            keyword_index = max(0, keyword_index - 1)

        start = max(0, keyword_index - self._window)
        end = min(len(words), keyword_index + self._window + 1)
        return " ".join(words[start:end])

    def _frequency(self, message: str, keyword: str, low_value: str) -> str:
        context = self.context_around(message, keyword).lower()
        for cues, value in FREQUENCY_CUES:
            if any(_contains_phrase(context, cue) for cue in cues):
                return str(low_value) if value == "occasionally" else value
        # Mentioning a behaviour at all suggests it happens often
        return "often"

    @staticmethod
    def _academic_performance(lower: str) -> Optional[str]:
        if not any(topic in lower for topic in PERFORMANCE_TOPICS):
            return None
        for cue, value in PERFORMANCE_CUES:
            if _contains_phrase(lower, cue):
                return value.value
        return None

    @staticmethod
    def _language_development(lower: str) -> Optional[str]:
        if not any(topic in lower for topic in LANGUAGE_TOPICS):
            return None
        for cues, value in LANGUAGE_CUES:
            if any(_contains_phrase(lower, cue) for cue in cues):
                return value.value
        return None

    def _severity(self, message: str, keyword: str) -> Optional[str]:
        context = self.context_around(message, keyword).lower()
        for cues, value in SEVERITY_CUES:
            if any(_contains_phrase(context, cue) for cue in cues):
                return value.value
        return None
