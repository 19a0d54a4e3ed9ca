"""
Assessment Forms

Item lists and rating scales for the ADHD (Vanderbilt-style), autism
(DSM-5 areas) and ODD forms stored on a family profile, plus
validation of incoming ratings.

CLINICAL_REVIEW_REQUIRED: Item wording follows published instruments.
"""

from typing import Any, Mapping

from senali.domain.enums.screening import (
    AcademicPerformance,
    AssessmentForm,
    Frequency,
    LanguageDevelopment,
    OddFrequency,
    Severity,
)
from senali.services.errors import InvalidAnswerError

ADHD_INATTENTION_ITEMS: tuple[str, ...] = (
    "fails_to_pay_attention",
    "difficulty_maintaining_attention",
    "does_not_listen_when_spoken_to",
    "does_not_follow_instructions",
    "difficulty_organizing_tasks",
    "avoids_tasks_requiring_mental_effort",
    "loses_things",
    "easily_distracted",
    "forgetful_in_daily_activities",
)

ADHD_HYPERACTIVITY_ITEMS: tuple[str, ...] = (
    "fidgets_with_hands_or_feet",
    "leaves_seat_in_classroom",
    "runs_or_climbs_excessively",
    "difficulty_playing_quietly",
    "on_the_go_or_driven_by_motor",
    "talks_excessively",
    "blurts_out_answers",
    "difficulty_waiting_turn",
    "interrupts_or_intrudes",
)

AUTISM_SOCIAL_ITEMS: tuple[str, ...] = (
    "social_emotional_reciprocity",
    "nonverbal_communication",
    "developing_maintaining_relationships",
)

AUTISM_RESTRICTED_ITEMS: tuple[str, ...] = (
    "stereotyped_repetitive_motor",
    "insistence_on_sameness",
    "restricted_fixated_interests",
    "sensory_reactivity",
)

ODD_ITEMS: tuple[str, ...] = (
    "often_loses_temper",
    "touchy_or_easily_annoyed",
    "angry_and_resentful",
    "argues_with_authority",
    "actively_defies_rules",
    "deliberately_annoys",
    "blames_others",
    "spiteful_or_vindictive",
)

# Rated on their own scale and left out of insight scoring
ITEM_SCALES: dict[str, type] = {
    "academic_performance": AcademicPerformance,
    "language_development": LanguageDevelopment,
}

FORM_ITEMS: dict[AssessmentForm, tuple[str, ...]] = {
    AssessmentForm.ADHD: ADHD_INATTENTION_ITEMS + ADHD_HYPERACTIVITY_ITEMS + ("academic_performance",),
    AssessmentForm.AUTISM: AUTISM_SOCIAL_ITEMS + AUTISM_RESTRICTED_ITEMS + ("language_development",),
    AssessmentForm.ODD: ODD_ITEMS,
}

FORM_SCALES: dict[AssessmentForm, type] = {
    AssessmentForm.ADHD: Frequency,
    AssessmentForm.AUTISM: Severity,
    AssessmentForm.ODD: OddFrequency,
}


def validate_form_ratings(form: AssessmentForm, ratings: Mapping[str, Any]) -> dict[str, str]:
    """
    Check that every item belongs to the form and uses its scale: the
    form's scale, or the item's own for the developmental items.

    Returns:
        Ratings normalised to their string values

    Raises:
        InvalidAnswerError: On an unknown item or rating
    """
    items = FORM_ITEMS[form]
    validated: dict[str, str] = {}

    for item, rating in ratings.items():
        if item not in items:
            raise InvalidAnswerError(f"Unknown {form.value} assessment item: {item}")
        scale = ITEM_SCALES.get(item, FORM_SCALES[form])
        try:
            validated[item] = scale(str(rating)).value
        except ValueError:
            allowed = ", ".join(member.value for member in scale)
            raise InvalidAnswerError(
                f"Invalid rating '{rating}' for {item}; expected one of {allowed}"
            ) from None

    return validated


def merge_assessment(
    current: Mapping[str, Any] | None,
    updates: Mapping[AssessmentForm, Mapping[str, str]],
) -> dict[str, dict[str, str]]:
    """
    Merge validated form ratings into a stored assessment.

    Returns a new dict; the stored value is never mutated.
    """
    merged: dict[str, dict[str, str]] = {
        form.value: dict((current or {}).get(form.value) or {})
        for form in AssessmentForm
    }
    for form, ratings in updates.items():
        merged[form.value].update(ratings)
    return merged
