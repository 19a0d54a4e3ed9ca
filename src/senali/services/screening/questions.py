"""
Screening Question Bank

Yes/no/unsure checklist questions grouped by symptom cluster.
Written at a 7th grade reading level.

CLINICAL_REVIEW_REQUIRED: Questions paraphrase DSM-5 criteria.
"""

from typing import Any, Mapping

from senali.domain.enums.screening import ChecklistAnswer, QuestionCategory
from senali.domain.models.screening import DiagnosticQuestion
from senali.services.errors import InvalidAnswerError


def _questions(category: QuestionCategory, prefix: str, texts: list[str]) -> tuple[DiagnosticQuestion, ...]:
    return tuple(
        DiagnosticQuestion(id=f"{prefix}{index}", text=text, category=category)
        for index, text in enumerate(texts, start=1)
    )


ADHD_INATTENTIVE_QUESTIONS = _questions(QuestionCategory.ADHD_INATTENTIVE, "adhd_", [
    "Often makes careless mistakes in schoolwork or other activities",
    "Often has trouble keeping attention on tasks or play",
    "Often does not seem to listen when spoken to directly",
    "Often does not follow through on instructions and fails to finish work",
    "Often has trouble organizing tasks and activities",
    "Often avoids or dislikes tasks that require mental effort",
    "Often loses things needed for tasks (toys, pencils, books)",
    "Is often easily distracted by outside things",
    "Is often forgetful in daily activities",
])

ADHD_HYPERACTIVE_QUESTIONS = _questions(QuestionCategory.ADHD_HYPERACTIVE, "adhd_h", [
    "Often fidgets with hands or feet or squirms in seat",
    "Often leaves seat when staying seated is expected",
    "Often runs or climbs too much when it is not appropriate",
    "Often has trouble playing or doing activities quietly",
    'Is often "on the go" or acts as if "driven by a motor"',
    "Often talks too much",
    "Often blurts out answers before questions are finished",
    "Often has trouble waiting for their turn",
    "Often interrupts or intrudes on others",
])

AUTISM_SOCIAL_QUESTIONS = _questions(QuestionCategory.AUTISM_SOCIAL, "autism_s", [
    "Has trouble with back-and-forth conversation",
    "Has trouble sharing emotions or interests with others",
    "Has trouble with nonverbal communication like eye contact or gestures",
    "Has trouble making and keeping friendships",
    "Has trouble understanding social situations",
])

AUTISM_REPETITIVE_QUESTIONS = _questions(QuestionCategory.AUTISM_REPETITIVE, "autism_r", [
    "Has repetitive motor movements or speech",
    "Insists on doing things the same way every time",
    "Has very focused interests that seem unusual",
    "Is over-sensitive or under-sensitive to sounds, touch, or other senses",
])

ALL_QUESTIONS: tuple[DiagnosticQuestion, ...] = (
    ADHD_INATTENTIVE_QUESTIONS
    + ADHD_HYPERACTIVE_QUESTIONS
    + AUTISM_SOCIAL_QUESTIONS
    + AUTISM_REPETITIVE_QUESTIONS
)

QUESTIONS_BY_ID: dict[str, DiagnosticQuestion] = {q.id: q for q in ALL_QUESTIONS}


def validate_answers(answers: Mapping[str, Any]) -> dict[str, str]:
    """
    Validate checklist answers.

    Raises:
        InvalidAnswerError: On an unknown question id or answer
    """
    validated: dict[str, str] = {}
    for question_id, answer in answers.items():
        if question_id not in QUESTIONS_BY_ID:
            raise InvalidAnswerError(f"Unknown question id: {question_id}")
        try:
            validated[question_id] = ChecklistAnswer(str(answer).lower()).value
        except ValueError:
            raise InvalidAnswerError(
                f"Invalid answer '{answer}' for {question_id}; expected yes, no or unsure"
            ) from None
    return validated


def count_yes_by_category(responses: Mapping[str, str]) -> dict[str, int]:
    """Count "yes" answers per question category (all categories present)."""
    counts = {category.value: 0 for category in QuestionCategory}
    for question_id, answer in responses.items():
        question = QUESTIONS_BY_ID.get(question_id)
        if question is not None and answer == ChecklistAnswer.YES:
            counts[question.category.value] += question.weight
    return counts
