"""
Screening Endpoints

Checklist questions, rule-table screening, assessment insights and
the model-written diagnostic summary.

CLINICAL_REVIEW_REQUIRED: Results are screening aids, never a diagnosis.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from senali.api.dependencies import get_current_user, get_screening_service
from senali.infrastructure.database.models.user_model import UserModel
from senali.services.screening.screening_service import ScreeningService

router = APIRouter()


class QuestionResponse(BaseModel):
    id: str
    text: str
    category: str
    weight: int


class ScreeningRequest(BaseModel):
    """Score these answers instead of the stored checklist (not saved)."""

    responses: Optional[dict[str, str]] = None


class DiagnosticResultResponse(BaseModel):
    condition: str
    probability: str
    description: str
    recommended_actions: list[str]


class ScreeningResponse(BaseModel):
    profile_id: UUID
    results: list[DiagnosticResultResponse]
    disclaimer: str = Field(
        default=(
            "This screening is not a diagnosis. Please consult a qualified "
            "healthcare professional for a proper evaluation."
        )
    )


class AIDiagnosisResponse(BaseModel):
    condition: str
    probability: str
    confidence: int
    reasoning: str
    recommended_actions: list[str]


class AIDiagnosticReportResponse(BaseModel):
    diagnoses: list[AIDiagnosisResponse]
    summary: str
    overall_assessment: str


class DiagnosticSummaryResponse(BaseModel):
    profile_id: UUID
    ai_analysis: AIDiagnosticReportResponse
    rule_based_results: list[DiagnosticResultResponse]
    remaining_credits: int


@router.get(
    "/screening/questions",
    response_model=list[QuestionResponse],
    summary="Symptom checklist questions",
)
async def list_questions() -> list[QuestionResponse]:
    return [QuestionResponse(**q.to_dict()) for q in ScreeningService.questions()]


@router.post(
    "/profiles/{profile_id}/screening",
    response_model=ScreeningResponse,
    summary="Score a profile's checklist",
)
async def screen_profile(
    profile_id: UUID,
    request: Optional[ScreeningRequest] = None,
    user: UserModel = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    responses = request.responses if request is not None else None
    results = await service.screen_profile(user, profile_id, responses)
    return ScreeningResponse(
        profile_id=profile_id,
        results=[DiagnosticResultResponse(**r.to_dict()) for r in results],
    )


@router.get(
    "/profiles/{profile_id}/insights",
    summary="Insights from a profile's assessment forms",
)
async def profile_insights(
    profile_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> dict:
    insights = await service.insights(user, profile_id)
    return {"profile_id": str(profile_id), **insights.to_dict()}


@router.post(
    "/profiles/{profile_id}/diagnostic-summary",
    response_model=DiagnosticSummaryResponse,
    summary="AI-written summary of a profile's checklist (one credit)",
)
async def diagnostic_summary(
    profile_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> DiagnosticSummaryResponse:
    result = await service.diagnostic_summary(user, profile_id)
    return DiagnosticSummaryResponse(
        profile_id=result["profile_id"],
        ai_analysis=AIDiagnosticReportResponse(**result["ai_analysis"].to_dict()),
        rule_based_results=[
            DiagnosticResultResponse(**r.to_dict()) for r in result["rule_based_results"]
        ],
        remaining_credits=result["remaining_credits"],
    )
