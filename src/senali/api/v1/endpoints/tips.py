"""
Tip Endpoints

Daily parenting tips generated by the model in JSON mode, with
per-user feedback.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from senali.api.dependencies import get_current_user, get_tip_service
from senali.domain.models.tip import TipPreferences
from senali.infrastructure.database.models.user_model import UserModel
from senali.services.tips import TipService

router = APIRouter()


class TipPreferencesRequest(BaseModel):
    child_age: Optional[int] = Field(default=None, ge=0, le=120)
    primary_concerns: list[str] = Field(default_factory=list)
    preferred_categories: list[str] = Field(default_factory=list)


class GenerateTipRequest(BaseModel):
    """Preferences are derived from family profiles when omitted."""

    preferences: Optional[TipPreferencesRequest] = None


class TipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    category: str
    difficulty: str
    target_age: Optional[str] = None
    estimated_time: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    liked: bool
    disliked: bool
    bookmarked: bool
    helpful: Optional[bool] = None
    tried: Optional[bool] = None
    rating: Optional[int] = None
    comments: Optional[str] = None
    created_at: datetime


class TipFeedbackRequest(BaseModel):
    liked: Optional[bool] = None
    disliked: Optional[bool] = None
    bookmarked: Optional[bool] = None
    helpful: Optional[bool] = None
    tried: Optional[bool] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comments: Optional[str] = Field(default=None, max_length=2000)


class TipCategoriesResponse(BaseModel):
    categories: list[str]
    difficulties: list[str]


@router.post(
    "/generate",
    response_model=TipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate a new tip",
)
async def generate_tip(
    request: GenerateTipRequest,
    user: UserModel = Depends(get_current_user),
    service: TipService = Depends(get_tip_service),
) -> TipResponse:
    preferences = None
    if request.preferences is not None:
        preferences = TipPreferences(**request.preferences.model_dump())

    tip = await service.generate(user, preferences)
    return TipResponse.model_validate(tip)


@router.get(
    "/today",
    response_model=TipResponse,
    summary="Today's tip, generated on first request",
)
async def today_tip(
    user: UserModel = Depends(get_current_user),
    service: TipService = Depends(get_tip_service),
) -> TipResponse:
    tip = await service.today(user)
    return TipResponse.model_validate(tip)


@router.get(
    "",
    response_model=list[TipResponse],
    summary="Recent tips, newest first",
)
async def recent_tips(
    limit: int = Query(default=10, ge=1, le=100),
    user: UserModel = Depends(get_current_user),
    service: TipService = Depends(get_tip_service),
) -> list[TipResponse]:
    tips = await service.recent(user, limit=limit)
    return [TipResponse.model_validate(t) for t in tips]


@router.get(
    "/categories",
    response_model=TipCategoriesResponse,
    summary="Tip categories and difficulty levels",
)
async def tip_categories() -> TipCategoriesResponse:
    return TipCategoriesResponse(**TipService.categories())


@router.post(
    "/{tip_id}/feedback",
    response_model=TipResponse,
    summary="Record feedback on a tip",
)
async def tip_feedback(
    tip_id: UUID,
    request: TipFeedbackRequest,
    user: UserModel = Depends(get_current_user),
    service: TipService = Depends(get_tip_service),
) -> TipResponse:
    tip = await service.feedback(user, tip_id, request.model_dump(exclude_none=True))
    return TipResponse.model_validate(tip)
