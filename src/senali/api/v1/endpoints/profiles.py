"""
Profile Endpoints

Family members (children, partner, self) with their symptom checklist
and assessment forms. Other users' profiles answer 404.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field

from senali.api.dependencies import get_current_user, get_profile_service
from senali.domain.enums.content import Relationship
from senali.infrastructure.database.models.user_model import UserModel
from senali.services.profiles import ProfileService

router = APIRouter()


class ProfileCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    age: Optional[int] = Field(default=None, ge=0, le=120)
    relationship: Relationship = Relationship.CHILD
    gender: Optional[str] = Field(default=None, max_length=30)
    medical_diagnoses: Optional[str] = Field(default=None, max_length=2000)
    school_info: Optional[str] = Field(default=None, max_length=2000)
    notes: Optional[str] = Field(default=None, max_length=4000)


class ProfileUpdateRequest(BaseModel):
    """Only the fields sent are changed."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    age: Optional[int] = Field(default=None, ge=0, le=120)
    relationship: Optional[Relationship] = None
    gender: Optional[str] = Field(default=None, max_length=30)
    medical_diagnoses: Optional[str] = Field(default=None, max_length=2000)
    school_info: Optional[str] = Field(default=None, max_length=2000)
    notes: Optional[str] = Field(default=None, max_length=4000)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    age: Optional[int] = None
    relationship: str
    gender: Optional[str] = None
    medical_diagnoses: Optional[str] = None
    school_info: Optional[str] = None
    notes: Optional[str] = None
    symptoms: dict[str, str] = Field(default_factory=dict)
    assessment: dict[str, dict[str, str]] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class SymptomsRequest(BaseModel):
    answers: dict[str, str] = Field(..., description="question id -> yes, no or unsure")


class AssessmentRequest(BaseModel):
    adhd: Optional[dict[str, str]] = None
    autism: Optional[dict[str, str]] = None
    odd: Optional[dict[str, str]] = None


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List family profiles",
)
async def list_profiles(
    user: UserModel = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    profiles = await service.list_profiles(user)
    return [ProfileResponse.model_validate(p) for p in profiles]


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a family profile",
)
async def create_profile(
    request: ProfileCreateRequest,
    user: UserModel = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Free accounts are limited in the number of profiles; names are
    unique per account.
    """
    profile = await service.create(user, request.model_dump())
    return ProfileResponse.model_validate(profile)


@router.get(
    "/{profile_id}",
    response_model=ProfileResponse,
    summary="Get a family profile",
)
async def get_profile(
    profile_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await service.get(user, profile_id)
    return ProfileResponse.model_validate(profile)


@router.patch(
    "/{profile_id}",
    response_model=ProfileResponse,
    summary="Update a family profile",
)
async def update_profile(
    profile_id: UUID,
    request: ProfileUpdateRequest,
    user: UserModel = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await service.update(user, profile_id, request.model_dump(exclude_unset=True))
    return ProfileResponse.model_validate(profile)


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a family profile",
)
async def delete_profile(
    profile_id: UUID,
    user: UserModel = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> Response:
    await service.delete(user, profile_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{profile_id}/symptoms",
    response_model=ProfileResponse,
    summary="Merge symptom checklist answers",
)
async def update_symptoms(
    profile_id: UUID,
    request: SymptomsRequest,
    user: UserModel = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await service.update_symptoms(user, profile_id, request.answers)
    return ProfileResponse.model_validate(profile)


@router.put(
    "/{profile_id}/assessment",
    response_model=ProfileResponse,
    summary="Merge assessment form ratings",
)
async def update_assessment(
    profile_id: UUID,
    request: AssessmentRequest,
    user: UserModel = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await service.update_assessment(
        user,
        profile_id,
        request.model_dump(exclude_none=True),
    )
    return ProfileResponse.model_validate(profile)
