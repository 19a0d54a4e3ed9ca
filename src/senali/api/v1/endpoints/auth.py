"""
Auth Endpoints

Sign-in and the current user's account. Identity comes from the
Firebase ID token; accounts are provisioned on first use.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from senali.api.dependencies import get_current_principal, get_current_user, get_user_service
from senali.infrastructure.auth import AuthenticatedPrincipal
from senali.infrastructure.database.models.user_model import UserModel
from senali.services.auth import UserService

router = APIRouter()


class UserResponse(BaseModel):
    """Account as returned to the app."""

    uid: str
    email: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    full_name: Optional[str] = None
    has_completed_profile: bool
    credits: int
    subscription: str
    subscription_status: str
    created_at: datetime
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, user: UserModel) -> "UserResponse":
        return cls(
            uid=user.id,
            email=user.email,
            display_name=user.display_name,
            photo_url=user.photo_url,
            full_name=user.full_name,
            has_completed_profile=user.has_completed_profile,
            credits=user.credits,
            subscription=user.subscription,
            subscription_status=user.subscription_status,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )


class SignInRequest(BaseModel):
    """Optional profile details from the identity provider."""

    display_name: Optional[str] = Field(default=None, max_length=255)
    photo_url: Optional[str] = Field(default=None, max_length=1024)


class SignInResponse(BaseModel):
    success: bool = True
    created: bool
    user: UserResponse


class UpdateMeRequest(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=255)
    has_completed_profile: Optional[bool] = None


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
)
async def read_me(user: UserModel = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_model(user)


@router.post(
    "/signin",
    response_model=SignInResponse,
    summary="Create or refresh the signed-in account",
)
async def sign_in(
    request: SignInRequest,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
) -> SignInResponse:
    """
    Called by the app after every Firebase sign-in.

    New accounts receive the trial credits.
    """
    user, created = await service.sign_in(
        principal,
        display_name=request.display_name,
        photo_url=request.photo_url,
    )
    return SignInResponse(created=created, user=UserResponse.from_model(user))


@router.patch(
    "/me",
    response_model=UserResponse,
    summary="Update the current user's details",
)
async def update_me(
    request: UpdateMeRequest,
    user: UserModel = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await service.update_profile(
        user,
        full_name=request.full_name,
        has_completed_profile=request.has_completed_profile,
    )
    return UserResponse.from_model(user)
