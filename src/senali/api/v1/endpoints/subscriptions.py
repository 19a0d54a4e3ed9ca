"""
Subscription Endpoints

Credit balance, credit pack purchases and the monthly premium
subscription. Store receipts are accepted as-is; they are not
verified with the App Store or Play.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, model_validator

from senali.api.dependencies import get_current_user, get_subscription_service
from senali.domain.enums.subscription import StorePlatform
from senali.infrastructure.database.models.user_model import UserModel
from senali.services.billing import SubscriptionService

router = APIRouter()


class SubscriptionStatusResponse(BaseModel):
    credits: int
    subscription: str
    subscription_status: str
    subscription_platform: Optional[str] = None
    last_credit_refill: Optional[datetime] = None
    credit_packs: dict[str, int]


class PurchaseCreditsRequest(BaseModel):
    """A named credit pack or an explicit positive amount."""

    pack: Optional[str] = Field(default=None, description="small, medium or large")
    credits: Optional[int] = Field(default=None, gt=0, le=100000)
    purchase_token: str = Field(..., min_length=1, max_length=4096)
    platform: StorePlatform

    @model_validator(mode="after")
    def pack_or_credits(self) -> "PurchaseCreditsRequest":
        if self.pack is None and self.credits is None:
            raise ValueError("Either pack or credits is required")
        return self


class PurchaseCreditsResponse(BaseModel):
    success: bool = True
    new_credits: int
    message: str


class ActivateRequest(BaseModel):
    subscription_id: str = Field(..., min_length=1, max_length=255)
    platform: StorePlatform


class SubscriptionActionResponse(BaseModel):
    success: bool = True
    message: str
    status: SubscriptionStatusResponse


@router.get(
    "/status",
    response_model=SubscriptionStatusResponse,
    summary="Credits and subscription state",
)
async def subscription_status(
    user: UserModel = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionStatusResponse:
    return SubscriptionStatusResponse(**service.status(user))


@router.post(
    "/purchase-credits",
    response_model=PurchaseCreditsResponse,
    summary="Add purchased credits",
)
async def purchase_credits(
    request: PurchaseCreditsRequest,
    user: UserModel = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> PurchaseCreditsResponse:
    previous = user.credits
    new_credits = await service.purchase_credits(
        user,
        purchase_token=request.purchase_token,
        platform=request.platform,
        pack=request.pack,
        credits=request.credits,
    )
    return PurchaseCreditsResponse(
        new_credits=new_credits,
        message=f"Added {new_credits - previous} credits",
    )


@router.post(
    "/activate",
    response_model=SubscriptionActionResponse,
    summary="Start the premium subscription",
)
async def activate_subscription(
    request: ActivateRequest,
    user: UserModel = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionActionResponse:
    user = await service.activate(
        user,
        subscription_id=request.subscription_id,
        platform=request.platform,
    )
    return SubscriptionActionResponse(
        message="Premium subscription activated",
        status=SubscriptionStatusResponse(**service.status(user)),
    )


@router.post(
    "/cancel",
    response_model=SubscriptionActionResponse,
    summary="Cancel the premium subscription",
)
async def cancel_subscription(
    user: UserModel = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionActionResponse:
    user = await service.cancel(user)
    return SubscriptionActionResponse(
        message="Subscription cancelled; remaining credits are kept",
        status=SubscriptionStatusResponse(**service.status(user)),
    )


@router.post(
    "/refill-credits",
    response_model=SubscriptionActionResponse,
    summary="Monthly credit refill for premium subscribers",
)
async def refill_credits(
    user: UserModel = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionActionResponse:
    user = await service.refill(user)
    return SubscriptionActionResponse(
        message="Credits refilled",
        status=SubscriptionStatusResponse(**service.status(user)),
    )
