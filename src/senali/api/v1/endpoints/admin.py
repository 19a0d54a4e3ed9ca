"""
Admin Endpoints

User listing, credit adjustment and subscription statistics.
Restricted to the configured admin emails.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from senali.api.dependencies import get_subscription_service, require_admin
from senali.config.logging_config import get_logger
from senali.infrastructure.auth import AuthenticatedPrincipal
from senali.services.billing import SubscriptionService

logger = get_logger(__name__)
router = APIRouter()


class AdminUserResponse(BaseModel):
    uid: str
    email: str
    display_name: Optional[str] = None
    credits: int
    subscription: str
    subscription_status: str
    created_at: datetime
    last_active: Optional[datetime] = None


class UpdateCreditsRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=128)
    credit_change: int = Field(..., description="Positive to add, negative to remove")


class UpdateCreditsResponse(BaseModel):
    success: bool = True
    user_id: str
    new_credits: int


class StatsResponse(BaseModel):
    total_users: int
    premium_users: int
    free_users: int
    total_credits: int


@router.get(
    "/users",
    response_model=list[AdminUserResponse],
    summary="List users",
)
async def list_users(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    admin: AuthenticatedPrincipal = Depends(require_admin),
    service: SubscriptionService = Depends(get_subscription_service),
) -> list[AdminUserResponse]:
    users = await service.list_users(skip=skip, limit=limit)
    return [
        AdminUserResponse(
            uid=u.id,
            email=u.email,
            display_name=u.display_name,
            credits=u.credits,
            subscription=u.subscription,
            subscription_status=u.subscription_status,
            created_at=u.created_at,
            last_active=u.last_login_at,
        )
        for u in users
    ]


@router.post(
    "/update-credits",
    response_model=UpdateCreditsResponse,
    summary="Add or remove a user's credits",
)
async def update_credits(
    request: UpdateCreditsRequest,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    service: SubscriptionService = Depends(get_subscription_service),
) -> UpdateCreditsResponse:
    """Balance never drops below zero."""
    user = await service.admin_adjust(request.user_id, request.credit_change)
    logger.info("Admin credit change", admin_uid=admin.uid, target_user_id=user.id)
    return UpdateCreditsResponse(user_id=user.id, new_credits=user.credits)


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="User and credit totals",
)
async def stats(
    admin: AuthenticatedPrincipal = Depends(require_admin),
    service: SubscriptionService = Depends(get_subscription_service),
) -> StatsResponse:
    return StatsResponse(**await service.stats())
