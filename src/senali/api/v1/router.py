"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from senali.api.v1.endpoints.admin import router as admin_router
from senali.api.v1.endpoints.auth import router as auth_router
from senali.api.v1.endpoints.chat import router as chat_router
from senali.api.v1.endpoints.health import router as health_router
from senali.api.v1.endpoints.profiles import router as profiles_router
from senali.api.v1.endpoints.screening import router as screening_router
from senali.api.v1.endpoints.subscriptions import router as subscriptions_router
from senali.api.v1.endpoints.tips import router as tips_router

api_router = APIRouter()

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)

api_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["Auth"],
)

api_router.include_router(
    chat_router,
    prefix="/chat",
    tags=["Chat"],
)

api_router.include_router(
    tips_router,
    prefix="/tips",
    tags=["Tips"],
)

api_router.include_router(
    profiles_router,
    prefix="/profiles",
    tags=["Profiles"],
)

# Screening routes span /screening and /profiles/{id}/...
api_router.include_router(
    screening_router,
    tags=["Screening"],
)

api_router.include_router(
    subscriptions_router,
    prefix="/subscriptions",
    tags=["Subscriptions"],
)

api_router.include_router(
    admin_router,
    prefix="/admin",
    tags=["Admin"],
)
