"""
Health Check Endpoints

Provides system health and readiness endpoints for:
- Load balancer health checks
- Kubernetes probes
- Monitoring systems
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from senali import __version__
from senali.api.dependencies import get_database, get_llm
from senali.config import Settings, get_settings
from senali.infrastructure.database import DatabaseManager
from senali.infrastructure.llm import LLMProvider

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response with component health."""

    ready: bool
    components: dict[str, bool]


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Basic health check endpoint for load balancers",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Basic health check.

    Returns 200 if application is running.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.env,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check including database and LLM configuration",
)
async def readiness_check(
    llm: LLMProvider = Depends(get_llm),
    db: DatabaseManager = Depends(get_database),
) -> ReadinessResponse:
    """
    Detailed readiness check.

    Ready when the database answers and an LLM API key is configured.
    The LLM itself is not called.
    """
    components = {
        "database": await db.health_check(),
        "llm_configured": llm.is_configured(),
    }

    return ReadinessResponse(
        ready=all(components.values()),
        components=components,
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Kubernetes liveness probe endpoint",
)
async def liveness_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Kubernetes liveness probe.

    Returns 200 if application process is alive.
    """
    return HealthResponse(
        status="alive",
        version=__version__,
        environment=settings.env,
    )
