"""
API Dependencies

Authentication, database session and service wiring for endpoints.
Tests replace get_token_verifier, get_llm and get_async_session
through app.dependency_overrides.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from senali.config import Settings, get_settings
from senali.config.logging_config import bind_user_id, get_logger
from senali.infrastructure.auth import (
    AuthenticatedPrincipal,
    InvalidTokenError,
    TokenVerifier,
    VerifierUnavailableError,
    get_token_verifier,
)
from senali.infrastructure.database import DatabaseManager, get_async_session, get_db_manager
from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.llm import LLMProvider, get_llm_provider
from senali.infrastructure.monitoring import set_user_context
from senali.services.auth import UserService
from senali.services.billing import SubscriptionService
from senali.services.chat import ChatService
from senali.services.profiles import ProfileService
from senali.services.screening.screening_service import ScreeningService
from senali.services.tips import TipService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthenticatedPrincipal:
    """Verify the Firebase ID token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Missing bearer token")

    try:
        return await verifier.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("Token rejected", reason=str(e))
        raise _unauthorized("Invalid or expired token") from None
    except VerifierUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication temporarily unavailable",
        ) from None


async def get_current_user(
    request: Request,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_async_session),
) -> UserModel:
    """The principal's account, provisioned on first use."""
    user = await UserService(session).get_or_provision(principal)

    bind_user_id(user.id)
    set_user_context(user.id)
    request.state.user_id = user.id
    return user


async def require_admin(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedPrincipal:
    """Reject principals whose email is not an administrator's."""
    if not settings.is_admin(principal.email):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return principal


def get_llm() -> LLMProvider:
    return get_llm_provider()


def get_database() -> DatabaseManager:
    return get_db_manager()


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------

def get_user_service(session: AsyncSession = Depends(get_async_session)) -> UserService:
    return UserService(session)


def get_subscription_service(
    session: AsyncSession = Depends(get_async_session),
) -> SubscriptionService:
    return SubscriptionService(session)


def get_profile_service(session: AsyncSession = Depends(get_async_session)) -> ProfileService:
    return ProfileService(session)


def get_chat_service(
    session: AsyncSession = Depends(get_async_session),
    llm: LLMProvider = Depends(get_llm),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    return ChatService(session, llm, settings=settings)


def get_tip_service(
    session: AsyncSession = Depends(get_async_session),
    llm: LLMProvider = Depends(get_llm),
) -> TipService:
    return TipService(session, llm)


def get_screening_service(
    session: AsyncSession = Depends(get_async_session),
    llm: LLMProvider = Depends(get_llm),
) -> ScreeningService:
    return ScreeningService(session, llm)
