"""
Error Handling

Correlation ID tracking for every request, exception handlers mapping
service and LLM errors to JSON responses, and a last-resort handler
for anything unhandled.

Error body: {"error": message, "correlation_id": id}
"""

from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from senali.config.logging_config import bind_correlation_id, clear_context, get_logger
from senali.infrastructure.llm.provider import (
    ContentFilterError,
    LLMProviderError,
    ProviderNotConfiguredError,
    RateLimitError,
)
from senali.infrastructure.monitoring.sentry_integration import capture_exception_with_context
from senali.services.errors import ServiceError

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or "unknown"


def error_response(
    request: Request,
    status_code: int,
    message: str,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Build the standard error body."""
    correlation_id = _correlation_id(request)
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "correlation_id": correlation_id},
        headers={**(headers or {}), CORRELATION_HEADER: correlation_id},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Provides:
    - Correlation ID tracking for all requests
    - Sanitized 500 responses for unhandled errors
    - Error logging with context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid4())
        request.state.correlation_id = correlation_id
        bind_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
            )
            capture_exception_with_context(e, correlation_id=correlation_id)

            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "correlation_id": correlation_id,
                },
                headers={CORRELATION_HEADER: correlation_id},
            )

        finally:
            clear_context()


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.info(
        "Request rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
    )
    return error_response(request, exc.status_code, exc.message)


async def llm_error_handler(request: Request, exc: LLMProviderError) -> JSONResponse:
    if isinstance(exc, ProviderNotConfiguredError):
        return error_response(request, 503, "AI service is not configured")

    if isinstance(exc, RateLimitError):
        retry_after = str(exc.retry_after_seconds or 60)
        return error_response(
            request,
            429,
            "AI service is busy. Please try again shortly.",
            headers={"Retry-After": retry_after},
        )

    if isinstance(exc, ContentFilterError):
        return error_response(request, 422, "The request could not be processed by the AI service")

    logger.error(
        "LLM provider failure",
        path=request.url.path,
        provider=exc.provider,
        error_type=type(exc.original_error).__name__ if exc.original_error else None,
    )
    return error_response(request, 502, "AI service error. Please try again.")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        request,
        exc.status_code,
        str(exc.detail),
        headers=dict(exc.headers) if exc.headers else None,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on an application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(LLMProviderError, llm_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
