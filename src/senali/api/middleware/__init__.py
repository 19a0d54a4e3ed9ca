"""API middleware."""

from senali.api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from senali.api.middleware.rate_limiter import RateLimitMiddleware

__all__ = ["ErrorHandlerMiddleware", "register_exception_handlers", "RateLimitMiddleware"]
