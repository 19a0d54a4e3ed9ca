"""
Rate Limiting Middleware

Per-client token buckets kept in process memory. A client is the
verified user when an upstream layer has set `request.state.user_id`,
otherwise the caller's IP. Bearer strings are not verified at this
layer and never select the bucket.

Routes that spend model calls draw from their own, smaller bucket so a
chatty client cannot starve the rest of the API and vice versa.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from senali.config.logging_config import get_logger
from senali.config.settings import RateLimitSettings
from senali.infrastructure.metrics import RATE_LIMIT_EXCEEDED

logger = get_logger(__name__)

STANDARD = "standard"
LLM = "llm"


@dataclass
class RateLimitConfig:
    requests_per_minute: int = 60
    llm_requests_per_minute: int = 20
    # extra headroom on the standard bucket only
    burst_size: int = 10
    trust_forwarded_for: bool = False

    @classmethod
    def from_settings(cls, settings: RateLimitSettings) -> "RateLimitConfig":
        return cls(
            requests_per_minute=settings.rate_limit_requests_per_minute,
            llm_requests_per_minute=settings.rate_limit_llm_requests_per_minute,
            trust_forwarded_for=settings.rate_limit_trust_forwarded_for,
        )

    def bucket_shape(self, scope: str) -> tuple[float, int]:
        """(refill per second, capacity) for a bucket scope."""
        if scope == LLM:
            return self.llm_requests_per_minute / 60.0, self.llm_requests_per_minute
        return (
            self.requests_per_minute / 60.0,
            self.requests_per_minute + self.burst_size,
        )


class TokenBucket:
    """Refills continuously at `rate` tokens/second up to `capacity`."""

    def __init__(self, rate: float, capacity: int) -> None:
        self.rate = rate
        self.capacity = capacity
        self.tokens = float(capacity)
        self.last_update = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self, now: float) -> None:
        self.tokens = min(self.capacity, self.tokens + (now - self.last_update) * self.rate)
        self.last_update = now

    async def acquire(self, tokens: int = 1) -> bool:
        async with self._lock:
            self._refill(time.monotonic())
            if self.tokens < tokens:
                return False
            self.tokens -= tokens
            return True

    @property
    def available_tokens(self) -> int:
        return int(self.tokens)


class RateLimiter:
    """Bucket registry keyed by (scope, client)."""

    IDLE_EXPIRY_SECONDS = 600
    SWEEP_INTERVAL_SECONDS = 300

    def __init__(self, config: Optional[RateLimitConfig] = None) -> None:
        self.config = config or RateLimitConfig()
        self._buckets: dict[tuple[str, str], TokenBucket] = {}
        self._next_sweep = time.monotonic() + self.SWEEP_INTERVAL_SECONDS

    def _bucket(self, scope: str, client_id: str) -> TokenBucket:
        key = (scope, client_id)
        bucket = self._buckets.get(key)
        if bucket is None:
            rate, capacity = self.config.bucket_shape(scope)
            bucket = self._buckets[key] = TokenBucket(rate=rate, capacity=capacity)
        return bucket

    def _sweep(self) -> None:
        now = time.monotonic()
        if now < self._next_sweep:
            return
        self._next_sweep = now + self.SWEEP_INTERVAL_SECONDS
        cutoff = now - self.IDLE_EXPIRY_SECONDS
        for key in [k for k, b in self._buckets.items() if b.last_update < cutoff]:
            del self._buckets[key]

    async def check_rate_limit(
        self,
        client_id: str,
        is_llm_endpoint: bool = False,
    ) -> tuple[bool, int]:
        """Take one token. Returns (allowed, tokens left)."""
        self._sweep()
        scope = LLM if is_llm_endpoint else STANDARD
        bucket = self._bucket(scope, client_id)

        allowed = await bucket.acquire()
        if not allowed:
            RATE_LIMIT_EXCEEDED.labels(client_type=scope).inc()
            logger.warning("Client throttled", client=client_id[:12], scope=scope)

        return allowed, bucket.available_tokens


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Throttles API traffic per client.

    Probes, metrics and the docs pages are never throttled. A throttled
    request gets the standard error body with a 429 and Retry-After.
    """

    EXEMPT_PATHS = frozenset({"/", "/metrics", "/docs", "/redoc", "/openapi.json"})
    EXEMPT_SUFFIXES = ("/health", "/health/live", "/health/ready")

    def __init__(
        self,
        app,
        config: Optional[RateLimitConfig] = None,
        api_prefix: str = "/api",
    ) -> None:
        super().__init__(app)
        self.limiter = RateLimiter(config)
        prefix = api_prefix.rstrip("/")
        self.llm_routes = frozenset({
            ("POST", f"{prefix}/chat"),
            ("POST", f"{prefix}/tips/generate"),
            ("GET", f"{prefix}/tips/today"),
        })

    def is_exempt(self, path: str) -> bool:
        if path in self.EXEMPT_PATHS or path.startswith("/docs"):
            return True
        return path.endswith(self.EXEMPT_SUFFIXES)

    def is_llm_endpoint(self, method: str, path: str) -> bool:
        path = path.rstrip("/")
        if method == "POST" and path.endswith("/diagnostic-summary"):
            return True
        return (method, path) in self.llm_routes

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if self.is_exempt(path):
            return await call_next(request)

        allowed, remaining = await self.limiter.check_rate_limit(
            client_key(request, trust_forwarded_for=self.limiter.config.trust_forwarded_for),
            is_llm_endpoint=self.is_llm_endpoint(request.method, path),
        )

        if not allowed:
            return JSONResponse(
                status_code=429,
                content={
                    "error": "Rate limit exceeded. Please try again later.",
                    "correlation_id": getattr(request.state, "correlation_id", "unknown"),
                },
                headers={"Retry-After": "60", "X-RateLimit-Remaining": "0"},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response


def client_key(request: Request, trust_forwarded_for: bool = False) -> str:
    """`user:<uid>` once the caller is verified, `ip:<addr>` otherwise."""
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"

    if trust_forwarded_for:
        forwarded = request.headers.get("X-Forwarded-For", "")
        if forwarded.strip():
            return "ip:" + forwarded.split(",")[0].strip()
    return "ip:" + (request.client.host if request.client else "unknown")
