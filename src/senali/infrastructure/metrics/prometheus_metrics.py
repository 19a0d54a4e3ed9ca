"""
Prometheus Metrics

Metrics for Senali backend observability.
Exposes metrics at /metrics endpoint for Prometheus scraping.

Only increment/observe here; never block on metrics operations.
"""

import time
from functools import wraps
from typing import Callable, Iterable

from fastapi import APIRouter, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Histogram,
    Info,
    generate_latest,
)

from senali import __version__

# =============================================================================
# LLM METRICS
# =============================================================================

LLM_REQUESTS_TOTAL = Counter(
    "senali_llm_requests_total",
    "Total LLM requests by provider",
    ["provider", "status"],  # success, error, rate_limited
)

LLM_LATENCY = Histogram(
    "senali_llm_latency_seconds",
    "LLM response latency",
    ["provider"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

LLM_TOKENS_USED = Counter(
    "senali_llm_tokens_total",
    "Total tokens used by LLM",
    ["provider", "type"],  # input, output
)

# =============================================================================
# PRODUCT METRICS
# =============================================================================

CHAT_MESSAGES_TOTAL = Counter(
    "senali_chat_messages_total",
    "Chat messages handled",
    ["outcome"],  # answered, no_credits, failed
)

CREDITS_SPENT_TOTAL = Counter(
    "senali_credits_spent_total",
    "Credits consumed by AI features",
    ["feature"],  # chat, diagnostic_summary
)

TIPS_GENERATED_TOTAL = Counter(
    "senali_tips_generated_total",
    "Daily tips generated",
    ["category"],
)

SCREENING_RESULTS_TOTAL = Counter(
    "senali_screening_results_total",
    "Checklist screening results",
    ["condition", "probability"],
)

# =============================================================================
# API METRICS
# =============================================================================

RATE_LIMIT_EXCEEDED = Counter(
    "senali_rate_limit_exceeded_total",
    "Rate limit exceeded events",
    ["client_type"],  # llm, standard
)

SYSTEM_INFO = Info(
    "senali_system",
    "Senali system information",
)

SYSTEM_INFO.info({
    "version": __version__,
    "environment": "development",
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _llm_status(error: Exception) -> str:
    if getattr(error, "retry_after_seconds", None) is not None:
        return "rate_limited"
    return "error"


def track_llm_request(provider: str) -> Callable:
    """Wrap an async provider call: outcome, token usage and latency per attempt."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                LLM_REQUESTS_TOTAL.labels(provider=provider, status=_llm_status(e)).inc()
                raise
            finally:
                LLM_LATENCY.labels(provider=provider).observe(time.perf_counter() - started)

            LLM_REQUESTS_TOTAL.labels(provider=provider, status="success").inc()
            usage = getattr(result, "usage", None) or {}
            LLM_TOKENS_USED.labels(provider=provider, type="input").inc(usage.get("prompt_tokens", 0))
            LLM_TOKENS_USED.labels(provider=provider, type="output").inc(usage.get("completion_tokens", 0))
            return result
        return wrapper
    return decorator


def track_chat_message(outcome: str) -> None:
    """Record the outcome of a chat request."""
    CHAT_MESSAGES_TOTAL.labels(outcome=outcome).inc()


def track_credit_spend(feature: str, amount: int) -> None:
    """Record credits consumed by a feature."""
    CREDITS_SPENT_TOTAL.labels(feature=feature).inc(amount)


def track_tip_generated(category: str) -> None:
    """Record a generated tip."""
    TIPS_GENERATED_TOTAL.labels(category=category).inc()


def track_screening_results(results: Iterable) -> None:
    """Record checklist screening results (objects with condition/probability)."""
    for result in results:
        SCREENING_RESULTS_TOTAL.labels(
            condition=result.condition,
            probability=str(result.probability),
        ).inc()


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )


def update_system_info(environment: str, version: str = __version__) -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
