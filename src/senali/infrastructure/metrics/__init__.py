"""Metrics infrastructure package."""

from senali.infrastructure.metrics.prometheus_metrics import (
    LLM_REQUESTS_TOTAL,
    LLM_LATENCY,
    LLM_TOKENS_USED,
    CHAT_MESSAGES_TOTAL,
    CREDITS_SPENT_TOTAL,
    TIPS_GENERATED_TOTAL,
    SCREENING_RESULTS_TOTAL,
    RATE_LIMIT_EXCEEDED,
    track_llm_request,
    track_chat_message,
    track_credit_spend,
    track_tip_generated,
    track_screening_results,
    update_system_info,
    metrics_router,
)

__all__ = [
    "LLM_REQUESTS_TOTAL",
    "LLM_LATENCY",
    "LLM_TOKENS_USED",
    "CHAT_MESSAGES_TOTAL",
    "CREDITS_SPENT_TOTAL",
    "TIPS_GENERATED_TOTAL",
    "SCREENING_RESULTS_TOTAL",
    "RATE_LIMIT_EXCEEDED",
    "track_llm_request",
    "track_chat_message",
    "track_credit_spend",
    "track_tip_generated",
    "track_screening_results",
    "update_system_info",
    "metrics_router",
]
