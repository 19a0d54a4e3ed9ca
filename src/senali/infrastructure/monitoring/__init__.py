"""Error tracking and monitoring integrations."""

from senali.infrastructure.monitoring.sentry_integration import (
    init_sentry,
    set_user_context,
    capture_exception_with_context,
    scrub_dict,
)

__all__ = [
    "init_sentry",
    "set_user_context",
    "capture_exception_with_context",
    "scrub_dict",
]
