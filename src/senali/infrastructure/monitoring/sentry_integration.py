"""
Sentry Error Tracking Integration

Errors are tagged with the request correlation ID and the Firebase uid.
Events pass through the same key rules as the logs, except that
free text is dropped entirely rather than measured.

SECURITY: ID tokens, purchase tokens and chat content are stripped
before anything is sent to Sentry.
"""

import re
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from senali import __version__
from senali.config.logging_config import (
    REDACTED,
    get_logger,
    is_credential_key,
    is_free_text_key,
)

logger = get_logger(__name__)

# Credentials that show up inside exception messages and SQL
INLINE_SECRET = re.compile(
    r"(?:(?:password|api[_-]?key|token|secret)[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+"
    r"|bearer\s+[a-zA-Z0-9\-._~+/]+=*)",
    re.IGNORECASE,
)


def scrub_string(value: str) -> str:
    return INLINE_SECRET.sub(REDACTED, value)


def _scrub(key: Any, value: Any) -> Any:
    if is_credential_key(key) or is_free_text_key(key):
        return REDACTED
    if isinstance(value, dict):
        return scrub_dict(value)
    if isinstance(value, list):
        return [_scrub(key, item) for item in value]
    if isinstance(value, str):
        return scrub_string(value)
    return value


def scrub_dict(data: dict) -> dict:
    """Recursively scrub credentials and free text from a mapping."""
    return {key: _scrub(key, value) for key, value in data.items()}


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """Scrub request data, breadcrumbs and extras before sending."""
    request = event.get("request")
    if request:
        data = request.get("data")
        if isinstance(data, dict):
            request["data"] = scrub_dict(data)
        elif data is not None:
            request["data"] = REDACTED
        if isinstance(request.get("headers"), dict):
            request["headers"] = scrub_dict(request["headers"])

    for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
        if isinstance(breadcrumb.get("data"), dict):
            breadcrumb["data"] = scrub_dict(breadcrumb["data"])

    if "extra" in event:
        event["extra"] = scrub_dict(event["extra"])

    return event


def before_breadcrumb(breadcrumb: dict, hint: dict) -> Optional[dict]:
    """Sanitize SQL breadcrumbs."""
    if breadcrumb.get("category") == "sql" and "message" in breadcrumb:
        breadcrumb["message"] = scrub_string(breadcrumb["message"])
    return breadcrumb


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = f"senali@{__version__}",
    traces_sample_rate: float = 0.1,
) -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True when Sentry was initialized, False when disabled
    """
    if not dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        before_breadcrumb=before_breadcrumb,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            AsyncioIntegration(),
            LoggingIntegration(level=None, event_level=None),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )

    logger.info("Sentry initialized", environment=environment, release=release)
    return True


def set_user_context(user_id: str) -> None:
    """Attach the Firebase uid (no email or name) to subsequent events."""
    sentry_sdk.set_user({"id": user_id})


def capture_exception_with_context(
    exception: Exception,
    correlation_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture exception with additional context.

    Returns: Sentry event ID (None when Sentry is disabled)
    """
    with sentry_sdk.new_scope() as scope:
        if correlation_id:
            scope.set_tag("correlation_id", correlation_id)
        if extra:
            for key, value in scrub_dict(extra).items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
