"""
Senali Logging Configuration

structlog on top of stdlib logging. Every entry carries the service
name, version and, inside a request, the correlation ID and uid.

Two kinds of values never reach the logs:
- credentials (ID tokens, purchase tokens, API keys) are replaced
- text parents write about their family is reduced to its length

Development renders colored console lines; other environments emit JSON.
"""

import logging
import sys
from typing import Any

import structlog

from senali import __version__
from senali.config.settings import Settings

REDACTED = "[REDACTED]"

CREDENTIAL_KEY_FRAGMENTS: frozenset[str] = frozenset({
    "password",
    "token",
    "secret",
    "api_key",
    "apikey",
    "authorization",
    "bearer",
    "credential",
    "private_key",
})

FREE_TEXT_KEYS: frozenset[str] = frozenset({
    "message",
    "content",
    "context",
    "notes",
    "comments",
    "medical_diagnoses",
    "school_info",
})

QUIET_LOGGERS: tuple[str, ...] = (
    "uvicorn.access",
    "httpx",
    "httpcore",
    "openai",
    "firebase_admin",
    "google.auth",
)


def _normalise_key(key: Any) -> str:
    return str(key).lower().replace("-", "_")


def is_credential_key(key: Any) -> bool:
    normalised = _normalise_key(key)
    return any(fragment in normalised for fragment in CREDENTIAL_KEY_FRAGMENTS)


def is_free_text_key(key: Any) -> bool:
    return _normalise_key(key) in FREE_TEXT_KEYS


def _scrub_value(key: Any, value: Any) -> Any:
    if is_credential_key(key):
        return REDACTED
    if is_free_text_key(key) and isinstance(value, str):
        return f"<{len(value)} chars>"
    if isinstance(value, dict):
        return {k: _scrub_value(k, v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub_value(key, item) for item in value]
    return value


def _redact_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor applying the credential and free-text rules."""
    return {
        key: value if key == "event" else _scrub_value(key, value)
        for key, value in event_dict.items()
    }


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("service", "senali-backend")
    event_dict.setdefault("version", __version__)
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """
    Processor chain for the environment.

    Redaction runs before either renderer.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _redact_sensitive_data,
        _add_service_context,
    ]

    if is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    return processors


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the root logger once at startup."""
    level = logging.getLevelName(settings.log_level)

    structlog.configure(
        processors=get_processors(settings.env == "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for a module; pass __name__."""
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Attach the request's correlation ID to every entry in this context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def bind_user_id(user_id: str) -> None:
    """Attach the authenticated uid to every entry in this context."""
    structlog.contextvars.bind_contextvars(user_id=user_id)


def clear_context() -> None:
    """Drop request context; called when the request finishes."""
    structlog.contextvars.clear_contextvars()
