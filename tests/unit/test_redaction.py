"""
Unit Tests for Log and Error Report Redaction

Sensitive keys must never reach logs or Sentry.
"""

from senali.config.logging_config import _redact_sensitive_data
from senali.infrastructure.monitoring.sentry_integration import (
    before_send,
    scrub_dict,
    scrub_string,
)


class TestLogRedaction:

    def test_sensitive_keys_redacted(self):
        event = _redact_sensitive_data(None, "info", {
            "event": "Credits purchased",
            "purchase_token": "abc",
            "api_key": "sk-123",
            "user_id": "uid-1",
        })

        assert event["purchase_token"] == "[REDACTED]"
        assert event["api_key"] == "[REDACTED]"
        assert event["user_id"] == "uid-1"
        assert event["event"] == "Credits purchased"

    def test_nested_values_redacted(self):
        event = _redact_sensitive_data(None, "info", {
            "headers": {"Authorization": "Bearer x", "accept": "json"},
        })
        assert event["headers"] == {"Authorization": "[REDACTED]", "accept": "json"}

    def test_free_text_reduced_to_length(self):
        event = _redact_sensitive_data(None, "info", {
            "event": "Chat message answered",
            "message": "My son Sam is struggling",
            "notes": None,
        })

        assert event["message"] == "<24 chars>"
        assert event["notes"] is None
        assert event["event"] == "Chat message answered"


class TestSentryScrubbing:

    def test_free_text_keys_redacted(self):
        scrubbed = scrub_dict({
            "message": "My son Sam is struggling",
            "notes": "private",
            "profile_id": "p1",
        })

        assert scrubbed["message"] == "[REDACTED]"
        assert scrubbed["notes"] == "[REDACTED]"
        assert scrubbed["profile_id"] == "p1"

    def test_bearer_pattern_scrubbed(self):
        assert "abc.def" not in scrub_string("header Bearer abc.def")

    def test_before_send_scrubs_request(self):
        event = before_send({
            "request": {
                "data": {"message": "hello", "limit": 5},
                "headers": {"Authorization": "Bearer t"},
            },
        }, {})

        assert event["request"]["data"] == {"message": "[REDACTED]", "limit": 5}
        assert event["request"]["headers"]["Authorization"] == "[REDACTED]"
