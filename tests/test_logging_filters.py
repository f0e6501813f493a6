"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from resumatch.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    set_request_id,
    text_fingerprint,
)


def _logger_with_stream(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_sensitive_filter_redacts_contact_fields():
    """Ensure candidate contact details never reach the log output."""

    logger, stream = _logger_with_stream("test_contact_redaction")

    logger.info(
        "profile_event",
        extra={
            "email": "jane.doe@example.com",
            "phone": "+15551234567",
            "full_name": "Jane Doe",
            "safe_field": "visible",
        },
    )

    output = stream.getvalue()

    assert "jane.doe@example.com" not in output
    assert "+15551234567" not in output
    assert "Jane Doe" not in output
    assert "[REDACTED]" in output
    assert "visible" in output


def test_sensitive_filter_redacts_cv_text():
    """Ensure cv_text and job_text are redacted."""

    logger, stream = _logger_with_stream("test_cv_redaction")

    logger.info(
        "parse_event",
        extra={
            "cv_text": "John Doe, Software Engineer, email@example.com",
            "job_text": "Looking for senior developer with 5 years exp",
            "char_count": 100,
        },
    )

    output = stream.getvalue()

    assert "John Doe" not in output
    assert "email@example.com" not in output
    assert "senior developer" not in output
    assert "char_count" in output


def test_sensitive_filter_allows_safe_fields():
    """Verify safe fields pass through unmodified."""

    logger, stream = _logger_with_stream("test_safe_fields")

    logger.info(
        "safe_event",
        extra={
            "request_id": "req-123",
            "route": "/v1/cv/parse",
            "status": 200,
            "duration_ms": 150.5,
        },
    )

    output = stream.getvalue()

    assert "req-123" in output
    assert "/v1/cv/parse" in output
    assert "200" in output
    assert "[REDACTED]" not in output


def test_sensitive_filter_redacts_nested_dicts():
    """Ensure nested sensitive fields are redacted."""

    logger, stream = _logger_with_stream("test_nested")

    logger.info(
        "nested_event",
        extra={
            "candidate": {
                "email": "jane.doe@example.com",
                "skills_count": 7,
            },
            "headers": {"authorization": "Bearer secret", "user-agent": "pytest"},
        },
    )

    output = stream.getvalue()

    assert "jane.doe@example.com" not in output
    assert "Bearer secret" not in output
    assert "pytest" in output
    assert "skills_count" in output


def test_request_id_from_context():
    """The context request id is attached to records that lack one."""

    logger, stream = _logger_with_stream("test_request_id")

    set_request_id("ctx-456")
    try:
        logger.info("ctx_event")
    finally:
        clear_request_id()

    record = json.loads(stream.getvalue())
    assert record["request_id"] == "ctx-456"
    assert record["message"] == "ctx_event"
    assert record["level"] == "info"


def test_text_fingerprint_is_stable_and_short():
    text = "Jane Doe\njane.doe@example.com"

    assert text_fingerprint(text) == text_fingerprint(text)
    assert len(text_fingerprint(text)) == 16
    assert text_fingerprint(text) != text_fingerprint(text + " ")
    assert "Jane" not in text_fingerprint(text)
