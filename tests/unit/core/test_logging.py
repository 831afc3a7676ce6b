"""
Tests for logging middleware.
PII masking of candidate data and request logging.
"""

import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.middleware.logging import (
    StructuredFormatter,
    StructuredLoggingMiddleware,
    get_logger,
    is_sensitive_field,
    mask_headers,
    mask_sensitive_data,
    setup_logging,
    should_log_request,
)


class TestSensitiveFieldDetection:
    """Sensitive field name detection."""

    @pytest.mark.parametrize("field_name,expected", [
        ("password", True),
        ("access_token", True),
        ("apiKey", True),
        ("Authorization", True),
        ("cookie", True),
        ("session_id", True),
        ("candidate_email", True),
        ("candidate-phone", True),
        ("candidate_name", False),
        ("status", False),
        ("job_id", False),
    ])
    def test_field_names(self, field_name, expected):
        assert is_sensitive_field(field_name) is expected


class TestMaskSensitiveData:
    """Recursive masking."""

    def test_application_payload(self):
        masked = mask_sensitive_data({
            "candidate_name": "Ada Lovelace",
            "candidate_email": "ada@example.com",
            "candidate_phone": "+44 20 7946 0000",
            "application_data": {"notes": "reach me at ada@example.com"},
        })

        assert masked["candidate_name"] == "Ada Lovelace"
        assert masked["candidate_email"] == "[REDACTED]"
        assert masked["candidate_phone"] == "[REDACTED]"
        assert masked["application_data"]["notes"] == "reach me at [EMAIL]"

    def test_lists_and_scalars(self):
        masked = mask_sensitive_data([{"token": "abc"}, 5, None, "call 555-123-4567"])
        assert masked == [{"token": "[REDACTED]"}, 5, None, "call [PHONE]"]

    def test_depth_limit(self):
        nested = current = {}
        for _ in range(15):
            current["child"] = {}
            current = current["child"]
        masked = mask_sensitive_data(nested, max_depth=3)
        assert "[MAX_DEPTH_EXCEEDED]" in json.dumps(masked)


def test_mask_headers_keeps_scheme():
    masked = mask_headers({"Authorization": "Bearer abc.def", "Accept": "application/json"})
    assert masked["Authorization"] == "Bearer [REDACTED]"
    assert masked["Accept"] == "application/json"


@pytest.mark.parametrize("path,expected", [
    ("/health", False),
    ("/ready", False),
    ("/api/v1/applications", True),
])
def test_should_log_request(path, expected):
    assert should_log_request(path) is expected


def test_structured_formatter():
    record = logging.LogRecord("hireflow", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.request_id = "req-1"
    data = json.loads(StructuredFormatter().format(record))
    assert data["message"] == "hello world"
    assert data["level"] == "INFO"
    assert data["request_id"] == "req-1"


def test_setup_logging_sets_level():
    setup_logging(log_level="WARNING", json_logs=True)
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert isinstance(root.handlers[0].formatter, StructuredFormatter)
    setup_logging(log_level="INFO", json_logs=False)
    assert get_logger("x").name == "x"


class TestMiddleware:
    """Request logging through the middleware."""

    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.add_middleware(StructuredLoggingMiddleware, log_request_body=True)

        @app.post("/applications")
        async def submit(payload: dict):
            return {"ok": True}

        @app.get("/health")
        async def health():
            return {"status": "healthy"}

        return TestClient(app)

    def test_request_id_generated(self, client):
        response = client.post("/applications", json={"candidate_name": "Ada"})
        assert response.headers["x-request-id"]

    def test_request_id_propagated(self, client):
        response = client.get("/health", headers={"x-request-id": "abc-123"})
        assert response.headers["x-request-id"] == "abc-123"

    def test_candidate_email_not_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="core.middleware.logging"):
            client.post(
                "/applications",
                json={"candidate_name": "Ada", "candidate_email": "ada@example.com"},
            )
        assert "ada@example.com" not in caplog.text
        assert "request_started" in caplog.text
