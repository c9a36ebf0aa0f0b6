# tests/test_ops.py
"""
Tests for operational plumbing: health probes, the startup connect loop,
the error envelope and configuration parsing.
"""

import json
import logging
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.db import OperationalError
from rest_framework.exceptions import NotFound

from bizledger_backend.settings import _parse_duration
from ops import database, exceptions
from ops.database import connect_with_retry
from ops.exceptions import Conflict, envelope_exception_handler
from ops.health import HealthCheck
from ops.logging_config import JsonFormatter, get_logging_config


# =============================================================================
# Health
# =============================================================================

@pytest.mark.django_db
class TestHealth:

    def test_health_reports_uptime_and_storage(self, api_client):
        response = api_client.get("/health/")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["uptime"] >= 0
        assert body["timestamp"]
        assert body["database"]["status"] == "healthy"
        assert body["database"]["database"] == "SQLite"

    def test_liveness(self, api_client):
        assert api_client.get("/health/live/").json() == {"status": "alive"}

    def test_readiness(self, api_client):
        response = api_client.get("/health/ready/")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_readiness_when_database_is_down(self, api_client, monkeypatch):
        monkeypatch.setattr(
            HealthCheck, "check_database",
            staticmethod(lambda alias="default": {"status": "unhealthy", "database": "Unknown"}),
        )

        response = api_client.get("/health/ready/")
        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"


# =============================================================================
# Startup connect loop
# =============================================================================

class FakeConnection:
    vendor = "postgresql"

    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def ensure_connection(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise OperationalError("connection refused")


class TestConnectWithRetry:

    def _patch(self, monkeypatch, failures):
        conn = FakeConnection(failures)
        monkeypatch.setattr(database, "connections", {"default": conn})
        return conn

    def test_recovers_after_transient_failures(self, monkeypatch):
        conn = self._patch(monkeypatch, failures=2)
        sleeps = []

        assert connect_with_retry(attempts=5, delay=3, sleep=sleeps.append) is True
        assert conn.calls == 3
        assert sleeps == [3, 3]

    def test_gives_up_after_fixed_attempts(self, monkeypatch):
        conn = self._patch(monkeypatch, failures=99)
        sleeps = []

        assert connect_with_retry(attempts=5, delay=3, sleep=sleeps.append) is False
        assert conn.calls == 5
        assert sleeps == [3, 3, 3, 3]

    def test_defaults_come_from_settings(self, monkeypatch, settings):
        settings.DB_CONNECT_ATTEMPTS = 2
        settings.DB_CONNECT_DELAY = 0.5
        conn = self._patch(monkeypatch, failures=99)
        sleeps = []

        assert connect_with_retry(sleep=sleeps.append) is False
        assert conn.calls == 2
        assert sleeps == [0.5]

    def test_storage_variant_names(self, monkeypatch):
        self._patch(monkeypatch, failures=0)
        assert database.storage_variant() == "PostgreSQL"

        FakeConnection.vendor = "oracle"
        try:
            assert database.storage_variant() == "Unknown"
        finally:
            FakeConnection.vendor = "postgresql"


# =============================================================================
# Error envelope
# =============================================================================

class TestErrorEnvelope:

    def test_unexpected_exception_is_generic_500(self, monkeypatch):
        logged = []
        monkeypatch.setattr(exceptions.logger, "exception", lambda msg, *args, **kwargs: logged.append(msg))

        response = envelope_exception_handler(RuntimeError("secret detail"), {})

        assert response.status_code == 500
        assert response.data == {"success": False, "message": "Internal server error", "error": "server_error"}
        assert "secret detail" not in str(response.data)
        assert logged == ["Unhandled API error"]

    def test_conflict_is_400(self):
        response = envelope_exception_handler(Conflict("Product with this SKU already exists"), {})

        assert response.status_code == 400
        assert response.data["error"] == "conflict"

    def test_not_found(self):
        response = envelope_exception_handler(NotFound("Customer not found"), {})

        assert response.status_code == 404
        assert response.data == {"success": False, "message": "Customer not found", "error": "not_found"}

    @pytest.mark.django_db
    def test_unmatched_route_uses_envelope(self, api_client):
        response = api_client.get("/api/does-not-exist/")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "API endpoint not found", "error": "not_found"}

    @pytest.mark.django_db
    def test_unmatched_route_is_json_in_debug(self, api_client, settings):
        settings.DEBUG = True

        response = api_client.get("/api/does-not-exist/")

        assert response.status_code == 404
        assert response["Content-Type"] == "application/json"
        assert response.json()["error"] == "not_found"


class TestSettings:

    @pytest.mark.parametrize("value,expected", [
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30m", timedelta(minutes=30)),
        ("2w", timedelta(weeks=2)),
        ("3600", timedelta(seconds=3600)),
    ])
    def test_parse_duration(self, value, expected):
        assert _parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "seven days", "7y", "-1d"])
    def test_bad_duration(self, value):
        with pytest.raises(ImproperlyConfigured):
            _parse_duration(value)


class TestJsonFormatter:

    def test_extra_fields_are_nested(self):
        record = logging.LogRecord("financial.ledger", logging.INFO, __file__, 10, "Transaction posted", (), None)
        record.company_id = 7
        record.amount = Decimal("12.50")

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "financial.ledger"
        assert entry["message"] == "Transaction posted"
        assert entry["extra"] == {"company_id": 7, "amount": "12.50"}

    def test_console_format_in_debug(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        config = get_logging_config(debug=True)

        assert "verbose" in config["formatters"]
        assert config["loggers"]["financial"]["propagate"] is False
