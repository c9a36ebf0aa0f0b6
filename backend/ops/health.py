"""
Health check endpoints for operations monitoring.

Endpoints:
- /health/       - uptime plus storage health and variant
- /health/live/  - liveness probe (is the process running?)
- /health/ready/ - readiness probe (can we reach the database?)
"""
import logging
import time
from typing import Any, Dict

from django.apps import apps
from django.db import connections
from django.http import JsonResponse
from django.utils import timezone
from django.views import View

from ops.database import storage_variant

logger = logging.getLogger(__name__)


class HealthCheck:
    """Health check implementation."""

    @staticmethod
    def uptime_seconds() -> float:
        started_at = apps.get_app_config("ops").started_at
        return round(time.monotonic() - started_at, 3)

    @staticmethod
    def check_database(alias: str = "default") -> Dict[str, Any]:
        """Check database connectivity."""
        start = time.time()
        try:
            conn = connections[alias]
            conn.ensure_connection()
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
            duration_ms = (time.time() - start) * 1000
            return {
                "status": "healthy",
                "database": storage_variant(alias),
                "duration_ms": round(duration_ms, 2),
            }
        except Exception as e:
            logger.error("Database health check failed: %s", e, extra={"alias": alias})
            duration_ms = (time.time() - start) * 1000
            return {
                "status": "unhealthy",
                "database": "Unknown",
                "error": str(e),
                "duration_ms": round(duration_ms, 2),
            }


class HealthView(View):
    """Process uptime and storage health. Always 200 so degraded mode is observable."""

    def get(self, request):
        return JsonResponse({
            "status": "OK",
            "timestamp": timezone.now().isoformat(),
            "uptime": HealthCheck.uptime_seconds(),
            "database": HealthCheck.check_database("default"),
        })


class LivenessView(View):
    """
    Liveness probe.

    Returns 200 if the process is running.
    """

    def get(self, request):
        return JsonResponse({"status": "alive"})


class ReadinessView(View):
    """
    Readiness probe.

    Returns 200 if the service can handle traffic, 503 otherwise.
    """

    def get(self, request):
        db_check = HealthCheck.check_database("default")

        if db_check["status"] == "healthy":
            return JsonResponse({
                "status": "ready",
                "database": db_check,
            })
        return JsonResponse({
            "status": "not_ready",
            "database": db_check,
        }, status=503)
