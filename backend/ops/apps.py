"""Operations app configuration."""
import time

from django.apps import AppConfig


class OpsConfig(AppConfig):
    """Health checks, logging and the API error envelope."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "ops"
    verbose_name = "Operations"

    # Monotonic process start, used for the uptime reported by /health
    started_at = time.monotonic()
