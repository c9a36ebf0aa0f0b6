"""Checks app configuration."""

from django.apps import AppConfig


class ChecksConfig(AppConfig):
    """Receivable and payable checks."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "checks"
    verbose_name = "Checks"
