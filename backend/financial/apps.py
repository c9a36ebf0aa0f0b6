"""Financial app configuration."""

from django.apps import AppConfig


class FinancialConfig(AppConfig):
    """Accounts, categories and transaction postings."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "financial"
    verbose_name = "Financial"
