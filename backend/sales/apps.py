"""Sales app configuration."""

from django.apps import AppConfig


class SalesConfig(AppConfig):
    """Customers and invoices."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "sales"
    verbose_name = "Sales"
