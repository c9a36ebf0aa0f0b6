"""Payroll app configuration."""

from django.apps import AppConfig


class PayrollConfig(AppConfig):
    """Employees and payroll records."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payroll"
    verbose_name = "Payroll"
