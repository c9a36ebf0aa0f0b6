"""Inventory app configuration."""

from django.apps import AppConfig


class InventoryConfig(AppConfig):
    """Products with stock and sellable services."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "inventory"
    verbose_name = "Inventory"
