# inventory/models.py
"""
Inventory models.

stock_quantity never goes below zero: decrements are conditional
UPDATEs (see inventory.commands.decrement_stock) and the database
enforces the same rule with a check constraint.
"""

from decimal import Decimal

from django.db import models
from django.db.models import F

from accounts.models import Company
from tenant.scoping import TenantManager, TenantQuerySet


class ProductQuerySet(TenantQuerySet):
    def low_stock(self):
        """Products at or below their own threshold, filtered in the database."""
        return self.filter(stock_quantity__lte=F("low_stock_threshold"))


class Product(models.Model):
    tenant_lookup = "company"

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="products",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    sku = models.CharField(max_length=100, null=True, blank=True)
    price = models.DecimalField(max_digits=18, decimal_places=2)
    cost = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    stock_quantity = models.IntegerField(default=0)
    low_stock_threshold = models.IntegerField(default=10)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager.from_queryset(ProductQuerySet)()

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "sku"],
                condition=models.Q(sku__isnull=False),
                name="uniq_product_sku_per_company",
            ),
            models.CheckConstraint(
                condition=models.Q(stock_quantity__gte=0),
                name="product_stock_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})" if self.sku else self.name

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.low_stock_threshold


class Service(models.Model):
    tenant_lookup = "company"

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="services",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=18, decimal_places=2)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
