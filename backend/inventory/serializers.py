# inventory/serializers.py
from decimal import Decimal

from rest_framework import serializers

from ops.responses import PageQuerySerializer
from .commands import ADD, SUBTRACT
from .models import Product, Service

MONEY = dict(max_digits=18, decimal_places=2, min_value=Decimal("0"))


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id", "name", "description", "sku", "price", "cost",
            "stock_quantity", "low_stock_threshold", "is_low_stock",
            "is_active", "created_at", "updated_at",
        ]
        read_only_fields = fields


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ["id", "name", "description", "price", "is_active", "created_at", "updated_at"]
        read_only_fields = fields


class ProductCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    sku = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True, default=None)
    price = serializers.DecimalField(**MONEY)
    cost = serializers.DecimalField(required=False, default=Decimal("0.00"), **MONEY)
    stock_quantity = serializers.IntegerField(min_value=0, required=False, default=0)
    low_stock_threshold = serializers.IntegerField(min_value=0, required=False, default=10)

    def validate_sku(self, value):
        return value.strip() if value else None


class StockAdjustSerializer(serializers.Serializer):
    operation = serializers.ChoiceField(choices=[ADD, SUBTRACT])
    quantity = serializers.IntegerField(min_value=1)


class ServiceCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    price = serializers.DecimalField(**MONEY)


class SearchQuerySerializer(PageQuerySerializer):
    search = serializers.CharField(required=False, allow_blank=True)


class ProductListQuerySerializer(SearchQuerySerializer):
    low_stock = serializers.BooleanField(required=False, default=False)
