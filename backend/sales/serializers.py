# sales/serializers.py
from decimal import Decimal

from rest_framework import serializers

from ops.responses import PageQuerySerializer
from .models import Customer, Invoice, InvoiceItem

MONEY = dict(max_digits=18, decimal_places=2, min_value=Decimal("0"))


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "email", "phone", "address", "tax_id", "created_at", "updated_at"]
        read_only_fields = fields


class CustomerRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "email"]


class InvoiceItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True, default=None)
    service_name = serializers.CharField(source="service.name", read_only=True, default=None)

    class Meta:
        model = InvoiceItem
        fields = [
            "id", "product", "product_name", "service", "service_name",
            "description", "quantity", "price", "total",
        ]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    customer = CustomerRefSerializer(read_only=True)
    items = InvoiceItemSerializer(many=True, read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "id", "invoice_number", "customer", "date", "due_date",
            "subtotal", "tax", "total", "status", "notes", "items",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class CustomerCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    address = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    tax_id = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")


class InvoiceItemInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    service_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(**MONEY)

    def validate(self, attrs):
        if attrs.get("product_id") is not None and attrs.get("service_id") is not None:
            raise serializers.ValidationError("A line references either a product or a service, not both.")
        return attrs


class InvoiceCreateSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField()
    invoice_number = serializers.CharField(max_length=50, required=False, allow_blank=True, default=None)
    date = serializers.DateTimeField(required=False, allow_null=True, default=None)
    due_date = serializers.DateTimeField(required=False, allow_null=True, default=None)
    items = InvoiceItemInputSerializer(many=True, allow_empty=False)
    tax = serializers.DecimalField(required=False, default=Decimal("0.00"), **MONEY)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class InvoiceStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Invoice.Status.choices)


class CustomerListQuerySerializer(PageQuerySerializer):
    search = serializers.CharField(required=False, allow_blank=True)


class InvoiceListQuerySerializer(PageQuerySerializer):
    status = serializers.ChoiceField(choices=Invoice.Status.choices, required=False)
    customer_id = serializers.IntegerField(required=False)
