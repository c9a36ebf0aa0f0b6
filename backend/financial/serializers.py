# financial/serializers.py
"""
Serializers for the financial API.

Input serializers do all parsing: amounts are Decimal fields (a bad
number is a 400, never NaN), ids are integers, dates are ISO 8601.
The wire name ``type`` maps onto the models' ``*_type`` fields.
The actual business logic happens in financial.ledger.
"""

from decimal import Decimal

from rest_framework import serializers

from ops.responses import PageQuerySerializer
from .models import Account, Category, Transaction

MONEY = dict(max_digits=18, decimal_places=2)


# =============================================================================
# Output
# =============================================================================

class AccountSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="account_type", read_only=True)

    class Meta:
        model = Account
        fields = [
            "id", "company", "name", "type", "balance", "currency",
            "is_active", "created_at", "updated_at",
        ]
        read_only_fields = fields


class AccountRefSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="account_type", read_only=True)

    class Meta:
        model = Account
        fields = ["id", "name", "type"]


class CategorySerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="category_type", read_only=True)

    class Meta:
        model = Category
        fields = ["id", "name", "type", "parent", "created_at"]
        read_only_fields = fields


class CategoryRefSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="category_type", read_only=True)

    class Meta:
        model = Category
        fields = ["id", "name", "type"]


class TransactionSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="transaction_type", read_only=True)
    account = AccountRefSerializer(read_only=True)
    transfer_account = AccountRefSerializer(read_only=True)
    category = CategoryRefSerializer(read_only=True)

    class Meta:
        model = Transaction
        fields = [
            "id", "account", "transfer_account", "category", "amount",
            "type", "description", "reference", "date", "created_at",
        ]
        read_only_fields = fields


# =============================================================================
# Input
# =============================================================================

class AccountCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(source="account_type", choices=Account.AccountType.choices)
    balance = serializers.DecimalField(required=False, default=Decimal("0.00"), **MONEY)
    currency = serializers.CharField(max_length=3, required=False, default="USD")

    def validate_currency(self, value: str):
        return value.upper()


class CategoryCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(source="category_type", choices=Category.CategoryType.choices)
    parent_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class TransactionCreateSerializer(serializers.Serializer):
    account_id = serializers.IntegerField()
    amount = serializers.DecimalField(min_value=Decimal("0"), **MONEY)
    type = serializers.ChoiceField(source="transaction_type", choices=Transaction.TransactionType.choices)
    date = serializers.DateTimeField()
    category_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    transfer_account_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")

    def validate(self, attrs):
        is_transfer = attrs["transaction_type"] == Transaction.TransactionType.TRANSFER
        if is_transfer and attrs.get("transfer_account_id") is None:
            raise serializers.ValidationError({"transfer_account_id": "Required for TRANSFER postings."})
        return attrs


class DateRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateTimeField(required=False)
    end_date = serializers.DateTimeField(required=False)

    def validate(self, attrs):
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if start and end and start > end:
            raise serializers.ValidationError("start_date must not be after end_date.")
        return attrs


class TransactionListQuerySerializer(PageQuerySerializer, DateRangeQuerySerializer):
    type = serializers.ChoiceField(source="transaction_type", choices=Transaction.TransactionType.choices, required=False)
    category_id = serializers.IntegerField(required=False)
    account_id = serializers.IntegerField(required=False)
