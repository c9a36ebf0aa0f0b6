# checks/serializers.py
from decimal import Decimal

from rest_framework import serializers

from ops.responses import PageQuerySerializer
from .models import Check


class CheckSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="check_type", read_only=True)

    class Meta:
        model = Check
        fields = [
            "id", "type", "check_number", "bank_name", "account_number",
            "amount", "issue_date", "due_date", "status", "description",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class CheckCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(source="check_type", choices=Check.CheckType.choices)
    check_number = serializers.CharField(max_length=100)
    bank_name = serializers.CharField(max_length=255)
    account_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    amount = serializers.DecimalField(max_digits=18, decimal_places=2, min_value=Decimal("0"))
    issue_date = serializers.DateTimeField()
    due_date = serializers.DateTimeField()
    description = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        if attrs["due_date"] < attrs["issue_date"]:
            raise serializers.ValidationError({"due_date": "Must not be before issue_date."})
        return attrs


class CheckStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Check.Status.choices)


class CheckListQuerySerializer(PageQuerySerializer):
    type = serializers.ChoiceField(source="check_type", choices=Check.CheckType.choices, required=False)
    status = serializers.ChoiceField(choices=Check.Status.choices, required=False)


class DueSoonQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=0, max_value=365, required=False, default=7)
