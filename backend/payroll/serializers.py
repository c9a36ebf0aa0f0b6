# payroll/serializers.py
from decimal import Decimal

from rest_framework import serializers

from ops.responses import PageQuerySerializer
from .models import Employee, PayrollItem, PayrollRecord

MONEY = dict(max_digits=18, decimal_places=2)


class EmployeeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = [
            "id", "employee_code", "name", "email", "phone", "position",
            "department", "hire_date", "salary", "is_active",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class EmployeeRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = ["id", "name", "employee_code", "position"]


class PayrollItemSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="item_type", read_only=True)

    class Meta:
        model = PayrollItem
        fields = ["id", "type", "description", "amount"]


class PayrollRecordSerializer(serializers.ModelSerializer):
    employee = EmployeeRefSerializer(read_only=True)
    items = PayrollItemSerializer(many=True, read_only=True)

    class Meta:
        model = PayrollRecord
        fields = [
            "id", "employee", "period", "gross_pay", "deductions", "net_pay",
            "status", "items", "created_at", "updated_at",
        ]
        read_only_fields = fields


class EmployeeCreateSerializer(serializers.Serializer):
    employee_code = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    position = serializers.CharField(max_length=255)
    department = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    hire_date = serializers.DateTimeField()
    salary = serializers.DecimalField(min_value=Decimal("0"), **MONEY)


class PayrollItemInputSerializer(serializers.Serializer):
    type = serializers.ChoiceField(source="item_type", choices=PayrollItem.ItemType.choices)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    amount = serializers.DecimalField(min_value=Decimal("0"), **MONEY)


class PayrollRecordCreateSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    period = serializers.CharField(max_length=20)
    items = PayrollItemInputSerializer(many=True, allow_empty=False)


class PayrollStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PayrollRecord.Status.choices)


class EmployeeListQuerySerializer(PageQuerySerializer):
    search = serializers.CharField(required=False, allow_blank=True)
    department = serializers.CharField(required=False, allow_blank=True)


class PayrollListQuerySerializer(PageQuerySerializer):
    period = serializers.CharField(required=False, allow_blank=True)
    employee_id = serializers.IntegerField(required=False)
