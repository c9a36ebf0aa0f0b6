# payroll/views.py
"""
GET  /api/payroll/employees/            -> active employees (search, department)
POST /api/payroll/employees/            -> hire (ACCOUNTANT); duplicate code -> 400
GET  /api/payroll/payroll/              -> payroll records (period, employee_id)
POST /api/payroll/payroll/              -> record with computed totals (ACCOUNTANT)
PUT  /api/payroll/payroll/<pk>/status/  -> set status (ACCOUNTANT)
"""

from django.db.models import Q
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from accounts.authz import CanWrite, resolve_actor
from ops.responses import command_failure, created, envelope, paginated, parse_query
from tenant.scoping import get_for_tenant_or_404

from .commands import create_employee, create_payroll_record, update_payroll_status
from .models import Employee, PayrollRecord
from .serializers import (
    EmployeeCreateSerializer,
    EmployeeListQuerySerializer,
    EmployeeSerializer,
    PayrollListQuerySerializer,
    PayrollRecordCreateSerializer,
    PayrollRecordSerializer,
    PayrollStatusSerializer,
)


def _records():
    return PayrollRecord.objects.select_related("employee").prefetch_related("items")


class EmployeeListCreateView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, EmployeeListQuerySerializer)

        employees = Employee.objects.for_tenant(actor.company).filter(is_active=True).order_by("name", "id")
        search = params.get("search")
        if search:
            employees = employees.filter(
                Q(name__icontains=search)
                | Q(employee_code__icontains=search)
                | Q(email__icontains=search)
            )
        if params.get("department"):
            employees = employees.filter(department=params["department"])

        return paginated("employees", employees, params, EmployeeSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = EmployeeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_employee(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return created({"employee": EmployeeSerializer(result.data).data}, "Employee created successfully")


class PayrollListCreateView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, PayrollListQuerySerializer)

        records = _records().for_tenant(actor.company).order_by("-created_at", "-id")
        if params.get("period"):
            records = records.filter(period=params["period"])
        if params.get("employee_id"):
            records = records.filter(employee_id=params["employee_id"])

        return paginated("payroll_records", records, params, PayrollRecordSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = PayrollRecordCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_payroll_record(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        record = _records().get(pk=result.data.pk)
        return created(
            {"payroll_record": PayrollRecordSerializer(record).data},
            "Payroll record created successfully",
        )


class PayrollStatusView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def put(self, request, pk):
        actor = resolve_actor(request)
        serializer = PayrollStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        record = get_for_tenant_or_404(PayrollRecord, actor.company, pk, label="Payroll record", queryset=_records())
        result = update_payroll_status(actor, record, serializer.validated_data["status"])
        if not result.success:
            return command_failure(result)

        return envelope(
            {"payroll_record": PayrollRecordSerializer(result.data).data},
            message="Payroll status updated successfully",
        )
