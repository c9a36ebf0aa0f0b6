# checks/views.py
"""
GET  /api/checks/                  -> paginated checks (filter: type, status)
POST /api/checks/                  -> record a check (ACCOUNTANT)
PUT  /api/checks/<pk>/status/      -> move a PENDING check to a final status (ACCOUNTANT)
GET  /api/checks/due-soon/?days=N  -> PENDING checks due within N days (default 7)
"""

from datetime import timedelta

from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from accounts.authz import CanWrite, resolve_actor
from ops.responses import command_failure, created, envelope, paginated, parse_query
from tenant.scoping import get_for_tenant_or_404

from .commands import create_check, update_check_status
from .models import Check
from .serializers import (
    CheckCreateSerializer,
    CheckListQuerySerializer,
    CheckSerializer,
    CheckStatusSerializer,
    DueSoonQuerySerializer,
)


class CheckListCreateView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, CheckListQuerySerializer)

        checks = Check.objects.for_tenant(actor.company).order_by("due_date", "id")
        if params.get("check_type"):
            checks = checks.filter(check_type=params["check_type"])
        if params.get("status"):
            checks = checks.filter(status=params["status"])

        return paginated("checks", checks, params, CheckSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = CheckCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_check(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return created({"check": CheckSerializer(result.data).data}, "Check created successfully")


class CheckStatusView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def put(self, request, pk):
        actor = resolve_actor(request)
        serializer = CheckStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        check = get_for_tenant_or_404(Check, actor.company, pk, label="Check")
        result = update_check_status(actor, check, serializer.validated_data["status"])
        if not result.success:
            return command_failure(result)

        return envelope({"check": CheckSerializer(result.data).data}, message="Check status updated successfully")


class DueSoonView(APIView):
    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, DueSoonQuerySerializer)

        now = timezone.now()
        checks = Check.objects.for_tenant(actor.company).filter(
            status=Check.Status.PENDING,
            due_date__gte=now,
            due_date__lte=now + timedelta(days=params["days"]),
        ).order_by("due_date", "id")

        return envelope({"checks": CheckSerializer(checks, many=True).data})
