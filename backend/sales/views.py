# sales/views.py
"""
GET  /api/sales/customers/              -> customers (search over name/email/phone)
POST /api/sales/customers/              -> add a customer (ACCOUNTANT)
GET  /api/sales/invoices/               -> invoices (status, customer_id)
POST /api/sales/invoices/               -> invoice with computed totals and stock movement (ACCOUNTANT)
PUT  /api/sales/invoices/<pk>/status/   -> set status (ACCOUNTANT)
"""

from django.db.models import Q
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from accounts.authz import CanWrite, resolve_actor
from ops.responses import command_failure, created, envelope, paginated, parse_query
from tenant.scoping import get_for_tenant_or_404

from .commands import create_customer, create_invoice, update_invoice_status
from .models import Customer, Invoice
from .serializers import (
    CustomerCreateSerializer,
    CustomerListQuerySerializer,
    CustomerSerializer,
    InvoiceCreateSerializer,
    InvoiceListQuerySerializer,
    InvoiceSerializer,
    InvoiceStatusSerializer,
)


def _invoices():
    return Invoice.objects.select_related("customer").prefetch_related("items__product", "items__service")


class CustomerListCreateView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, CustomerListQuerySerializer)

        customers = Customer.objects.for_tenant(actor.company).order_by("name", "id")
        search = params.get("search")
        if search:
            customers = customers.filter(
                Q(name__icontains=search)
                | Q(email__icontains=search)
                | Q(phone__icontains=search)
            )

        return paginated("customers", customers, params, CustomerSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = CustomerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_customer(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return created({"customer": CustomerSerializer(result.data).data}, "Customer created successfully")


class InvoiceListCreateView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, InvoiceListQuerySerializer)

        invoices = _invoices().for_tenant(actor.company).order_by("-date", "-id")
        if params.get("status"):
            invoices = invoices.filter(status=params["status"])
        if params.get("customer_id"):
            invoices = invoices.filter(customer_id=params["customer_id"])

        return paginated("invoices", invoices, params, InvoiceSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = InvoiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_invoice(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        invoice = _invoices().get(pk=result.data.pk)
        return created({"invoice": InvoiceSerializer(invoice).data}, "Invoice created successfully")


class InvoiceStatusView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def put(self, request, pk):
        actor = resolve_actor(request)
        serializer = InvoiceStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invoice = get_for_tenant_or_404(Invoice, actor.company, pk, label="Invoice", queryset=_invoices())
        result = update_invoice_status(actor, invoice, serializer.validated_data["status"])
        if not result.success:
            return command_failure(result)

        return envelope(
            {"invoice": InvoiceSerializer(result.data).data},
            message="Invoice status updated successfully",
        )
