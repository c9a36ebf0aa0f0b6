# inventory/views.py
"""
GET  /api/inventory/products/              -> active products (search, low_stock)
POST /api/inventory/products/              -> add a product (ACCOUNTANT); duplicate SKU -> 400
PUT  /api/inventory/products/<pk>/stock/   -> add/subtract stock (ACCOUNTANT)
GET  /api/inventory/services/              -> active services (search)
POST /api/inventory/services/              -> add a service (ACCOUNTANT)
GET  /api/inventory/alerts/low-stock/      -> products at or below threshold
GET  /api/inventory/summary/               -> counts and total stock
"""

from django.db.models import Q, Sum
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from accounts.authz import CanWrite, resolve_actor
from ops.responses import command_failure, created, envelope, paginated, parse_query
from tenant.scoping import get_for_tenant_or_404

from .commands import adjust_stock, create_product, create_service
from .models import Product, Service
from .serializers import (
    ProductCreateSerializer,
    ProductListQuerySerializer,
    ProductSerializer,
    SearchQuerySerializer,
    ServiceCreateSerializer,
    ServiceSerializer,
    StockAdjustSerializer,
)


class ProductListCreateView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, ProductListQuerySerializer)

        products = Product.objects.for_tenant(actor.company).filter(is_active=True).order_by("name", "id")
        search = params.get("search")
        if search:
            products = products.filter(
                Q(name__icontains=search)
                | Q(sku__icontains=search)
                | Q(description__icontains=search)
            )
        if params["low_stock"]:
            products = products.low_stock()

        return paginated("products", products, params, ProductSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = ProductCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_product(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return created({"product": ProductSerializer(result.data).data}, "Product created successfully")


class ProductStockView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def put(self, request, pk):
        actor = resolve_actor(request)
        serializer = StockAdjustSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_for_tenant_or_404(Product, actor.company, pk, label="Product")
        result = adjust_stock(actor, product, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return envelope({"product": ProductSerializer(result.data).data}, message="Stock updated successfully")


class ServiceListCreateView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, SearchQuerySerializer)

        services = Service.objects.for_tenant(actor.company).filter(is_active=True).order_by("name", "id")
        search = params.get("search")
        if search:
            services = services.filter(Q(name__icontains=search) | Q(description__icontains=search))

        return paginated("services", services, params, ServiceSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = ServiceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_service(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return created({"service": ServiceSerializer(result.data).data}, "Service created successfully")


class LowStockAlertView(APIView):
    def get(self, request):
        actor = resolve_actor(request)
        products = Product.objects.for_tenant(actor.company).filter(
            is_active=True,
        ).low_stock().order_by("stock_quantity", "name")
        return envelope({"products": ProductSerializer(products, many=True).data})


class InventorySummaryView(APIView):
    def get(self, request):
        actor = resolve_actor(request)
        products = Product.objects.for_tenant(actor.company).filter(is_active=True)

        return envelope({
            "total_products": products.count(),
            "total_services": Service.objects.for_tenant(actor.company).filter(is_active=True).count(),
            "low_stock_count": products.low_stock().count(),
            "total_stock_quantity": products.aggregate(total=Sum("stock_quantity"))["total"] or 0,
        })
