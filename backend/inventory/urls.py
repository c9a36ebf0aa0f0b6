# inventory/urls.py
from django.urls import path

from .views import (
    InventorySummaryView,
    LowStockAlertView,
    ProductListCreateView,
    ProductStockView,
    ServiceListCreateView,
)

app_name = "inventory"

urlpatterns = [
    path("products/", ProductListCreateView.as_view(), name="product-list"),
    path("products/<int:pk>/stock/", ProductStockView.as_view(), name="product-stock"),
    path("services/", ServiceListCreateView.as_view(), name="service-list"),
    path("alerts/low-stock/", LowStockAlertView.as_view(), name="low-stock"),
    path("summary/", InventorySummaryView.as_view(), name="summary"),
]
