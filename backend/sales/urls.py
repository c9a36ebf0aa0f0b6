# sales/urls.py
from django.urls import path

from .views import CustomerListCreateView, InvoiceListCreateView, InvoiceStatusView

app_name = "sales"

urlpatterns = [
    path("customers/", CustomerListCreateView.as_view(), name="customer-list"),
    path("invoices/", InvoiceListCreateView.as_view(), name="invoice-list"),
    path("invoices/<int:pk>/status/", InvoiceStatusView.as_view(), name="invoice-status"),
]
