# financial/urls.py
from django.urls import path

from .views import (
    AccountDetailView,
    AccountListCreateView,
    CategoryListCreateView,
    SummaryView,
    TransactionListCreateView,
)

app_name = "financial"

urlpatterns = [
    path("transactions/", TransactionListCreateView.as_view(), name="transaction-list"),
    path("accounts/", AccountListCreateView.as_view(), name="account-list"),
    path("accounts/<int:pk>/", AccountDetailView.as_view(), name="account-detail"),
    path("categories/", CategoryListCreateView.as_view(), name="category-list"),
    path("summary/", SummaryView.as_view(), name="summary"),
]
