# checks/urls.py
from django.urls import path

from .views import CheckListCreateView, CheckStatusView, DueSoonView

app_name = "checks"

urlpatterns = [
    path("", CheckListCreateView.as_view(), name="check-list"),
    path("due-soon/", DueSoonView.as_view(), name="due-soon"),
    path("<int:pk>/status/", CheckStatusView.as_view(), name="check-status"),
]
