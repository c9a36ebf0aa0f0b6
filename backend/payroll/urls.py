# payroll/urls.py
from django.urls import path

from .views import EmployeeListCreateView, PayrollListCreateView, PayrollStatusView

app_name = "payroll"

urlpatterns = [
    path("employees/", EmployeeListCreateView.as_view(), name="employee-list"),
    path("payroll/", PayrollListCreateView.as_view(), name="payroll-list"),
    path("payroll/<int:pk>/status/", PayrollStatusView.as_view(), name="payroll-status"),
]
