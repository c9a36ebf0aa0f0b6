from django.urls import include, path, re_path

from ops.views import not_found

urlpatterns = [
    # Operations endpoints (no auth required)
    path("health/", include("ops.urls")),

    # API
    path("api/auth/", include("accounts.urls")),
    path("api/financial/", include("financial.urls")),
    path("api/checks/", include("checks.urls")),
    path("api/payroll/", include("payroll.urls")),
    path("api/sales/", include("sales.urls")),
    path("api/inventory/", include("inventory.urls")),

    # Unmatched routes get the JSON envelope whatever DEBUG is set to
    re_path(r"^.*$", not_found),
]

handler404 = "ops.views.not_found"
handler500 = "ops.views.server_error"
