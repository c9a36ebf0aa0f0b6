"""
Tenant scoping for every tenant-owned model.

Each tenant-owned model declares ``tenant_lookup``: the ORM path from the
model to its owning Company (``"company"`` for direct ownership,
``"account__company"`` for a transaction, and so on). All reads go through
``Model.objects.for_tenant(company)`` so the tenant predicate is always
taken from the resolved principal, never from client input.

References supplied in a request body (``account_id``, ``customer_id``,
``employee_id`` ...) are re-fetched with ``get_for_tenant_or_404`` before
any mutation uses them. An id that exists in another tenant is
indistinguishable from one that does not exist at all.
"""
from django.db import models
from rest_framework.exceptions import NotFound


class TenantQuerySet(models.QuerySet):
    def for_tenant(self, company):
        if company is None:
            return self.none()
        lookup = getattr(self.model, "tenant_lookup", "company")
        return self.filter(**{lookup: company})


class TenantManager(models.Manager.from_queryset(TenantQuerySet)):
    """Default manager for tenant-owned models."""


def get_for_tenant_or_404(model, company, pk, label: str = None, queryset=None):
    """
    Fetch ``model`` by primary key within ``company`` or raise NotFound.

    ``queryset`` lets callers add select_related/filters; it is still
    narrowed to the tenant.
    """
    label = label or model._meta.verbose_name.capitalize()
    qs = queryset if queryset is not None else model.objects.all()
    try:
        return qs.for_tenant(company).get(pk=pk)
    except (model.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"{label} not found")
