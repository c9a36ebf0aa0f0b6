# checks/models.py
from django.db import models

from accounts.models import Company
from tenant.scoping import TenantManager


class Check(models.Model):
    """
    A paper check the company received (RECEIVABLE) or issued (PAYABLE).

    Status changes go through checks.policies; PENDING is the only
    state a check can leave.
    """

    class CheckType(models.TextChoices):
        RECEIVABLE = "RECEIVABLE", "Receivable"
        PAYABLE = "PAYABLE", "Payable"

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        CLEARED = "CLEARED", "Cleared"
        BOUNCED = "BOUNCED", "Bounced"
        CANCELLED = "CANCELLED", "Cancelled"

    tenant_lookup = "company"

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="checks",
    )
    check_type = models.CharField(
        max_length=20,
        choices=CheckType.choices,
        db_column="type",
    )
    check_number = models.CharField(max_length=100)
    bank_name = models.CharField(max_length=255)
    account_number = models.CharField(max_length=100, blank=True, default="")
    amount = models.DecimalField(max_digits=18, decimal_places=2)
    issue_date = models.DateTimeField()
    due_date = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["due_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=0),
                name="check_amount_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["company", "status", "due_date"], name="checks_company_status_due_idx"),
        ]

    def __str__(self):
        return f"{self.check_type} #{self.check_number} ({self.status})"
