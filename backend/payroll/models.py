# payroll/models.py
"""
Payroll models.

- Employee: a person on the company payroll, identified by employee_code
- PayrollRecord: one employee's pay for a period
- PayrollItem: an earning or a deduction line of a record

gross_pay, deductions and net_pay are computed from the items once,
when the record is created, and stored. Status changes never
recompute them.
"""

from decimal import Decimal

from django.db import models

from accounts.models import Company
from tenant.scoping import TenantManager


class Employee(models.Model):
    tenant_lookup = "company"

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="employees",
    )
    employee_code = models.CharField(max_length=50)
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    position = models.CharField(max_length=255)
    department = models.CharField(max_length=255, blank=True, default="")
    hire_date = models.DateTimeField()
    salary = models.DecimalField(max_digits=18, decimal_places=2)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "employee_code"],
                name="uniq_employee_code_per_company",
            ),
        ]

    def __str__(self):
        return f"{self.employee_code} - {self.name}"


class PayrollRecord(models.Model):

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        APPROVED = "APPROVED", "Approved"
        PAID = "PAID", "Paid"

    tenant_lookup = "employee__company"

    employee = models.ForeignKey(
        Employee,
        on_delete=models.PROTECT,
        related_name="payroll_records",
    )
    period = models.CharField(max_length=20)
    gross_pay = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    deductions = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    net_pay = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.DRAFT,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.employee_id} {self.period} ({self.status})"


class PayrollItem(models.Model):

    class ItemType(models.TextChoices):
        SALARY = "SALARY", "Salary"
        BONUS = "BONUS", "Bonus"
        OVERTIME = "OVERTIME", "Overtime"
        DEDUCTION = "DEDUCTION", "Deduction"
        TAX = "TAX", "Tax"
        INSURANCE = "INSURANCE", "Insurance"

    EARNING_TYPES = frozenset({ItemType.SALARY, ItemType.BONUS, ItemType.OVERTIME})
    DEDUCTION_TYPES = frozenset({ItemType.DEDUCTION, ItemType.TAX, ItemType.INSURANCE})

    tenant_lookup = "payroll_record__employee__company"

    payroll_record = models.ForeignKey(
        PayrollRecord,
        on_delete=models.CASCADE,
        related_name="items",
    )
    item_type = models.CharField(
        max_length=20,
        choices=ItemType.choices,
        db_column="type",
    )
    description = models.CharField(max_length=255, blank=True, default="")
    amount = models.DecimalField(max_digits=18, decimal_places=2)

    objects = TenantManager()

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.item_type} {self.amount}"
