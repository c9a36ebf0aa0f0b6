# financial/models.py
"""
Financial models.

- Account: a tenant's money container with a stored running balance
- Category: INCOME/EXPENSE classification for transactions
- Transaction: an immutable posting against an account

Account.balance is only ever changed by financial.ledger, in the same
database transaction that inserts the posting, so the balance always
equals the opening balance plus the signed sum of postings applied to it.
"""

from decimal import Decimal

from django.db import models

from accounts.models import Company
from tenant.scoping import TenantManager


class Account(models.Model):

    class AccountType(models.TextChoices):
        ASSET = "ASSET", "Asset"
        LIABILITY = "LIABILITY", "Liability"
        EQUITY = "EQUITY", "Equity"
        REVENUE = "REVENUE", "Revenue"
        EXPENSE = "EXPENSE", "Expense"

    tenant_lookup = "company"

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="accounts",
    )
    name = models.CharField(max_length=255)
    account_type = models.CharField(
        max_length=20,
        choices=AccountType.choices,
        db_column="type",
    )
    balance = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="USD")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["company", "is_active"], name="financial_a_company_3b0f1e_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.account_type})"


class Category(models.Model):

    class CategoryType(models.TextChoices):
        INCOME = "INCOME", "Income"
        EXPENSE = "EXPENSE", "Expense"

    tenant_lookup = "company"

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="categories",
    )
    name = models.CharField(max_length=255)
    category_type = models.CharField(
        max_length=20,
        choices=CategoryType.choices,
        db_column="type",
    )
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="children",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TenantManager()

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class Transaction(models.Model):
    """
    A posting. Never updated or deleted; corrections are new offsetting postings.

    ``amount`` is a non-negative magnitude. Direction comes from
    ``transaction_type``:
    - INCOME  -> account.balance += amount
    - EXPENSE -> account.balance -= amount
    - TRANSFER -> account.balance -= amount, transfer_account.balance += amount
    """

    class TransactionType(models.TextChoices):
        INCOME = "INCOME", "Income"
        EXPENSE = "EXPENSE", "Expense"
        TRANSFER = "TRANSFER", "Transfer"

    tenant_lookup = "account__company"

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    transfer_account = models.ForeignKey(
        Account,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="incoming_transfers",
    )
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    amount = models.DecimalField(max_digits=18, decimal_places=2)
    transaction_type = models.CharField(
        max_length=20,
        choices=TransactionType.choices,
        db_column="type",
    )
    description = models.TextField(blank=True, default="")
    reference = models.CharField(max_length=100, blank=True, default="")
    date = models.DateTimeField()
    created_by = models.ForeignKey(
        "accounts.User",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TenantManager()

    class Meta:
        ordering = ["-date", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=0),
                name="transaction_amount_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["account", "date"], name="financial_t_account_5c2d7a_idx"),
            models.Index(fields=["transaction_type", "date"], name="financial_t_type_9e41b2_idx"),
        ]

    def __str__(self):
        return f"{self.transaction_type} {self.amount} on {self.account_id}"
