# tests/test_ledger.py
"""
Tests for financial postings.

Tests cover:
- INCOME/EXPENSE/TRANSFER balance effects
- Posting row and balance change commit or roll back together
- Balance updates are storage-side increments (no lost updates)
- Referenced ids are re-validated against the caller's company
- Input parsing (non-numeric and negative amounts are 400)
"""

import threading
from datetime import timedelta
from decimal import Decimal

import pytest
from django.db import connection
from rest_framework.exceptions import NotFound

from financial import ledger
from financial.ledger import balance_deltas, post_transaction
from financial.models import Account, Category, Transaction

INCOME = Transaction.TransactionType.INCOME
EXPENSE = Transaction.TransactionType.EXPENSE
TRANSFER = Transaction.TransactionType.TRANSFER


# =============================================================================
# Balance Semantics
# =============================================================================

class TestBalanceDeltas:

    def test_income_is_positive(self):
        assert balance_deltas(INCOME, Decimal("10"), 1) == {1: Decimal("10")}

    def test_expense_is_negative(self):
        assert balance_deltas(EXPENSE, Decimal("10"), 1) == {1: Decimal("-10")}

    def test_transfer_moves_between_accounts(self):
        assert balance_deltas(TRANSFER, Decimal("10"), 1, 2) == {1: Decimal("-10"), 2: Decimal("10")}

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            balance_deltas("REFUND", Decimal("10"), 1)


@pytest.mark.django_db
class TestPostTransaction:

    def test_income_increases_balance(self, actor, cash_account, now):
        result = post_transaction(actor, cash_account.id, Decimal("250.00"), INCOME, now)

        assert result.success
        cash_account.refresh_from_db()
        assert cash_account.balance == Decimal("250.00")
        assert result.data.created_by == actor.user

    def test_expense_decreases_balance(self, actor, bank_account, now):
        post_transaction(actor, bank_account.id, Decimal("300.00"), EXPENSE, now)

        bank_account.refresh_from_db()
        assert bank_account.balance == Decimal("700.00")

    def test_expense_may_overdraw(self, actor, cash_account, now):
        post_transaction(actor, cash_account.id, Decimal("5.00"), EXPENSE, now)

        cash_account.refresh_from_db()
        assert cash_account.balance == Decimal("-5.00")

    def test_transfer_moves_money(self, actor, bank_account, cash_account, now):
        result = post_transaction(
            actor, bank_account.id, Decimal("400.00"), TRANSFER, now,
            transfer_account_id=cash_account.id,
        )

        assert result.success
        bank_account.refresh_from_db()
        cash_account.refresh_from_db()
        assert bank_account.balance == Decimal("600.00")
        assert cash_account.balance == Decimal("400.00")
        assert result.data.transfer_account == cash_account

    def test_transfer_requires_destination(self, actor, bank_account, now):
        result = post_transaction(actor, bank_account.id, Decimal("1.00"), TRANSFER, now)

        assert not result.success
        assert Transaction.objects.count() == 0

    def test_transfer_to_same_account_is_rejected(self, actor, bank_account, now):
        result = post_transaction(
            actor, bank_account.id, Decimal("1.00"), TRANSFER, now,
            transfer_account_id=bank_account.id,
        )
        assert not result.success

    def test_destination_only_valid_for_transfers(self, actor, bank_account, cash_account, now):
        result = post_transaction(
            actor, bank_account.id, Decimal("1.00"), INCOME, now,
            transfer_account_id=cash_account.id,
        )
        assert not result.success

    def test_negative_amount_is_rejected(self, actor, cash_account, now):
        result = post_transaction(actor, cash_account.id, Decimal("-1.00"), INCOME, now)

        assert not result.success
        cash_account.refresh_from_db()
        assert cash_account.balance == Decimal("0.00")

    def test_balance_equals_opening_plus_postings(self, actor, bank_account, now):
        for amount, kind in [("100", INCOME), ("40", EXPENSE), ("15.50", INCOME), ("0", EXPENSE)]:
            post_transaction(actor, bank_account.id, Decimal(amount), kind, now)

        bank_account.refresh_from_db()
        assert bank_account.balance == Decimal("1075.50")
        assert bank_account.transactions.count() == 4


@pytest.mark.django_db
class TestAtomicity:

    def test_failed_balance_update_leaves_no_posting(self, actor, cash_account, now, monkeypatch):
        def boom(deltas):
            raise RuntimeError("storage failure")

        monkeypatch.setattr(ledger, "_apply_deltas", boom)

        with pytest.raises(RuntimeError):
            post_transaction(actor, cash_account.id, Decimal("100.00"), INCOME, now)

        cash_account.refresh_from_db()
        assert cash_account.balance == Decimal("0.00")
        assert Transaction.objects.count() == 0

    def test_concurrent_postings_are_each_applied_once(self, actor, cash_account, now, monkeypatch):
        # A second request read the account before the first one committed.
        stale = Account.objects.get(pk=cash_account.pk)
        post_transaction(actor, cash_account.id, Decimal("100.00"), INCOME, now)

        monkeypatch.setattr(ledger, "get_for_tenant_or_404", lambda *args, **kwargs: stale)
        post_transaction(actor, cash_account.id, Decimal("40.00"), INCOME, now)

        cash_account.refresh_from_db()
        assert stale.balance == Decimal("0.00")
        assert cash_account.balance == Decimal("140.00")

    def test_balance_change_bumps_updated_at(self, actor, cash_account, now):
        earlier = now - timedelta(days=1)
        Account.objects.filter(pk=cash_account.pk).update(updated_at=earlier)

        post_transaction(actor, cash_account.id, Decimal("5.00"), INCOME, now)

        cash_account.refresh_from_db()
        assert cash_account.updated_at > earlier


@pytest.mark.django_db(transaction=True)
class TestConcurrentPostings:

    def test_parallel_postings_sum_exactly(self, actor, cash_account, now):
        workers = 8
        barrier = threading.Barrier(workers)
        errors = []

        def post(amount):
            try:
                barrier.wait()
                post_transaction(actor, cash_account.id, amount, INCOME, now)
            except Exception as exc:
                errors.append(exc)
            finally:
                connection.close()

        threads = [
            threading.Thread(target=post, args=(Decimal(f"{i}.25"),))
            for i in range(1, workers + 1)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        cash_account.refresh_from_db()
        assert cash_account.balance == sum(Decimal(f"{i}.25") for i in range(1, workers + 1))
        assert Transaction.objects.filter(account=cash_account).count() == workers


@pytest.mark.django_db
class TestTenantValidation:

    def test_foreign_account_is_not_found(self, actor, foreign_account, now):
        with pytest.raises(NotFound):
            post_transaction(actor, foreign_account.id, Decimal("10.00"), INCOME, now)

        foreign_account.refresh_from_db()
        assert foreign_account.balance == Decimal("500.00")

    def test_foreign_transfer_destination_is_not_found(self, actor, bank_account, foreign_account, now):
        with pytest.raises(NotFound):
            post_transaction(
                actor, bank_account.id, Decimal("10.00"), TRANSFER, now,
                transfer_account_id=foreign_account.id,
            )

        bank_account.refresh_from_db()
        assert bank_account.balance == Decimal("1000.00")
        assert Transaction.objects.count() == 0

    def test_foreign_category_is_not_found(self, actor, cash_account, second_company, now):
        category = Category.objects.create(
            company=second_company, name="Theirs", category_type=Category.CategoryType.INCOME,
        )
        with pytest.raises(NotFound):
            post_transaction(actor, cash_account.id, Decimal("10.00"), INCOME, now, category_id=category.id)


# =============================================================================
# API
# =============================================================================

@pytest.mark.django_db
class TestTransactionAPI:
    URL = "/api/financial/transactions/"

    def _payload(self, account, **overrides):
        payload = {
            "account_id": account.id,
            "amount": "125.00",
            "type": "INCOME",
            "date": "2024-03-01T09:00:00Z",
            "description": "Sale",
        }
        payload.update(overrides)
        return payload

    def test_create_returns_nested_posting(self, accountant_client, cash_account):
        response = accountant_client.post(self.URL, self._payload(cash_account), format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Transaction created successfully"
        posting = body["data"]["transaction"]
        assert posting["account"] == {"id": cash_account.id, "name": "Cash", "type": "ASSET"}
        assert posting["type"] == "INCOME"
        assert Decimal(str(posting["amount"])) == Decimal("125.00")

    def test_foreign_account_is_404(self, accountant_client, foreign_account):
        response = accountant_client.post(self.URL, self._payload(foreign_account), format="json")

        assert response.status_code == 404
        assert response.json()["message"] == "Account not found"

    def test_non_numeric_amount_is_400(self, accountant_client, cash_account):
        response = accountant_client.post(self.URL, self._payload(cash_account, amount="abc"), format="json")

        assert response.status_code == 400
        assert response.json()["error"] == "invalid"
        assert Transaction.objects.count() == 0

    def test_negative_amount_is_400(self, accountant_client, cash_account):
        response = accountant_client.post(self.URL, self._payload(cash_account, amount="-5"), format="json")
        assert response.status_code == 400

    def test_transfer_without_destination_is_400(self, accountant_client, cash_account):
        response = accountant_client.post(self.URL, self._payload(cash_account, type="TRANSFER"), format="json")

        assert response.status_code == 400
        assert "transfer_account_id" in response.json()["message"]

    def test_list_is_scoped_and_filtered(self, accountant_client, actor, other_actor, cash_account, foreign_account, now):
        post_transaction(actor, cash_account.id, Decimal("10.00"), INCOME, now)
        post_transaction(actor, cash_account.id, Decimal("3.00"), EXPENSE, now)
        post_transaction(other_actor, foreign_account.id, Decimal("99.00"), INCOME, now)

        data = accountant_client.get(self.URL).json()["data"]
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 2, "pages": 1}

        data = accountant_client.get(self.URL, {"type": "EXPENSE"}).json()["data"]
        assert [t["type"] for t in data["transactions"]] == ["EXPENSE"]

    def test_bad_date_range_is_400(self, accountant_client):
        response = accountant_client.get(self.URL, {
            "start_date": "2024-05-01T00:00:00Z", "end_date": "2024-01-01T00:00:00Z",
        })
        assert response.status_code == 400


@pytest.mark.django_db
class TestAccountsAndSummary:

    def test_create_and_list_accounts(self, accountant_client, foreign_account):
        response = accountant_client.post("/api/financial/accounts/", {
            "name": "Savings", "type": "ASSET", "currency": "eur",
        }, format="json")
        assert response.status_code == 201
        assert response.json()["data"]["account"]["currency"] == "EUR"

        accounts = accountant_client.get("/api/financial/accounts/").json()["data"]["accounts"]
        assert [a["name"] for a in accounts] == ["Savings"]

    def test_inactive_accounts_are_hidden(self, accountant_client, cash_account):
        cash_account.is_active = False
        cash_account.save()

        assert accountant_client.get("/api/financial/accounts/").json()["data"]["accounts"] == []

    def test_account_detail_of_other_tenant_is_404(self, accountant_client, foreign_account):
        response = accountant_client.get(f"/api/financial/accounts/{foreign_account.id}/")
        assert response.status_code == 404

    def test_summary(self, accountant_client, actor, other_actor, bank_account, foreign_account, now):
        post_transaction(actor, bank_account.id, Decimal("500.00"), INCOME, now)
        post_transaction(actor, bank_account.id, Decimal("120.00"), EXPENSE, now)
        post_transaction(other_actor, foreign_account.id, Decimal("77.00"), INCOME, now)

        data = accountant_client.get("/api/financial/summary/").json()["data"]
        assert Decimal(str(data["total_income"])) == Decimal("500")
        assert Decimal(str(data["total_expenses"])) == Decimal("120")
        assert Decimal(str(data["net_income"])) == Decimal("380")
        assert Decimal(str(data["total_balance"])) == Decimal("1380")

    def test_category_parent_must_share_type(self, accountant_client):
        parent = accountant_client.post("/api/financial/categories/", {
            "name": "Revenue", "type": "INCOME",
        }, format="json").json()["data"]["category"]

        response = accountant_client.post("/api/financial/categories/", {
            "name": "Rent", "type": "EXPENSE", "parent_id": parent["id"],
        }, format="json")
        assert response.status_code == 400
