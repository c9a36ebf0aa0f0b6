# tests/test_checks.py
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from checks.models import Check
from checks.policies import can_change_check_status

URL = "/api/checks/"


def make_check(company, days_until_due=5, status=Check.Status.PENDING, **fields):
    now = timezone.now()
    defaults = {
        "check_type": Check.CheckType.RECEIVABLE,
        "check_number": "000123",
        "bank_name": "First Bank",
        "amount": Decimal("150.00"),
        "issue_date": now,
        "due_date": now + timedelta(days=days_until_due),
    }
    defaults.update(fields)
    return Check.objects.create(company=company, status=status, **defaults)


class TestStatusPolicy:

    @pytest.mark.parametrize("target", ["CLEARED", "BOUNCED", "CANCELLED"])
    def test_pending_can_reach_every_final_status(self, target):
        allowed, reason = can_change_check_status(Check(status=Check.Status.PENDING), target)
        assert allowed and reason == ""

    def test_pending_to_pending_is_rejected(self):
        allowed, _ = can_change_check_status(Check(status=Check.Status.PENDING), "PENDING")
        assert not allowed

    @pytest.mark.parametrize("current", ["CLEARED", "BOUNCED", "CANCELLED"])
    @pytest.mark.parametrize("target", ["PENDING", "CLEARED", "BOUNCED", "CANCELLED"])
    def test_final_statuses_are_locked(self, current, target):
        allowed, reason = can_change_check_status(Check(status=current), target)
        assert not allowed
        assert current in reason


@pytest.mark.django_db
class TestCheckAPI:

    def test_create_starts_pending(self, accountant_client):
        response = accountant_client.post(URL, {
            "type": "PAYABLE",
            "check_number": "A-1",
            "bank_name": "City Bank",
            "amount": "80.50",
            "issue_date": "2024-02-01T00:00:00Z",
            "due_date": "2024-02-20T00:00:00Z",
        }, format="json")

        assert response.status_code == 201
        check = response.json()["data"]["check"]
        assert check["status"] == "PENDING"
        assert check["type"] == "PAYABLE"

    def test_due_before_issue_is_400(self, accountant_client):
        response = accountant_client.post(URL, {
            "type": "PAYABLE", "check_number": "A-1", "bank_name": "B", "amount": "1",
            "issue_date": "2024-02-20T00:00:00Z", "due_date": "2024-02-01T00:00:00Z",
        }, format="json")
        assert response.status_code == 400

    def test_list_filters_by_type_and_status(self, accountant_client, company):
        make_check(company, check_type=Check.CheckType.PAYABLE)
        make_check(company, status=Check.Status.CLEARED)
        make_check(company)

        data = accountant_client.get(URL, {"type": "RECEIVABLE", "status": "PENDING"}).json()["data"]
        assert data["pagination"]["total"] == 1

    def test_list_is_ordered_by_due_date(self, accountant_client, company):
        late = make_check(company, days_until_due=30)
        soon = make_check(company, days_until_due=2)

        ids = [c["id"] for c in accountant_client.get(URL).json()["data"]["checks"]]
        assert ids == [soon.id, late.id]

    def test_clear_then_locked(self, accountant_client, company):
        check = make_check(company)

        response = accountant_client.put(f"{URL}{check.id}/status/", {"status": "CLEARED"}, format="json")
        assert response.status_code == 200
        assert response.json()["data"]["check"]["status"] == "CLEARED"

        response = accountant_client.put(f"{URL}{check.id}/status/", {"status": "PENDING"}, format="json")
        assert response.status_code == 400
        check.refresh_from_db()
        assert check.status == Check.Status.CLEARED

    def test_unknown_status_is_400(self, accountant_client, company):
        check = make_check(company)
        response = accountant_client.put(f"{URL}{check.id}/status/", {"status": "LOST"}, format="json")
        assert response.status_code == 400

    def test_other_tenant_check_is_404(self, accountant_client, second_company):
        check = make_check(second_company)

        response = accountant_client.put(f"{URL}{check.id}/status/", {"status": "CLEARED"}, format="json")
        assert response.status_code == 404
        assert response.json()["message"] == "Check not found"


@pytest.mark.django_db
class TestDueSoon:
    URL = "/api/checks/due-soon/"

    def test_default_window_is_seven_days(self, viewer_client, company, second_company):
        inside = make_check(company, days_until_due=3)
        make_check(company, days_until_due=10)
        make_check(company, days_until_due=-1)
        make_check(company, days_until_due=2, status=Check.Status.BOUNCED)
        make_check(second_company, days_until_due=1)

        checks = viewer_client.get(self.URL).json()["data"]["checks"]
        assert [c["id"] for c in checks] == [inside.id]

    def test_custom_window(self, viewer_client, company):
        make_check(company, days_until_due=3)
        make_check(company, days_until_due=10)

        checks = viewer_client.get(self.URL, {"days": 14}).json()["data"]["checks"]
        assert len(checks) == 2

    def test_non_numeric_days_is_400(self, viewer_client):
        assert viewer_client.get(self.URL, {"days": "soon"}).status_code == 400
