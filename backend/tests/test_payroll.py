# tests/test_payroll.py
from decimal import Decimal

import pytest
from django.utils import timezone

from payroll.commands import payroll_totals
from payroll.models import Employee, PayrollRecord

EMPLOYEES_URL = "/api/payroll/employees/"
PAYROLL_URL = "/api/payroll/payroll/"


def make_employee(company, code="E-001", **fields):
    defaults = {
        "name": "Jordan Smith",
        "position": "Clerk",
        "department": "Finance",
        "hire_date": timezone.now(),
        "salary": Decimal("3000.00"),
    }
    defaults.update(fields)
    return Employee.objects.create(company=company, employee_code=code, **defaults)


def employee_payload(**overrides):
    payload = {
        "employee_code": "E-100",
        "name": "Sam Lee",
        "email": "sam@test.com",
        "position": "Analyst",
        "department": "Finance",
        "hire_date": "2023-06-01T00:00:00Z",
        "salary": "4200.00",
    }
    payload.update(overrides)
    return payload


def test_payroll_totals_split_earnings_and_deductions():
    items = [
        {"item_type": "SALARY", "amount": Decimal("3000")},
        {"item_type": "BONUS", "amount": Decimal("500")},
        {"item_type": "OVERTIME", "amount": Decimal("120.50")},
        {"item_type": "TAX", "amount": Decimal("400")},
        {"item_type": "INSURANCE", "amount": Decimal("100")},
        {"item_type": "DEDUCTION", "amount": Decimal("20.50")},
    ]
    assert payroll_totals(items) == (Decimal("3620.50"), Decimal("520.50"), Decimal("3100.00"))


@pytest.mark.django_db
class TestEmployees:

    def test_create_employee(self, accountant_client):
        response = accountant_client.post(EMPLOYEES_URL, employee_payload(), format="json")

        assert response.status_code == 201
        assert response.json()["data"]["employee"]["employee_code"] == "E-100"

    def test_duplicate_code_is_400_conflict(self, accountant_client):
        accountant_client.post(EMPLOYEES_URL, employee_payload(), format="json")
        response = accountant_client.post(EMPLOYEES_URL, employee_payload(name="Other"), format="json")

        assert response.status_code == 400
        assert response.json()["error"] == "conflict"
        assert Employee.objects.filter(employee_code="E-100").count() == 1

    def test_same_code_in_another_company_is_fine(self, accountant_client, second_company):
        make_employee(second_company, code="E-100")

        response = accountant_client.post(EMPLOYEES_URL, employee_payload(), format="json")
        assert response.status_code == 201

    def test_list_search_and_department(self, accountant_client, company, second_company):
        make_employee(company, code="E-1", name="Alice", department="Sales")
        make_employee(company, code="E-2", name="Bob", department="Finance")
        make_employee(company, code="E-3", name="Carol", department="Finance", is_active=False)
        make_employee(second_company, code="E-4", name="Alice Clone")

        def names(params):
            data = accountant_client.get(EMPLOYEES_URL, params).json()["data"]
            return [e["name"] for e in data["employees"]]

        assert names({}) == ["Alice", "Bob"]
        assert names({"search": "ali"}) == ["Alice"]
        assert names({"search": "E-2"}) == ["Bob"]
        assert names({"department": "Finance"}) == ["Bob"]


@pytest.mark.django_db
class TestPayrollRecords:

    def _create(self, client, employee_id):
        return client.post(PAYROLL_URL, {
            "employee_id": employee_id,
            "period": "2024-05",
            "items": [
                {"type": "SALARY", "amount": "3000", "description": "Base"},
                {"type": "BONUS", "amount": "500"},
                {"type": "TAX", "amount": "400"},
                {"type": "INSURANCE", "amount": "100"},
            ],
        }, format="json")

    def test_create_computes_totals(self, accountant_client, company):
        employee = make_employee(company)

        response = self._create(accountant_client, employee.id)

        assert response.status_code == 201
        record = response.json()["data"]["payroll_record"]
        assert record["gross_pay"] == 3500
        assert record["deductions"] == 500
        assert record["net_pay"] == 3000
        assert record["status"] == "DRAFT"
        assert [i["type"] for i in record["items"]] == ["SALARY", "BONUS", "TAX", "INSURANCE"]
        assert record["employee"]["employee_code"] == "E-001"

    def test_status_change_keeps_stored_totals(self, accountant_client, company):
        employee = make_employee(company)
        record_id = self._create(accountant_client, employee.id).json()["data"]["payroll_record"]["id"]
        PayrollRecord.objects.filter(pk=record_id).first().items.all().delete()

        response = accountant_client.put(f"{PAYROLL_URL}{record_id}/status/", {"status": "APPROVED"}, format="json")

        assert response.status_code == 200
        record = response.json()["data"]["payroll_record"]
        assert record["status"] == "APPROVED"
        assert record["net_pay"] == 3000

    def test_employee_of_other_company_is_404(self, accountant_client, second_company):
        employee = make_employee(second_company)

        response = self._create(accountant_client, employee.id)

        assert response.status_code == 404
        assert response.json()["message"] == "Employee not found"
        assert PayrollRecord.objects.count() == 0

    def test_empty_items_is_400(self, accountant_client, company):
        employee = make_employee(company)
        response = accountant_client.post(PAYROLL_URL, {
            "employee_id": employee.id, "period": "2024-05", "items": [],
        }, format="json")
        assert response.status_code == 400

    def test_list_filters(self, accountant_client, company):
        first = make_employee(company, code="E-1")
        second = make_employee(company, code="E-2")
        self._create(accountant_client, first.id)
        self._create(accountant_client, second.id)

        data = accountant_client.get(PAYROLL_URL, {"employee_id": second.id}).json()["data"]
        assert [r["employee"]["id"] for r in data["payroll_records"]] == [second.id]
        assert accountant_client.get(PAYROLL_URL, {"period": "2023-01"}).json()["data"]["pagination"]["total"] == 0
