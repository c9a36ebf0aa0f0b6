# payroll/commands.py
import logging
from decimal import Decimal

from django.db import IntegrityError, transaction

from accounts.authz import ActorContext
from accounts.commands import CommandResult
from ops.exceptions import Conflict
from tenant.scoping import get_for_tenant_or_404

from .models import Employee, PayrollItem, PayrollRecord

logger = logging.getLogger(__name__)

DUPLICATE_CODE_MESSAGE = "Employee code already exists"


def payroll_totals(items: list[dict]) -> tuple[Decimal, Decimal, Decimal]:
    """
    (gross_pay, deductions, net_pay) for a list of item dicts.

    SALARY, BONUS and OVERTIME are earnings; DEDUCTION, TAX and
    INSURANCE are deductions.
    """
    gross = sum(
        (item["amount"] for item in items if item["item_type"] in PayrollItem.EARNING_TYPES),
        Decimal("0.00"),
    )
    deductions = sum(
        (item["amount"] for item in items if item["item_type"] in PayrollItem.DEDUCTION_TYPES),
        Decimal("0.00"),
    )
    return gross, deductions, gross - deductions


@transaction.atomic
def create_employee(actor: ActorContext, employee_code: str, **fields) -> CommandResult:
    """
    Hire an employee. employee_code is unique within the company.

    Raises:
        Conflict: if a concurrent request inserted the same code first
    """
    if Employee.objects.for_tenant(actor.company).filter(employee_code=employee_code).exists():
        return CommandResult.conflict(DUPLICATE_CODE_MESSAGE)

    try:
        with transaction.atomic():
            employee = Employee.objects.create(
                company=actor.company,
                employee_code=employee_code,
                **fields,
            )
    except IntegrityError:
        raise Conflict(DUPLICATE_CODE_MESSAGE)

    logger.info(
        "Employee created",
        extra={"company_id": actor.company.id, "employee_id": employee.id},
    )
    return CommandResult.ok(employee)


@transaction.atomic
def create_payroll_record(actor: ActorContext, employee_id: int, period: str, items: list[dict]) -> CommandResult:
    """
    Create a payroll record with its items and stored totals.

    Returns:
        CommandResult with the PayrollRecord
    """
    employee = get_for_tenant_or_404(Employee, actor.company, employee_id, label="Employee")

    gross, deductions, net = payroll_totals(items)
    record = PayrollRecord.objects.create(
        employee=employee,
        period=period,
        gross_pay=gross,
        deductions=deductions,
        net_pay=net,
    )
    PayrollItem.objects.bulk_create([
        PayrollItem(
            payroll_record=record,
            item_type=item["item_type"],
            description=item.get("description", ""),
            amount=item["amount"],
        )
        for item in items
    ])

    logger.info(
        "Payroll record created",
        extra={
            "company_id": actor.company.id,
            "payroll_record_id": record.id,
            "employee_id": employee.id,
            "period": period,
        },
    )
    return CommandResult.ok(record)


@transaction.atomic
def update_payroll_status(actor: ActorContext, record: PayrollRecord, status: str) -> CommandResult:
    """Set the record's status. Totals are left untouched."""
    record.status = status
    record.save(update_fields=["status", "updated_at"])
    logger.info(
        "Payroll status changed",
        extra={"company_id": actor.company.id, "payroll_record_id": record.id, "status": status},
    )
    return CommandResult.ok(record)
