# checks/commands.py
import logging
from decimal import Decimal

from django.db import transaction

from accounts.authz import ActorContext
from accounts.commands import CommandResult

from .models import Check
from .policies import can_change_check_status

logger = logging.getLogger(__name__)


@transaction.atomic
def create_check(
    actor: ActorContext,
    check_type: str,
    check_number: str,
    bank_name: str,
    amount: Decimal,
    issue_date,
    due_date,
    account_number: str = "",
    description: str = "",
) -> CommandResult:
    """Record a check. New checks always start PENDING."""
    check = Check.objects.create(
        company=actor.company,
        check_type=check_type,
        check_number=check_number,
        bank_name=bank_name,
        account_number=account_number,
        amount=amount,
        issue_date=issue_date,
        due_date=due_date,
        description=description,
    )
    logger.info(
        "Check recorded",
        extra={"company_id": actor.company.id, "check_id": check.id, "type": check_type},
    )
    return CommandResult.ok(check)


@transaction.atomic
def update_check_status(actor: ActorContext, check: Check, status: str) -> CommandResult:
    """
    Move a check out of PENDING.

    The row is locked and re-read so two concurrent updates cannot both
    leave PENDING.
    """
    check = Check.objects.select_for_update().get(pk=check.pk)

    allowed, reason = can_change_check_status(check, status)
    if not allowed:
        return CommandResult.fail(reason)

    previous = check.status
    check.status = status
    check.save(update_fields=["status", "updated_at"])
    logger.info(
        "Check status changed",
        extra={
            "company_id": actor.company.id,
            "check_id": check.id,
            "from_status": previous,
            "to_status": status,
        },
    )
    return CommandResult.ok(check)
