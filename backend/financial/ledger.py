# financial/ledger.py
"""
Posting transactions against account balances.

post_transaction() is the only code path that moves Account.balance
after creation. The posting row and the balance adjustment are written
in one database transaction: either both persist or neither does.

Balances are adjusted with a single UPDATE ... SET balance = balance + delta
(an F() expression) instead of read-modify-write, so concurrent postings
to the same account are each applied exactly once.
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from accounts.authz import ActorContext
from accounts.commands import CommandResult
from tenant.scoping import get_for_tenant_or_404

from .models import Account, Category, Transaction

logger = logging.getLogger(__name__)


def balance_deltas(transaction_type: str, amount: Decimal, account_id: int, transfer_account_id: int = None) -> dict:
    """
    Signed balance changes for a posting, keyed by account id.

    The amount is a magnitude; the sign comes from the type alone.
    """
    if transaction_type == Transaction.TransactionType.INCOME:
        return {account_id: amount}
    if transaction_type == Transaction.TransactionType.EXPENSE:
        return {account_id: -amount}
    if transaction_type == Transaction.TransactionType.TRANSFER:
        return {account_id: -amount, transfer_account_id: amount}
    raise ValueError(f"Unknown transaction type: {transaction_type}")


def _apply_deltas(deltas: dict) -> None:
    # Ascending id order keeps row locks consistent across concurrent transfers.
    for account_id in sorted(deltas):
        Account.objects.filter(pk=account_id).update(
            balance=F("balance") + deltas[account_id],
            updated_at=timezone.now(),
        )


@transaction.atomic
def post_transaction(
    actor: ActorContext,
    account_id: int,
    amount: Decimal,
    transaction_type: str,
    date,
    category_id: int = None,
    transfer_account_id: int = None,
    description: str = "",
    reference: str = "",
) -> CommandResult:
    """
    Record a posting and adjust the affected balance(s) atomically.

    Every referenced id is re-fetched inside the actor's tenant first;
    ids from another tenant raise NotFound.

    Returns:
        CommandResult with the created Transaction
    """
    if amount < 0:
        return CommandResult.fail("Amount must be a non-negative magnitude.")

    account = get_for_tenant_or_404(Account, actor.company, account_id, label="Account")

    category = None
    if category_id is not None:
        category = get_for_tenant_or_404(Category, actor.company, category_id, label="Category")

    transfer_account = None
    if transaction_type == Transaction.TransactionType.TRANSFER:
        if transfer_account_id is None:
            return CommandResult.fail("TRANSFER postings require transfer_account_id.")
        if transfer_account_id == account.id:
            return CommandResult.fail("Cannot transfer to the same account.")
        transfer_account = get_for_tenant_or_404(
            Account, actor.company, transfer_account_id, label="Transfer account",
        )
    elif transfer_account_id is not None:
        return CommandResult.fail("transfer_account_id is only valid for TRANSFER postings.")

    posting = Transaction.objects.create(
        account=account,
        transfer_account=transfer_account,
        category=category,
        amount=amount,
        transaction_type=transaction_type,
        description=description,
        reference=reference,
        date=date,
        created_by=actor.user,
    )

    _apply_deltas(balance_deltas(
        transaction_type,
        amount,
        account.id,
        transfer_account.id if transfer_account else None,
    ))

    logger.info(
        "Transaction posted",
        extra={
            "company_id": actor.company.id,
            "transaction_id": posting.id,
            "account_id": account.id,
            "type": transaction_type,
            "amount": str(amount),
        },
    )
    return CommandResult.ok(posting)


@transaction.atomic
def create_account(
    actor: ActorContext,
    name: str,
    account_type: str,
    balance: Decimal = Decimal("0.00"),
    currency: str = "USD",
) -> CommandResult:
    """Open an account; ``balance`` is the opening balance."""
    account = Account.objects.create(
        company=actor.company,
        name=name,
        account_type=account_type,
        balance=balance,
        currency=currency,
    )
    return CommandResult.ok(account)


@transaction.atomic
def create_category(
    actor: ActorContext,
    name: str,
    category_type: str,
    parent_id: int = None,
) -> CommandResult:
    parent = None
    if parent_id is not None:
        parent = get_for_tenant_or_404(Category, actor.company, parent_id, label="Parent category")
        if parent.category_type != category_type:
            return CommandResult.fail("Parent category must have the same type.")

    category = Category.objects.create(
        company=actor.company,
        name=name,
        category_type=category_type,
        parent=parent,
    )
    return CommandResult.ok(category)
