# inventory/commands.py
"""
Inventory commands.

All stock movements are single UPDATE statements with F() expressions.
A subtraction only matches the row while enough stock is left, so two
concurrent sales can never oversell.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from accounts.authz import ActorContext
from accounts.commands import CommandResult
from ops.exceptions import Conflict

from .models import Product, Service

logger = logging.getLogger(__name__)

DUPLICATE_SKU_MESSAGE = "Product with this SKU already exists"

ADD = "add"
SUBTRACT = "subtract"


def decrement_stock(product_id: int, quantity: int) -> bool:
    """
    Take ``quantity`` units out of stock.

    Returns False (and changes nothing) when fewer than ``quantity``
    units are left.
    """
    updated = Product.objects.filter(
        pk=product_id,
        stock_quantity__gte=quantity,
    ).update(
        stock_quantity=F("stock_quantity") - quantity,
        updated_at=timezone.now(),
    )
    return updated == 1


def increment_stock(product_id: int, quantity: int) -> None:
    Product.objects.filter(pk=product_id).update(
        stock_quantity=F("stock_quantity") + quantity,
        updated_at=timezone.now(),
    )


@transaction.atomic
def create_product(actor: ActorContext, name: str, price, sku: str = None, **fields) -> CommandResult:
    """
    Add a product. A non-empty SKU is unique within the company.

    Raises:
        Conflict: if a concurrent request inserted the same SKU first
    """
    sku = sku or None
    if sku and Product.objects.for_tenant(actor.company).filter(sku=sku).exists():
        return CommandResult.conflict(DUPLICATE_SKU_MESSAGE)

    try:
        with transaction.atomic():
            product = Product.objects.create(
                company=actor.company,
                name=name,
                price=price,
                sku=sku,
                **fields,
            )
    except IntegrityError:
        raise Conflict(DUPLICATE_SKU_MESSAGE)

    logger.info(
        "Product created",
        extra={"company_id": actor.company.id, "product_id": product.id, "sku": sku},
    )
    return CommandResult.ok(product)


@transaction.atomic
def adjust_stock(actor: ActorContext, product: Product, operation: str, quantity: int) -> CommandResult:
    """
    Add to or subtract from a product's stock.

    Returns:
        CommandResult with the refreshed Product, or a failure when a
        subtraction would take stock below zero
    """
    if operation == ADD:
        increment_stock(product.pk, quantity)
    elif operation == SUBTRACT:
        if not decrement_stock(product.pk, quantity):
            return CommandResult.fail(
                f"Insufficient stock for {product.name}: requested {quantity}."
            )
    else:
        return CommandResult.fail(f"Unknown stock operation: {operation}")

    product.refresh_from_db()
    logger.info(
        "Stock adjusted",
        extra={
            "company_id": actor.company.id,
            "product_id": product.id,
            "operation": operation,
            "quantity": quantity,
            "stock_quantity": product.stock_quantity,
        },
    )
    return CommandResult.ok(product)


@transaction.atomic
def create_service(actor: ActorContext, name: str, price, description: str = "") -> CommandResult:
    service = Service.objects.create(
        company=actor.company,
        name=name,
        price=price,
        description=description,
    )
    return CommandResult.ok(service)
