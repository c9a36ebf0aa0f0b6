# sales/commands.py
import logging
from decimal import Decimal

from django.db import IntegrityError, transaction

from accounts.authz import ActorContext
from accounts.commands import CommandResult, next_company_sequence
from inventory.commands import decrement_stock
from inventory.models import Product, Service
from ops.exceptions import Conflict
from tenant.scoping import get_for_tenant_or_404

from .models import Customer, Invoice, InvoiceItem

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def line_total(quantity: int, price: Decimal) -> Decimal:
    return (price * quantity).quantize(CENT)


def invoice_totals(items: list[dict], tax: Decimal) -> tuple[Decimal, Decimal]:
    """(subtotal, total) where subtotal is the sum of quantity x price."""
    subtotal = sum(
        (line_total(item["quantity"], item["price"]) for item in items),
        Decimal("0.00"),
    )
    return subtotal, subtotal + tax


def next_invoice_number(company) -> str:
    """
    Allocate the next free ``INV-000001`` style number.

    Numbers already taken by explicitly numbered invoices are skipped.
    Must run inside a transaction.
    """
    while True:
        number = f"INV-{next_company_sequence(company, 'invoice'):06d}"
        if not Invoice.objects.for_tenant(company).filter(invoice_number=number).exists():
            return number


@transaction.atomic
def create_customer(actor: ActorContext, name: str, **fields) -> CommandResult:
    customer = Customer.objects.create(company=actor.company, name=name, **fields)
    logger.info(
        "Customer created",
        extra={"company_id": actor.company.id, "customer_id": customer.id},
    )
    return CommandResult.ok(customer)


@transaction.atomic
def create_invoice(
    actor: ActorContext,
    customer_id: int,
    items: list[dict],
    tax: Decimal = Decimal("0.00"),
    invoice_number: str = None,
    date=None,
    due_date=None,
    notes: str = "",
) -> CommandResult:
    """
    Create an invoice with its lines, stored totals and stock movements.

    The customer and every referenced product/service are re-fetched in
    the actor's company. Each product line takes its quantity out of
    stock; if any product runs short, the whole invoice is rolled back.

    Returns:
        CommandResult with the Invoice
    """
    customer = get_for_tenant_or_404(Customer, actor.company, customer_id, label="Customer")

    lines = []
    for item in items:
        product = service = None
        if item.get("product_id") is not None:
            product = get_for_tenant_or_404(Product, actor.company, item["product_id"], label="Product")
        if item.get("service_id") is not None:
            service = get_for_tenant_or_404(Service, actor.company, item["service_id"], label="Service")
        lines.append((item, product, service))

    if invoice_number:
        if Invoice.objects.for_tenant(actor.company).filter(invoice_number=invoice_number).exists():
            return CommandResult.conflict(f"Invoice number {invoice_number} already exists")
    else:
        invoice_number = next_invoice_number(actor.company)

    subtotal, total = invoice_totals(items, tax)
    invoice_fields = {"date": date} if date else {}
    try:
        with transaction.atomic():
            invoice = Invoice.objects.create(
                company=actor.company,
                customer=customer,
                invoice_number=invoice_number,
                due_date=due_date,
                subtotal=subtotal,
                tax=tax,
                total=total,
                notes=notes,
                **invoice_fields,
            )
    except IntegrityError:
        raise Conflict(f"Invoice number {invoice_number} already exists")

    InvoiceItem.objects.bulk_create([
        InvoiceItem(
            invoice=invoice,
            product=product,
            service=service,
            description=item.get("description", ""),
            quantity=item["quantity"],
            price=item["price"],
            total=line_total(item["quantity"], item["price"]),
        )
        for item, product, service in lines
    ])

    for item, product, _ in lines:
        if product is not None and not decrement_stock(product.pk, item["quantity"]):
            transaction.set_rollback(True)
            return CommandResult.fail(
                f"Insufficient stock for {product.name}: requested {item['quantity']}."
            )

    logger.info(
        "Invoice created",
        extra={
            "company_id": actor.company.id,
            "invoice_id": invoice.id,
            "invoice_number": invoice_number,
            "total": str(total),
        },
    )
    return CommandResult.ok(invoice)


@transaction.atomic
def update_invoice_status(actor: ActorContext, invoice: Invoice, status: str) -> CommandResult:
    """Set the invoice status. Totals are left untouched."""
    invoice.status = status
    invoice.save(update_fields=["status", "updated_at"])
    logger.info(
        "Invoice status changed",
        extra={"company_id": actor.company.id, "invoice_id": invoice.id, "status": status},
    )
    return CommandResult.ok(invoice)
