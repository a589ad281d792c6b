"""Invoice service - numbered invoices with a derived total."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.db.enums import InvoiceStatus
from freelancehub.db.models import Invoice
from freelancehub.db.types import utcnow
from freelancehub.schemas.billing import InvoiceCreate, InvoiceUpdate
from freelancehub.services import numbering_service
from freelancehub.services.billing_common import (
    check_links,
    compute_total,
    pick_template_variant,
)

logger = logging.getLogger(__name__)


class InvoiceServiceError(Exception):
    """Base exception for invoice service errors."""

    pass


class InvoiceNotFoundError(InvoiceServiceError):
    """Invoice not found (or owned by another user)."""

    pass


def list_invoices(db: Session, user_id: UUID) -> list[Invoice]:
    """List a user's invoices, newest first."""
    return (
        db.query(Invoice)
        .filter(Invoice.user_id == user_id)
        .order_by(Invoice.created_at.desc())
        .all()
    )


def get_invoice(db: Session, user_id: UUID, invoice_id: UUID) -> Invoice | None:
    return (
        db.query(Invoice)
        .filter(Invoice.id == invoice_id, Invoice.user_id == user_id)
        .first()
    )


def require_invoice(db: Session, user_id: UUID, invoice_id: UUID) -> Invoice:
    invoice = get_invoice(db, user_id, invoice_id)
    if not invoice:
        raise InvoiceNotFoundError(f"Invoice {invoice_id} not found")
    return invoice


def create_invoice(db: Session, user_id: UUID, data: InvoiceCreate) -> Invoice:
    """
    Create an invoice.

    The number comes from the yearly INV counter, the total is
    amount + tax_amount, and the template variant is drawn uniformly.
    """
    check_links(db, user_id, data.client_id, data.project_id)

    invoice = Invoice(
        user_id=user_id,
        client_id=data.client_id,
        project_id=data.project_id,
        invoice_number=numbering_service.generate_invoice_number(db),
        amount=data.amount,
        tax_amount=data.tax_amount,
        total_amount=compute_total(data.amount, data.tax_amount),
        status=data.status.value,
        issue_date=data.issue_date or utcnow(),
        due_date=data.due_date,
        paid_date=utcnow() if data.status == InvoiceStatus.PAID else None,
        notes=data.notes,
        template_variant=pick_template_variant(),
    )
    db.add(invoice)
    db.flush()
    logger.info(
        "Invoice created",
        extra={"invoice_id": str(invoice.id), "invoice_number": invoice.invoice_number},
    )
    return invoice


def update_invoice(
    db: Session, user_id: UUID, invoice_id: UUID, data: InvoiceUpdate
) -> Invoice:
    """
    Update an invoice.

    The number and variant never change. The total follows amount/tax, and
    moving to paid stamps paid_date unless one is supplied.
    """
    invoice = require_invoice(db, user_id, invoice_id)
    updates = data.model_dump(exclude_unset=True)

    check_links(db, user_id, updates.get("client_id"), updates.get("project_id"))
    if "client_id" in updates and updates["client_id"] is None:
        del updates["client_id"]

    for field in ("amount", "tax_amount", "status"):
        if field in updates and updates[field] is None:
            del updates[field]

    if "status" in updates:
        updates["status"] = InvoiceStatus(updates["status"]).value
        if (
            updates["status"] == InvoiceStatus.PAID.value
            and invoice.status != InvoiceStatus.PAID.value
            and not updates.get("paid_date")
        ):
            updates["paid_date"] = utcnow()

    for field, value in updates.items():
        setattr(invoice, field, value)

    if "amount" in updates or "tax_amount" in updates:
        invoice.total_amount = compute_total(invoice.amount, invoice.tax_amount)

    db.flush()
    return invoice


def delete_invoice(db: Session, user_id: UUID, invoice_id: UUID) -> None:
    """Delete an invoice. Its number is not reused."""
    invoice = require_invoice(db, user_id, invoice_id)
    db.delete(invoice)
    db.flush()
