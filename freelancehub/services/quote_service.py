"""Quote service - numbered quotes, same pattern as invoices."""

from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.db.enums import QuoteStatus
from freelancehub.db.models import Quote
from freelancehub.schemas.billing import QuoteCreate, QuoteUpdate
from freelancehub.services import numbering_service
from freelancehub.services.billing_common import (
    check_links,
    compute_total,
    pick_template_variant,
)


class QuoteServiceError(Exception):
    """Base exception for quote service errors."""

    pass


class QuoteNotFoundError(QuoteServiceError):
    """Quote not found (or owned by another user)."""

    pass


def list_quotes(db: Session, user_id: UUID) -> list[Quote]:
    return (
        db.query(Quote)
        .filter(Quote.user_id == user_id)
        .order_by(Quote.created_at.desc())
        .all()
    )


def get_quote(db: Session, user_id: UUID, quote_id: UUID) -> Quote | None:
    return (
        db.query(Quote)
        .filter(Quote.id == quote_id, Quote.user_id == user_id)
        .first()
    )


def require_quote(db: Session, user_id: UUID, quote_id: UUID) -> Quote:
    quote = get_quote(db, user_id, quote_id)
    if not quote:
        raise QuoteNotFoundError(f"Quote {quote_id} not found")
    return quote


def create_quote(db: Session, user_id: UUID, data: QuoteCreate) -> Quote:
    check_links(db, user_id, data.client_id, data.project_id)

    quote = Quote(
        user_id=user_id,
        client_id=data.client_id,
        project_id=data.project_id,
        quote_number=numbering_service.generate_quote_number(db),
        title=data.title,
        description=data.description,
        amount=data.amount,
        tax_amount=data.tax_amount,
        total_amount=compute_total(data.amount, data.tax_amount),
        status=data.status.value,
        valid_until=data.valid_until,
        notes=data.notes,
        template_variant=pick_template_variant(),
    )
    db.add(quote)
    db.flush()
    return quote


def update_quote(db: Session, user_id: UUID, quote_id: UUID, data: QuoteUpdate) -> Quote:
    quote = require_quote(db, user_id, quote_id)
    updates = data.model_dump(exclude_unset=True)

    check_links(db, user_id, updates.get("client_id"), updates.get("project_id"))
    for field in ("client_id", "title", "amount", "tax_amount", "status"):
        if field in updates and updates[field] is None:
            del updates[field]
    if "status" in updates:
        updates["status"] = QuoteStatus(updates["status"]).value

    for field, value in updates.items():
        setattr(quote, field, value)

    if "amount" in updates or "tax_amount" in updates:
        quote.total_amount = compute_total(quote.amount, quote.tax_amount)

    db.flush()
    return quote


def delete_quote(db: Session, user_id: UUID, quote_id: UUID) -> None:
    quote = require_quote(db, user_id, quote_id)
    db.delete(quote)
    db.flush()
