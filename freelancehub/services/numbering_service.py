"""Sequential document numbers: INV-2024-001, QUO-2024-001.

Each (counter_type, year) row in document_counters is bumped with a single
INSERT ... ON CONFLICT DO UPDATE ... RETURNING, so concurrent creations
never see the same value and a new year starts again at 1.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from freelancehub.db.dialects import upsert_insert
from freelancehub.db.enums import DocumentCounterType
from freelancehub.db.models import DocumentCounter
from freelancehub.db.types import utcnow


def next_value(db: Session, counter_type: DocumentCounterType, year: int) -> int:
    """Atomically increment and return the counter for (type, year)."""
    insert = upsert_insert(db)
    now = utcnow()
    stmt = insert(DocumentCounter).values(
        counter_type=counter_type.value,
        year=year,
        current_value=1,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[DocumentCounter.counter_type, DocumentCounter.year],
        set_={
            "current_value": DocumentCounter.current_value + 1,
            "updated_at": now,
        },
    ).returning(DocumentCounter.current_value)
    return db.execute(stmt).scalar_one()


def format_number(counter_type: DocumentCounterType, year: int, value: int) -> str:
    return f"{counter_type.value}-{year}-{value:03d}"


def generate_number(
    db: Session, counter_type: DocumentCounterType, now: datetime | None = None
) -> str:
    """Reserve the next number for the current UTC year."""
    year = (now or utcnow()).year
    return format_number(counter_type, year, next_value(db, counter_type, year))


def generate_invoice_number(db: Session, now: datetime | None = None) -> str:
    return generate_number(db, DocumentCounterType.INVOICE, now)


def generate_quote_number(db: Session, now: datetime | None = None) -> str:
    return generate_number(db, DocumentCounterType.QUOTE, now)
