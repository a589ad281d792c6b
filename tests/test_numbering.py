"""Tests for sequential invoice/quote numbering."""
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy.orm import Session

from freelancehub.db.dialects import UnsupportedDialectError
from freelancehub.db.enums import DocumentCounterType
from freelancehub.db.models import DocumentCounter
from freelancehub.services import numbering_service


def _at(year: int) -> datetime:
    return datetime(year, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_numbers_are_sequential_and_zero_padded(db: Session):
    numbers = [numbering_service.generate_invoice_number(db, _at(2024)) for _ in range(11)]
    assert numbers[0] == "INV-2024-001"
    assert numbers[9] == "INV-2024-010"
    assert numbers[10] == "INV-2024-011"
    assert numbers == sorted(numbers)
    assert len(set(numbers)) == 11


def test_counters_are_independent_per_type(db: Session):
    assert numbering_service.generate_invoice_number(db, _at(2024)) == "INV-2024-001"
    assert numbering_service.generate_quote_number(db, _at(2024)) == "QUO-2024-001"
    assert numbering_service.generate_invoice_number(db, _at(2024)) == "INV-2024-002"


def test_sequence_restarts_each_year(db: Session):
    numbering_service.generate_invoice_number(db, _at(2024))
    numbering_service.generate_invoice_number(db, _at(2024))
    assert numbering_service.generate_invoice_number(db, _at(2025)) == "INV-2025-001"
    assert numbering_service.generate_invoice_number(db, _at(2024)) == "INV-2024-003"


def test_counter_row_tracks_last_value(db: Session):
    for _ in range(3):
        numbering_service.generate_quote_number(db, _at(2030))
    db.commit()

    counter = db.get(DocumentCounter, (DocumentCounterType.QUOTE.value, 2030))
    assert counter.current_value == 3


def test_padding_grows_past_three_digits():
    assert numbering_service.format_number(DocumentCounterType.INVOICE, 2024, 1234) == "INV-2024-1234"


def test_unsupported_backend_is_rejected():
    mysql_session = SimpleNamespace(
        get_bind=lambda: SimpleNamespace(dialect=SimpleNamespace(name="mysql"))
    )
    with pytest.raises(UnsupportedDialectError):
        numbering_service.generate_invoice_number(mysql_session, _at(2024))
