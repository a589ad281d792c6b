"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freelancehub.db.base import Base
from freelancehub.db.enums import InvoiceStatus, QuoteStatus, TemplateVariant
from freelancehub.db.types import utcnow

if TYPE_CHECKING:
    from freelancehub.db.models import Client, Project, User


class Invoice(Base):
    """
    Invoice issued to a client.

    total_amount is always amount + tax_amount; template_variant is an A/B
    label with no effect on content.
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index("idx_invoices_user_created", "user_id", "created_at"),
        Index("idx_invoices_user_status", "user_id", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False
    )
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("projects.id", ondelete="SET NULL"), nullable=True
    )
    invoice_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    amount: Mapped[Decimal] = mapped_column(nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(default=Decimal("0"), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=InvoiceStatus.DRAFT.value, nullable=False
    )
    issue_date: Mapped[datetime | None] = mapped_column(default=utcnow, nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(nullable=True)
    paid_date: Mapped[datetime | None] = mapped_column(nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    template_variant: Mapped[str] = mapped_column(
        String(1), default=TemplateVariant.A.value, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship()
    client: Mapped["Client"] = relationship()
    project: Mapped["Project | None"] = relationship()


class Quote(Base):
    """Quote (estimate) sent to a client; numbered like invoices."""

    __tablename__ = "quotes"
    __table_args__ = (
        Index("idx_quotes_user_created", "user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False
    )
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("projects.id", ondelete="SET NULL"), nullable=True
    )
    quote_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount: Mapped[Decimal] = mapped_column(nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(default=Decimal("0"), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=QuoteStatus.DRAFT.value, nullable=False
    )
    valid_until: Mapped[datetime | None] = mapped_column(nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    template_variant: Mapped[str] = mapped_column(
        String(1), default=TemplateVariant.A.value, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship()
    client: Mapped["Client"] = relationship()
    project: Mapped["Project | None"] = relationship()


class DocumentCounter(Base):
    """
    Atomic counter for sequential document numbers (INV-2024-001).

    One row per (counter_type, year); incremented with INSERT...ON CONFLICT
    so concurrent creations never compute the same number.
    """

    __tablename__ = "document_counters"

    counter_type: Mapped[str] = mapped_column(String(10), primary_key=True)
    year: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    current_value: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )
