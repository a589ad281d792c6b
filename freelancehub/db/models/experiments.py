"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freelancehub.db.base import Base, JSONType
from freelancehub.db.enums import AbTestStatus
from freelancehub.db.types import utcnow


class AbTest(Base):
    """Two template variants under comparison. No statistics are computed."""

    __tablename__ = "ab_tests"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)  # 'invoice_template', 'quote_template'
    variant_a: Mapped[dict] = mapped_column(JSONType, nullable=False)
    variant_b: Mapped[dict] = mapped_column(JSONType, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=AbTestStatus.DRAFT.value, nullable=False
    )
    start_date: Mapped[datetime | None] = mapped_column(nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(nullable=True)
    success_metric: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    results: Mapped[list["AbTestResult"]] = relationship(
        back_populates="test", cascade="all, delete-orphan"
    )


class AbTestResult(Base):
    """Outcome for one invoice/quote shown with a given variant."""

    __tablename__ = "ab_test_results"
    __table_args__ = (
        Index("idx_ab_results_test", "test_id", "recorded_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    test_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("ab_tests.id", ondelete="CASCADE"), nullable=False
    )
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    variant: Mapped[str] = mapped_column(String(1), nullable=False)
    success: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    test: Mapped["AbTest"] = relationship(back_populates="results")
