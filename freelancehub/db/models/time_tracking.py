"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freelancehub.db.base import Base
from freelancehub.db.types import utcnow

if TYPE_CHECKING:
    from freelancehub.db.models import Project, User


class TimeEntry(Base):
    """
    A tracked work session on a project.

    A running entry has is_running=True and no end_time. The partial unique
    index allows at most one running entry per user.
    """

    __tablename__ = "time_entries"
    __table_args__ = (
        Index("idx_time_entries_user_created", "user_id", "created_at"),
        Index("idx_time_entries_project", "project_id"),
        Index(
            "uq_time_entries_one_running_per_user",
            "user_id",
            unique=True,
            postgresql_where=text("is_running"),
            sqlite_where=text("is_running = 1"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_time: Mapped[datetime] = mapped_column(nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    is_running: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship()
    project: Mapped["Project"] = relationship()
