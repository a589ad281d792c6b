"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from freelancehub.db.base import Base
from freelancehub.db.enums import Role
from freelancehub.db.types import utcnow


class User(Base):
    """
    Application user (the freelancer, an admin, or a client login).

    Identity is established by the external identity provider; the row is
    upserted from token claims on first login. No passwords stored.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_created", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    auth_subject: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20), default=Role.FREELANCER.value, nullable=False
    )
    hourly_rate: Mapped[Decimal | None] = mapped_column(nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email or self.auth_subject
