"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from freelancehub.db.base import Base
from freelancehub.db.types import utcnow


class PaymentApiKey(Base):
    """
    Payment gateway credential.

    Security:
    - encrypted_key holds iv:auth_tag:ciphertext, never the plaintext
    - Read paths redact the value entirely
    """

    __tablename__ = "payment_api_keys"
    __table_args__ = (
        Index("idx_payment_keys_provider", "provider", "key_name", "is_active"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    provider: Mapped[str] = mapped_column(String(50), nullable=False)  # 'cashfree', 'stripe'...
    key_name: Mapped[str] = mapped_column(String(100), nullable=False)  # 'app_id', 'secret_key'...
    encrypted_key: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )
