"""Pydantic schemas for payment gateway keys.

The stored value never leaves the server: reads always carry the
REDACTED placeholder.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

REDACTED = "***hidden***"


class PaymentKeyCreate(BaseModel):
    """Request to store a payment key. key_value is encrypted before storage."""

    provider: str = Field(..., min_length=1, max_length=50)
    key_name: str = Field(..., min_length=1, max_length=100)
    key_value: str = Field(..., min_length=1, max_length=4000)
    is_active: bool = True


class PaymentKeyUpdate(BaseModel):
    """Toggle a key or rotate its value."""

    key_value: str | None = Field(None, min_length=1, max_length=4000)
    is_active: bool | None = None


class PaymentKeyRead(BaseModel):
    """Payment key response (value redacted)."""

    id: UUID
    provider: str
    key_name: str
    encrypted_key: str = REDACTED
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def redacted(cls, key) -> "PaymentKeyRead":
        return cls(
            id=key.id,
            provider=key.provider,
            key_name=key.key_name,
            is_active=key.is_active,
            created_at=key.created_at,
            updated_at=key.updated_at,
        )
