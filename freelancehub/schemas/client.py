"""Pydantic schemas for clients."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ClientCreate(BaseModel):
    """Request to create a client."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    address: str | None = None
    notes: str | None = None


class ClientUpdate(BaseModel):
    """Request to update a client (partial)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    address: str | None = None
    notes: str | None = None


class ClientRead(BaseModel):
    """Client response."""

    id: UUID
    user_id: UUID
    name: str
    email: str | None
    phone: str | None
    company: str | None
    address: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
