"""Pydantic schemas for document metadata."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class DocumentCreate(BaseModel):
    """Register a stored file's metadata."""

    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=50)
    file_path: str = Field(..., min_length=1, max_length=1000)
    file_size: int | None = Field(None, ge=0)
    mime_type: str | None = Field(None, max_length=255)
    client_id: UUID | None = None
    project_id: UUID | None = None
    invoice_id: UUID | None = None
    quote_id: UUID | None = None


class DocumentRead(BaseModel):
    """Document metadata response."""

    id: UUID
    user_id: UUID
    name: str
    type: str
    file_path: str
    file_size: int | None
    mime_type: str | None
    client_id: UUID | None
    project_id: UUID | None
    invoice_id: UUID | None
    quote_id: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}
