"""Pydantic schemas for invoices and quotes."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from freelancehub.db.enums import InvoiceStatus, QuoteStatus, TemplateVariant


Money = Decimal


class InvoiceCreate(BaseModel):
    """
    Request to create an invoice.

    invoice_number, total_amount and template_variant are assigned by the
    server.
    """

    client_id: UUID
    project_id: UUID | None = None
    amount: Money = Field(..., ge=0, max_digits=10, decimal_places=2)
    tax_amount: Money = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    status: InvoiceStatus = InvoiceStatus.DRAFT
    issue_date: datetime | None = None
    due_date: datetime | None = None
    notes: str | None = None


class InvoiceUpdate(BaseModel):
    """Request to update an invoice (partial)."""

    client_id: UUID | None = None
    project_id: UUID | None = None
    amount: Money | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    tax_amount: Money | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: InvoiceStatus | None = None
    issue_date: datetime | None = None
    due_date: datetime | None = None
    paid_date: datetime | None = None
    notes: str | None = None


class InvoiceRead(BaseModel):
    """Invoice response."""

    id: UUID
    user_id: UUID
    client_id: UUID
    project_id: UUID | None
    invoice_number: str
    amount: Money
    tax_amount: Money
    total_amount: Money
    status: InvoiceStatus
    issue_date: datetime | None
    due_date: datetime | None
    paid_date: datetime | None
    notes: str | None
    template_variant: TemplateVariant
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class QuoteCreate(BaseModel):
    """Request to create a quote. Numbering and variant are server-assigned."""

    client_id: UUID
    project_id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    amount: Money = Field(..., ge=0, max_digits=10, decimal_places=2)
    tax_amount: Money = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    status: QuoteStatus = QuoteStatus.DRAFT
    valid_until: datetime | None = None
    notes: str | None = None


class QuoteUpdate(BaseModel):
    """Request to update a quote (partial)."""

    client_id: UUID | None = None
    project_id: UUID | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    amount: Money | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    tax_amount: Money | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: QuoteStatus | None = None
    valid_until: datetime | None = None
    notes: str | None = None


class QuoteRead(BaseModel):
    """Quote response."""

    id: UUID
    user_id: UUID
    client_id: UUID
    project_id: UUID | None
    quote_number: str
    title: str
    description: str | None
    amount: Money
    tax_amount: Money
    total_amount: Money
    status: QuoteStatus
    valid_until: datetime | None
    notes: str | None
    template_variant: TemplateVariant
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
