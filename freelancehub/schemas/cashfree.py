"""Pydantic schemas for the Cashfree checkout pass-through."""

from decimal import Decimal

from pydantic import BaseModel, Field


class OrderCreate(BaseModel):
    """Request to open a Cashfree order."""

    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    currency: str = Field("INR", min_length=3, max_length=3)
    customer_id: str = Field(..., min_length=1, max_length=50)
    customer_email: str = Field(..., min_length=3, max_length=255)
    customer_phone: str = Field("", max_length=20)


class PaymentInitiate(BaseModel):
    """Request to start payment for an existing order."""

    order_id: str = Field(..., min_length=1, max_length=100)


class WebhookEvent(BaseModel):
    """Fields of the Cashfree webhook body we act on; the rest is kept as-is."""

    order_id: str | None = None
    order_status: str | None = None
    payment_id: str | None = None

    model_config = {"extra": "allow"}
