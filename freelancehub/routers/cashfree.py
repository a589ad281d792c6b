"""Cashfree router - checkout pass-through and payment webhook."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.models import User
from freelancehub.schemas.cashfree import OrderCreate, PaymentInitiate, WebhookEvent
from freelancehub.services import cashfree_service
from freelancehub.services.cashfree_service import CashfreeCredentials, CashfreeError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_credentials(
    _: User = Depends(require_permission("payments")),
    db: Session = Depends(get_db),
) -> CashfreeCredentials:
    try:
        return cashfree_service.resolve_credentials(db)
    except CashfreeError:
        logger.exception("Cashfree credentials unavailable")
        raise HTTPException(status_code=500, detail="Payment gateway is not configured")


@router.post("/orders", dependencies=[Depends(require_csrf_header)])
async def create_order(
    data: OrderCreate,
    request: Request,
    credentials: CashfreeCredentials = Depends(get_credentials),
):
    try:
        return await cashfree_service.create_order(credentials, data, str(request.base_url))
    except CashfreeError:
        logger.exception("Failed to create Cashfree order")
        raise HTTPException(status_code=500, detail="Failed to create order")


@router.get("/orders/{order_id}")
async def get_order_status(
    order_id: str,
    credentials: CashfreeCredentials = Depends(get_credentials),
):
    try:
        return await cashfree_service.get_order_status(credentials, order_id)
    except CashfreeError:
        logger.exception("Failed to get Cashfree order status")
        raise HTTPException(status_code=500, detail="Failed to get order status")


@router.post("/initiate-payment", dependencies=[Depends(require_csrf_header)])
async def initiate_payment(
    data: PaymentInitiate,
    credentials: CashfreeCredentials = Depends(get_credentials),
):
    try:
        return await cashfree_service.initiate_payment(credentials, data.order_id)
    except CashfreeError:
        logger.exception("Failed to initiate Cashfree payment")
        raise HTTPException(status_code=500, detail="Failed to initiate payment")


@router.post("/webhook")
def webhook(event: WebhookEvent):
    """Unauthenticated provider callback."""
    return cashfree_service.handle_webhook(event.model_dump())
