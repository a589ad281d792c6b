"""Cashfree PG client - thin async pass-through over the provider's HTTP API.

Every call fetches a bearer token from /auth/token with the app id and
secret, then hits the orders API. There is no retry; upstream failures
surface as CashfreeError.
"""

from __future__ import annotations

import logging
import secrets
import string
import time
from dataclasses import dataclass
from typing import Any

import httpx
from sqlalchemy.orm import Session

from freelancehub.core.config import settings
from freelancehub.schemas.cashfree import OrderCreate
from freelancehub.services import payment_key_service

logger = logging.getLogger(__name__)

PROVIDER = "cashfree"
APP_ID_KEY_NAME = "app_id"
SECRET_KEY_NAME = "secret_key"

_ORDER_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class CashfreeError(Exception):
    """Cashfree request failed or credentials are missing."""

    pass


@dataclass(frozen=True)
class CashfreeCredentials:
    app_id: str
    secret_key: str

    def __repr__(self) -> str:
        return f"CashfreeCredentials(app_id={self.app_id!r}, secret_key='***')"


def resolve_credentials(db: Session) -> CashfreeCredentials:
    """
    Credentials from settings, else from active stored payment keys.

    Raises:
        CashfreeError: neither source has both values
    """
    if settings.CASHFREE_APP_ID and settings.CASHFREE_SECRET_KEY:
        return CashfreeCredentials(settings.CASHFREE_APP_ID, settings.CASHFREE_SECRET_KEY)

    app_id = payment_key_service.get_decrypted_key(db, PROVIDER, APP_ID_KEY_NAME)
    secret_key = payment_key_service.get_decrypted_key(db, PROVIDER, SECRET_KEY_NAME)
    if not app_id or not secret_key:
        raise CashfreeError("Cashfree credentials are not configured")
    return CashfreeCredentials(app_id, secret_key)


def get_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.cashfree_base_url,
        timeout=settings.CASHFREE_TIMEOUT_SECONDS,
    )


def generate_order_id() -> str:
    """order_<epoch ms>_<9 random base36 chars>."""
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(9))
    return f"order_{int(time.time() * 1000)}_{suffix}"


def _raise_for_status(response: httpx.Response, operation: str) -> None:
    if response.is_success:
        return
    try:
        message = response.json().get("message") or "Unknown error"
    except ValueError:
        message = "Unknown error"
    raise CashfreeError(f"Cashfree {operation} failed ({response.status_code}): {message}")


async def _get_access_token(
    client: httpx.AsyncClient, credentials: CashfreeCredentials
) -> str:
    response = await client.post(
        "/auth/token",
        headers={
            "x-client-id": credentials.app_id,
            "x-client-secret": credentials.secret_key,
            "Content-Type": "application/json",
        },
    )
    _raise_for_status(response, "token request")
    token = response.json().get("access_token")
    if not token:
        raise CashfreeError("Cashfree token response missing access_token")
    return token


def _api_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "x-api-version": settings.CASHFREE_API_VERSION,
    }


async def _call(
    credentials: CashfreeCredentials,
    method: str,
    path: str,
    operation: str,
    json: dict[str, Any] | None = None,
) -> dict[str, Any]:
    try:
        async with get_http_client() as client:
            token = await _get_access_token(client, credentials)
            response = await client.request(
                method, path, headers=_api_headers(token), json=json
            )
    except httpx.HTTPError as exc:
        raise CashfreeError(f"Cashfree {operation} failed: {exc}") from exc
    _raise_for_status(response, operation)
    return response.json()


async def create_order(
    credentials: CashfreeCredentials, data: OrderCreate, base_url: str
) -> dict[str, Any]:
    """
    Open an order and return Cashfree's response as-is.

    base_url is the public origin of this API, used for the return and
    notify URLs.
    """
    base = base_url.rstrip("/")
    order = {
        "order_id": generate_order_id(),
        "order_amount": float(data.amount),
        "order_currency": data.currency,
        "customer_details": {
            "customer_id": data.customer_id,
            "customer_email": data.customer_email,
            "customer_phone": data.customer_phone,
        },
        "order_meta": {
            "return_url": f"{base}/payment/success",
            "notify_url": f"{base}/api/cashfree/webhook",
        },
    }
    logger.info("Creating Cashfree order", extra={"order_id": order["order_id"]})
    return await _call(credentials, "POST", "/orders", "order creation", json=order)


async def get_order_status(credentials: CashfreeCredentials, order_id: str) -> dict[str, Any]:
    return await _call(credentials, "GET", f"/orders/{order_id}", "order status")


async def initiate_payment(credentials: CashfreeCredentials, order_id: str) -> dict[str, Any]:
    return await _call(credentials, "POST", f"/orders/{order_id}/pay", "payment initiation")


def handle_webhook(payload: dict[str, Any]) -> dict[str, str]:
    """Log the payment outcome and acknowledge receipt."""
    order_id = payload.get("order_id")
    status = payload.get("order_status")
    if status == "PAID":
        logger.info(
            "Cashfree payment succeeded",
            extra={"order_id": order_id, "payment_id": payload.get("payment_id")},
        )
    elif status == "FAILED":
        logger.warning("Cashfree payment failed", extra={"order_id": order_id})
    else:
        logger.info(
            "Cashfree webhook received", extra={"order_id": order_id, "order_status": status}
        )
    return {"status": "OK"}
