"""Payment key service - gateway credentials encrypted at rest.

Plaintext only exists on the way in (create/rotate) and inside
get_decrypted_key, which the gateway client uses server-side.
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.core.encryption import decrypt, encrypt
from freelancehub.db.models import PaymentApiKey
from freelancehub.schemas.payment_key import PaymentKeyCreate, PaymentKeyUpdate

logger = logging.getLogger(__name__)


class PaymentKeyServiceError(Exception):
    """Base exception for payment key service errors."""

    pass


class PaymentKeyNotFoundError(PaymentKeyServiceError):
    """Payment key not found."""

    pass


def list_payment_keys(db: Session) -> list[PaymentApiKey]:
    return db.query(PaymentApiKey).order_by(PaymentApiKey.created_at.desc()).all()


def get_payment_key(db: Session, key_id: UUID) -> PaymentApiKey | None:
    return db.get(PaymentApiKey, key_id)


def create_payment_key(db: Session, data: PaymentKeyCreate) -> PaymentApiKey:
    key = PaymentApiKey(
        provider=data.provider,
        key_name=data.key_name,
        encrypted_key=encrypt(data.key_value),
        is_active=data.is_active,
    )
    db.add(key)
    db.flush()
    logger.info(
        "Payment key stored",
        extra={"provider": key.provider, "key_name": key.key_name},
    )
    return key


def update_payment_key(
    db: Session, key_id: UUID, data: PaymentKeyUpdate
) -> PaymentApiKey:
    """Toggle is_active and/or rotate the stored value."""
    key = get_payment_key(db, key_id)
    if not key:
        raise PaymentKeyNotFoundError(f"Payment key {key_id} not found")
    if data.key_value is not None:
        key.encrypted_key = encrypt(data.key_value)
    if data.is_active is not None:
        key.is_active = data.is_active
    db.flush()
    return key


def delete_payment_key(db: Session, key_id: UUID) -> None:
    key = get_payment_key(db, key_id)
    if not key:
        raise PaymentKeyNotFoundError(f"Payment key {key_id} not found")
    db.delete(key)
    db.flush()


def get_decrypted_key(db: Session, provider: str, key_name: str) -> str | None:
    """Plaintext of the newest active key for provider/key_name, or None."""
    key = (
        db.query(PaymentApiKey)
        .filter(
            PaymentApiKey.provider == provider,
            PaymentApiKey.key_name == key_name,
            PaymentApiKey.is_active.is_(True),
        )
        .order_by(PaymentApiKey.created_at.desc())
        .first()
    )
    if not key:
        return None
    return decrypt(key.encrypted_key)
