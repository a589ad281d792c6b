"""Shared helpers for invoices and quotes."""

import random
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.db.enums import TemplateVariant
from freelancehub.services import client_service, project_service
from freelancehub.utils.money import quantize, to_decimal


def pick_template_variant() -> str:
    """Uniform A/B label. Display only; never affects amounts."""
    return random.choice(list(TemplateVariant)).value


def compute_total(amount, tax_amount) -> Decimal:
    return quantize(to_decimal(amount) + to_decimal(tax_amount))


def check_links(
    db: Session, user_id: UUID, client_id: UUID | None, project_id: UUID | None
) -> None:
    """
    Ensure referenced client/project belong to the user.

    Raises:
        ClientNotFoundError / ProjectNotFoundError
    """
    if client_id:
        client_service.require_client(db, user_id, client_id)
    if project_id:
        project_service.require_project(db, user_id, project_id)
