"""Enum definitions for application constants."""

from freelancehub.db.enums.activity import ActivityAction, EntityType
from freelancehub.db.enums.auth import Role
from freelancehub.db.enums.billing import (
    PENDING_INVOICE_STATUSES,
    DocumentCounterType,
    InvoiceStatus,
    QuoteStatus,
    TemplateVariant,
)
from freelancehub.db.enums.experiments import AbTestStatus
from freelancehub.db.enums.projects import ProjectStatus

__all__ = [
    "AbTestStatus",
    "ActivityAction",
    "DocumentCounterType",
    "EntityType",
    "InvoiceStatus",
    "PENDING_INVOICE_STATUSES",
    "ProjectStatus",
    "QuoteStatus",
    "Role",
    "TemplateVariant",
]
