"""Invoice and quote enums."""

from enum import Enum


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class QuoteStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class TemplateVariant(str, Enum):
    """A/B label attached to invoices and quotes. Display only."""

    A = "A"
    B = "B"


class DocumentCounterType(str, Enum):
    """Sequences backed by the document_counters table, valued by number prefix."""

    INVOICE = "INV"
    QUOTE = "QUO"


# Invoices still awaiting payment (dashboard "pending" total)
PENDING_INVOICE_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.OVERDUE})
