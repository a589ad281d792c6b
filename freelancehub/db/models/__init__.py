"""SQLAlchemy ORM models, re-exported so Base.metadata sees every table."""

from freelancehub.db.models.activity import ActivityLog
from freelancehub.db.models.auth import User
from freelancehub.db.models.billing import DocumentCounter, Invoice, Quote
from freelancehub.db.models.clients import Client, Project
from freelancehub.db.models.documents import Document
from freelancehub.db.models.experiments import AbTest, AbTestResult
from freelancehub.db.models.payments import PaymentApiKey
from freelancehub.db.models.time_tracking import TimeEntry

__all__ = [
    "AbTest",
    "AbTestResult",
    "ActivityLog",
    "Client",
    "Document",
    "DocumentCounter",
    "Invoice",
    "PaymentApiKey",
    "Project",
    "Quote",
    "TimeEntry",
    "User",
]
