"""Dashboard service - headline stats computed from a user's records."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable
from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.db.enums import PENDING_INVOICE_STATUSES, InvoiceStatus, ProjectStatus
from freelancehub.db.models import Invoice, Project, TimeEntry
from freelancehub.db.types import as_utc, utcnow
from freelancehub.utils.money import format_hours, format_money, total

WEEKLY_WINDOW = timedelta(days=7)
REVENUE_WINDOW = timedelta(days=30)

_PENDING = {status.value for status in PENDING_INVOICE_STATUSES}


@dataclass(frozen=True)
class DashboardNumbers:
    weekly_hours: str
    active_projects: int
    pending_invoices: str
    monthly_revenue: str


def compute_stats(
    projects: Iterable[Project],
    time_entries: Iterable[TimeEntry],
    invoices: Iterable[Invoice],
    now: datetime,
) -> DashboardNumbers:
    """
    Aggregate already-fetched records.

    - weekly_hours: minutes of entries created in the last 7 days that have
      a duration, divided by 60
    - active_projects: projects with status active
    - pending_invoices: total_amount of sent/overdue invoices
    - monthly_revenue: total_amount of paid invoices paid in the last 30 days
    """
    now = as_utc(now)
    invoices = list(invoices)

    week_start = now - WEEKLY_WINDOW
    weekly_minutes = sum(
        entry.duration
        for entry in time_entries
        if entry.duration and entry.created_at and as_utc(entry.created_at) >= week_start
    )

    active_projects = sum(
        1 for project in projects if project.status == ProjectStatus.ACTIVE.value
    )

    pending = total(
        invoice.total_amount for invoice in invoices if invoice.status in _PENDING
    )

    revenue_start = now - REVENUE_WINDOW
    revenue = total(
        invoice.total_amount
        for invoice in invoices
        if invoice.status == InvoiceStatus.PAID.value
        and invoice.paid_date
        and as_utc(invoice.paid_date) >= revenue_start
    )

    return DashboardNumbers(
        weekly_hours=format_hours(Decimal(weekly_minutes) / Decimal(60)),
        active_projects=active_projects,
        pending_invoices=format_money(pending),
        monthly_revenue=format_money(revenue),
    )


def get_dashboard_stats(
    db: Session, user_id: UUID, now: datetime | None = None
) -> DashboardNumbers:
    """Fetch the user's projects, time entries and invoices and aggregate them."""
    projects = db.query(Project).filter(Project.user_id == user_id).all()
    time_entries = db.query(TimeEntry).filter(TimeEntry.user_id == user_id).all()
    invoices = db.query(Invoice).filter(Invoice.user_id == user_id).all()
    return compute_stats(projects, time_entries, invoices, now or utcnow())
