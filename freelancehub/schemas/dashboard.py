"""Pydantic schemas for dashboard stats."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """
    Dashboard headline numbers.

    Hours carry one decimal, money two; both are sent as strings.
    """

    weekly_hours: str
    active_projects: int
    pending_invoices: str
    monthly_revenue: str
