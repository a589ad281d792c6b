"""Dashboard router - headline stats for the current user."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_permission
from freelancehub.db.models import User
from freelancehub.schemas.dashboard import DashboardStats
from freelancehub.services import dashboard_service

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    user: User = Depends(require_permission("dashboard")),
    db: Session = Depends(get_db),
):
    stats = dashboard_service.get_dashboard_stats(db, user.id)
    return DashboardStats(
        weekly_hours=stats.weekly_hours,
        active_projects=stats.active_projects,
        pending_invoices=stats.pending_invoices,
        monthly_revenue=stats.monthly_revenue,
    )
