"""Activity log service - append-only record of user mutations.

log_activity runs after the triggering change is committed and owns its
own transaction: a failed write is rolled back and logged, never raised.
"""

import logging
from uuid import UUID

from fastapi import Request
from sqlalchemy.orm import Session

from freelancehub.core.config import settings
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import ActivityLog

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 500
USER_AGENT_MAX_LENGTH = 500


def get_client_ip(request: Request | None) -> str | None:
    """
    Extract client IP from request.

    Only trusts X-Forwarded-For when TRUST_PROXY_HEADERS=True (behind reverse proxy).
    """
    if not request:
        return None

    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            # X-Forwarded-For: client, proxy1, proxy2 - take first
            return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host
    return None


def get_user_agent(request: Request | None) -> str | None:
    """Extract user agent from request."""
    if not request:
        return None
    ua = request.headers.get("user-agent", "")
    return ua[:USER_AGENT_MAX_LENGTH] if ua else None


def log_activity(
    db: Session,
    request: Request | None,
    user_id: UUID,
    action: ActivityAction,
    entity_type: EntityType | None = None,
    entity_id: UUID | str | None = None,
    details: dict | None = None,
) -> ActivityLog | None:
    """
    Record an activity entry and commit it.

    Returns the entry, or None if the write failed.
    """
    entry = ActivityLog(
        user_id=user_id,
        action=action.value,
        entity_type=entity_type.value if entity_type else None,
        entity_id=str(entity_id) if entity_id is not None else None,
        details=details,
        ip_address=get_client_ip(request),
        user_agent=get_user_agent(request),
    )
    try:
        db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(
            "Failed to write activity log",
            extra={"user_id": str(user_id), "activity_action": action.value},
        )
        return None
    return entry


def list_activity_logs(
    db: Session, user_id: UUID | None = None, limit: int | None = None
) -> list[ActivityLog]:
    """Newest first, optionally for one user. limit is clamped to 1..500."""
    if limit is None:
        limit = settings.ACTIVITY_LOG_DEFAULT_LIMIT
    limit = max(1, min(limit, MAX_LIST_LIMIT))

    query = db.query(ActivityLog)
    if user_id:
        query = query.filter(ActivityLog.user_id == user_id)
    return query.order_by(ActivityLog.created_at.desc()).limit(limit).all()
