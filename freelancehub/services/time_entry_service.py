"""Time entry service - timer lifecycle with a single running entry per user.

States: idle -> running -> stopped. Starting a timer stops any running one
at the same instant, and the partial unique index on
(user_id) WHERE is_running backs the rule up when two starts race.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freelancehub.db.models import TimeEntry
from freelancehub.db.types import utcnow
from freelancehub.schemas.time_entry import TimeEntryStart, TimeEntryUpdate
from freelancehub.services import project_service

logger = logging.getLogger(__name__)


class TimeEntryServiceError(Exception):
    """Base exception for time entry service errors."""

    pass


class TimeEntryNotFoundError(TimeEntryServiceError):
    """Time entry not found (or owned by another user)."""

    pass


class TimeEntryNotRunningError(TimeEntryServiceError):
    """Stop requested for an entry that is already stopped."""

    pass


class TimerAlreadyRunningError(TimeEntryServiceError):
    """A concurrent start won the race for the user's running slot."""

    pass


class InvalidTimeRangeError(TimeEntryServiceError):
    """end_time is before start_time."""

    pass


def compute_duration(start_time: datetime, end_time: datetime) -> int:
    """Whole minutes between start and end, never negative."""
    seconds = (end_time - start_time).total_seconds()
    return max(0, int(seconds // 60))


def list_time_entries(
    db: Session, user_id: UUID, project_id: UUID | None = None
) -> list[TimeEntry]:
    """List a user's entries, newest first, optionally for one project."""
    query = db.query(TimeEntry).filter(TimeEntry.user_id == user_id)
    if project_id:
        query = query.filter(TimeEntry.project_id == project_id)
    return query.order_by(TimeEntry.start_time.desc(), TimeEntry.created_at.desc()).all()


def get_time_entry(db: Session, user_id: UUID, entry_id: UUID) -> TimeEntry | None:
    return (
        db.query(TimeEntry)
        .filter(TimeEntry.id == entry_id, TimeEntry.user_id == user_id)
        .first()
    )


def require_time_entry(db: Session, user_id: UUID, entry_id: UUID) -> TimeEntry:
    entry = get_time_entry(db, user_id, entry_id)
    if not entry:
        raise TimeEntryNotFoundError(f"Time entry {entry_id} not found")
    return entry


def get_active_time_entry(db: Session, user_id: UUID) -> TimeEntry | None:
    """Return the user's running entry, if any."""
    return (
        db.query(TimeEntry)
        .filter(TimeEntry.user_id == user_id, TimeEntry.is_running.is_(True))
        .first()
    )


def _stop(entry: TimeEntry, end_time: datetime) -> None:
    entry.end_time = end_time
    entry.duration = compute_duration(entry.start_time, end_time)
    entry.is_running = False


def start_time_entry(
    db: Session,
    user_id: UUID,
    data: TimeEntryStart,
    now: datetime | None = None,
) -> tuple[TimeEntry, TimeEntry | None]:
    """
    Start a timer on one of the user's projects.

    Any running entry is stopped at the same instant the new one starts.
    Both changes are flushed in the caller's transaction.

    Returns:
        (new entry, entry that was auto-stopped or None)

    Raises:
        ProjectNotFoundError: project not owned by the user
        TimerAlreadyRunningError: a concurrent start already holds the slot
    """
    project_service.require_project(db, user_id, data.project_id)
    now = now or utcnow()

    stopped = get_active_time_entry(db, user_id)
    if stopped:
        _stop(stopped, now)
        # Release the running slot before inserting the new entry
        db.flush()

    entry = TimeEntry(
        user_id=user_id,
        project_id=data.project_id,
        description=data.description,
        start_time=now,
        is_running=True,
    )
    db.add(entry)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.info("Concurrent timer start rejected", extra={"user_id": str(user_id)})
        raise TimerAlreadyRunningError("Another timer is already running")
    return entry, stopped


def stop_time_entry(
    db: Session, user_id: UUID, entry_id: UUID, now: datetime | None = None
) -> TimeEntry:
    """
    Stop a running entry and record its whole-minute duration.

    Raises:
        TimeEntryNotFoundError: entry missing or foreign
        TimeEntryNotRunningError: entry already stopped
    """
    entry = require_time_entry(db, user_id, entry_id)
    if not entry.is_running:
        raise TimeEntryNotRunningError("Time entry is not running")
    _stop(entry, now or utcnow())
    db.flush()
    return entry


def update_time_entry(
    db: Session, user_id: UUID, entry_id: UUID, data: TimeEntryUpdate
) -> TimeEntry:
    """
    Edit an entry.

    A supplied end_time stops the entry; the duration is recomputed from
    the possibly updated start_time whenever the entry has an end.
    """
    entry = require_time_entry(db, user_id, entry_id)
    updates = data.model_dump(exclude_unset=True)

    if updates.get("project_id"):
        project_service.require_project(db, user_id, updates["project_id"])
        entry.project_id = updates["project_id"]
    if "description" in updates:
        entry.description = updates["description"]
    if updates.get("start_time"):
        entry.start_time = updates["start_time"]

    end_time = updates.get("end_time") or entry.end_time
    if end_time is not None:
        if end_time < entry.start_time:
            raise InvalidTimeRangeError("end_time must not be before start_time")
        _stop(entry, end_time)

    db.flush()
    return entry


def delete_time_entry(db: Session, user_id: UUID, entry_id: UUID) -> None:
    """Delete an entry in any state."""
    entry = require_time_entry(db, user_id, entry_id)
    db.delete(entry)
    db.flush()
