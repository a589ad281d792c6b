"""Time entries router - timer start/stop and entry edits."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import User
from freelancehub.schemas.time_entry import TimeEntryRead, TimeEntryStart, TimeEntryUpdate
from freelancehub.services import activity_service, project_service, time_entry_service

router = APIRouter()


@router.get("", response_model=list[TimeEntryRead])
def list_time_entries(
    project_id: UUID | None = Query(None, alias="projectId"),
    user: User = Depends(require_permission("time_entries")),
    db: Session = Depends(get_db),
):
    return time_entry_service.list_time_entries(db, user.id, project_id)


@router.get("/active", response_model=TimeEntryRead | None)
def get_active_time_entry(
    user: User = Depends(require_permission("time_entries")),
    db: Session = Depends(get_db),
):
    """The running entry, or null."""
    return time_entry_service.get_active_time_entry(db, user.id)


@router.post(
    "",
    response_model=TimeEntryRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def start_time_entry(
    data: TimeEntryStart,
    request: Request,
    user: User = Depends(require_permission("time_entries")),
    db: Session = Depends(get_db),
):
    """Start a timer; a running timer is stopped at the same instant."""
    try:
        entry, stopped = time_entry_service.start_time_entry(db, user.id, data)
    except project_service.ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except time_entry_service.TimerAlreadyRunningError:
        raise HTTPException(status_code=409, detail="Another timer is already running")
    stopped_id = stopped.id if stopped else None
    db.commit()
    db.refresh(entry)
    result = TimeEntryRead.model_validate(entry)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.START_TIMER,
        EntityType.TIME_ENTRY, result.id,
        {
            "project_id": str(result.project_id),
            "stopped_entry_id": str(stopped_id) if stopped_id else None,
        },
    )
    return result


@router.put(
    "/{entry_id}/stop",
    response_model=TimeEntryRead,
    dependencies=[Depends(require_csrf_header)],
)
def stop_time_entry(
    entry_id: UUID,
    request: Request,
    user: User = Depends(require_permission("time_entries")),
    db: Session = Depends(get_db),
):
    try:
        entry = time_entry_service.stop_time_entry(db, user.id, entry_id)
    except time_entry_service.TimeEntryNotFoundError:
        raise HTTPException(status_code=404, detail="Time entry not found")
    except time_entry_service.TimeEntryNotRunningError:
        raise HTTPException(status_code=400, detail="Time entry is not running")
    db.commit()
    db.refresh(entry)
    result = TimeEntryRead.model_validate(entry)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.STOP_TIMER,
        EntityType.TIME_ENTRY, entry_id, {"duration": result.duration},
    )
    return result


@router.put(
    "/{entry_id}",
    response_model=TimeEntryRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_time_entry(
    entry_id: UUID,
    data: TimeEntryUpdate,
    request: Request,
    user: User = Depends(require_permission("time_entries")),
    db: Session = Depends(get_db),
):
    try:
        entry = time_entry_service.update_time_entry(db, user.id, entry_id, data)
    except time_entry_service.TimeEntryNotFoundError:
        raise HTTPException(status_code=404, detail="Time entry not found")
    except project_service.ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except time_entry_service.InvalidTimeRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    db.refresh(entry)
    result = TimeEntryRead.model_validate(entry)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.UPDATE_TIME_ENTRY,
        EntityType.TIME_ENTRY, entry_id,
        {"fields": sorted(data.model_dump(exclude_unset=True))},
    )
    return result


@router.delete(
    "/{entry_id}", status_code=204, dependencies=[Depends(require_csrf_header)]
)
def delete_time_entry(
    entry_id: UUID,
    request: Request,
    user: User = Depends(require_permission("time_entries")),
    db: Session = Depends(get_db),
):
    try:
        time_entry_service.delete_time_entry(db, user.id, entry_id)
    except time_entry_service.TimeEntryNotFoundError:
        raise HTTPException(status_code=404, detail="Time entry not found")
    db.commit()

    activity_service.log_activity(
        db, request, user.id, ActivityAction.DELETE_TIME_ENTRY,
        EntityType.TIME_ENTRY, entry_id,
    )
    return Response(status_code=204)
