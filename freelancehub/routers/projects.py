"""Projects router - CRUD for the user's projects."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import User
from freelancehub.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from freelancehub.services import activity_service, client_service, project_service

router = APIRouter()


@router.get("", response_model=list[ProjectRead])
def list_projects(
    user: User = Depends(require_permission("projects")),
    db: Session = Depends(get_db),
):
    return project_service.list_projects(db, user.id)


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project_id: UUID,
    user: User = Depends(require_permission("projects")),
    db: Session = Depends(get_db),
):
    project = project_service.get_project(db, user.id, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.post(
    "",
    response_model=ProjectRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_project(
    data: ProjectCreate,
    request: Request,
    user: User = Depends(require_permission("projects")),
    db: Session = Depends(get_db),
):
    try:
        project = project_service.create_project(db, user.id, data)
    except client_service.ClientNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")
    db.commit()
    db.refresh(project)
    result = ProjectRead.model_validate(project)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.CREATE_PROJECT,
        EntityType.PROJECT, project.id, {"name": project.name},
    )
    return result


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    request: Request,
    user: User = Depends(require_permission("projects")),
    db: Session = Depends(get_db),
):
    try:
        project = project_service.update_project(db, user.id, project_id, data)
    except project_service.ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except client_service.ClientNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")
    db.commit()
    db.refresh(project)
    result = ProjectRead.model_validate(project)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.UPDATE_PROJECT,
        EntityType.PROJECT, project_id,
        {"fields": sorted(data.model_dump(exclude_unset=True))},
    )
    return result


@router.delete(
    "/{project_id}", status_code=204, dependencies=[Depends(require_csrf_header)]
)
def delete_project(
    project_id: UUID,
    request: Request,
    user: User = Depends(require_permission("projects")),
    db: Session = Depends(get_db),
):
    try:
        project_service.delete_project(db, user.id, project_id)
    except project_service.ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    db.commit()

    activity_service.log_activity(
        db, request, user.id, ActivityAction.DELETE_PROJECT, EntityType.PROJECT, project_id
    )
    return Response(status_code=204)
