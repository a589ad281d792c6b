"""Project service - CRUD for projects, optionally linked to a client."""

from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.db.models import Project
from freelancehub.schemas.project import ProjectCreate, ProjectUpdate
from freelancehub.services import client_service


class ProjectServiceError(Exception):
    """Base exception for project service errors."""

    pass


class ProjectNotFoundError(ProjectServiceError):
    """Project not found (or owned by another user)."""

    pass


def list_projects(db: Session, user_id: UUID) -> list[Project]:
    """List a user's projects, newest first."""
    return (
        db.query(Project)
        .filter(Project.user_id == user_id)
        .order_by(Project.created_at.desc())
        .all()
    )


def get_project(db: Session, user_id: UUID, project_id: UUID) -> Project | None:
    return (
        db.query(Project)
        .filter(Project.id == project_id, Project.user_id == user_id)
        .first()
    )


def require_project(db: Session, user_id: UUID, project_id: UUID) -> Project:
    project = get_project(db, user_id, project_id)
    if not project:
        raise ProjectNotFoundError(f"Project {project_id} not found")
    return project


def create_project(db: Session, user_id: UUID, data: ProjectCreate) -> Project:
    """
    Create a project.

    Raises:
        ClientNotFoundError: client_id given but not owned by the user
    """
    if data.client_id:
        client_service.require_client(db, user_id, data.client_id)

    values = data.model_dump()
    values["status"] = data.status.value
    project = Project(user_id=user_id, **values)
    db.add(project)
    db.flush()
    return project


def update_project(
    db: Session, user_id: UUID, project_id: UUID, data: ProjectUpdate
) -> Project:
    project = require_project(db, user_id, project_id)
    updates = data.model_dump(exclude_unset=True)

    if updates.get("client_id"):
        client_service.require_client(db, user_id, updates["client_id"])
    if updates.get("status") is not None:
        updates["status"] = data.status.value
    elif "status" in updates:
        del updates["status"]
    if "name" in updates and updates["name"] is None:
        del updates["name"]

    for field, value in updates.items():
        setattr(project, field, value)
    db.flush()
    return project


def delete_project(db: Session, user_id: UUID, project_id: UUID) -> None:
    """Delete a project. Its time entries go with it; invoices keep existing unlinked."""
    project = require_project(db, user_id, project_id)
    db.delete(project)
    db.flush()
