"""Pydantic schemas for projects."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from freelancehub.db.enums import ProjectStatus


class ProjectCreate(BaseModel):
    """Request to create a project."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    client_id: UUID | None = None
    hourly_rate: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: ProjectStatus = ProjectStatus.ACTIVE
    deadline: datetime | None = None


class ProjectUpdate(BaseModel):
    """Request to update a project (partial). Any status may follow any other."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    client_id: UUID | None = None
    hourly_rate: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: ProjectStatus | None = None
    deadline: datetime | None = None


class ProjectRead(BaseModel):
    """Project response."""

    id: UUID
    user_id: UUID
    client_id: UUID | None
    name: str
    description: str | None
    hourly_rate: Decimal | None
    status: ProjectStatus
    deadline: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
