"""Pydantic schemas for time entries."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


class TimeEntryStart(BaseModel):
    """Request to start a timer. Any running timer is stopped first."""

    project_id: UUID
    description: str | None = Field(None, max_length=2000)


class TimeEntryUpdate(BaseModel):
    """
    Request to edit a time entry (partial).

    Supplying end_time stops the entry and recomputes its duration.
    Naive timestamps are taken as UTC.
    """

    project_id: UUID | None = None
    description: str | None = Field(None, max_length=2000)
    start_time: datetime | None = None
    end_time: datetime | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def check_range(self) -> "TimeEntryUpdate":
        if self.start_time and self.end_time and self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class TimeEntryRead(BaseModel):
    """Time entry response."""

    id: UUID
    user_id: UUID
    project_id: UUID
    description: str | None
    start_time: datetime
    end_time: datetime | None
    duration: int | None
    is_running: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
