"""Pydantic schemas for the activity log."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ActivityLogRead(BaseModel):
    id: UUID
    user_id: UUID
    action: str
    entity_type: str | None
    entity_id: str | None
    details: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
