"""Pydantic schemas for users."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from freelancehub.db.enums import Role


class UserRead(BaseModel):
    """User profile response."""

    id: UUID
    email: str | None
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
    role: Role
    hourly_rate: Decimal | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserRoleUpdate(BaseModel):
    """Admin request to change a user's role."""

    role: Role
