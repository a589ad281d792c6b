"""Project-related enums."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project status. Any value may follow any other."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
