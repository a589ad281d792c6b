"""Auth-related enums."""

from enum import Enum


class Role(str, Enum):
    """
    User roles.

    - ADMIN: manages users, payment keys, A/B tests and reads activity logs
    - FREELANCER: default role, owns clients/projects/time/invoices
    - CLIENT: read-mostly account for a freelancer's customer
    """

    ADMIN = "admin"
    FREELANCER = "freelancer"
    CLIENT = "client"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_
