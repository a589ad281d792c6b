"""Centralized RBAC policies for API resources.

Each route declares the resource (and optional action) it touches; the
allowed roles live here as data and are evaluated uniformly by
deps.require_permission.
"""

from dataclasses import dataclass, field

from freelancehub.db.enums import Role


ALL_ROLES: frozenset[Role] = frozenset(Role)
ADMIN_ONLY: frozenset[Role] = frozenset({Role.ADMIN})


@dataclass(frozen=True)
class ResourcePolicy:
    """Default allowed roles + per-action overrides for a resource."""

    default: frozenset[Role]
    actions: dict[str, frozenset[Role]] = field(default_factory=dict)

    def allowed_roles(self, action: str | None = None) -> frozenset[Role]:
        if action is None:
            return self.default
        return self.actions.get(action, self.default)


POLICIES: dict[str, ResourcePolicy] = {
    "clients": ResourcePolicy(default=ALL_ROLES),
    "projects": ResourcePolicy(default=ALL_ROLES),
    "time_entries": ResourcePolicy(default=ALL_ROLES),
    "invoices": ResourcePolicy(default=ALL_ROLES),
    "quotes": ResourcePolicy(default=ALL_ROLES),
    "documents": ResourcePolicy(default=ALL_ROLES),
    "dashboard": ResourcePolicy(default=ALL_ROLES),
    "payments": ResourcePolicy(default=ALL_ROLES),
    "ab_tests": ResourcePolicy(
        default=ADMIN_ONLY,
        actions={"record_result": ALL_ROLES},
    ),
    "users": ResourcePolicy(default=ADMIN_ONLY),
    "payment_keys": ResourcePolicy(default=ADMIN_ONLY),
    "activity_logs": ResourcePolicy(default=ADMIN_ONLY),
}


def get_policy(resource: str) -> ResourcePolicy:
    """Fetch a resource policy or raise KeyError."""
    return POLICIES[resource]


def is_allowed(role: Role, resource: str, action: str | None = None) -> bool:
    """Check whether a role may perform an action on a resource."""
    return role in get_policy(resource).allowed_roles(action)
