"""User service - upsert from identity claims and admin account management."""

import logging
import uuid
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freelancehub.db.dialects import upsert_insert
from freelancehub.db.enums import Role
from freelancehub.db.models import User
from freelancehub.db.types import utcnow

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("email", "first_name", "last_name", "profile_image_url")


class UserServiceError(Exception):
    """Base exception for user service errors."""

    pass


class UserNotFoundError(UserServiceError):
    """User not found."""

    pass


class UserConflictError(UserServiceError):
    """Login collided with another account's unique profile value."""

    pass


def get_user(db: Session, user_id: UUID) -> User | None:
    """Get a user by ID."""
    return db.get(User, user_id)


def get_user_by_subject(db: Session, auth_subject: str) -> User | None:
    """Get a user by identity-provider subject."""
    return db.execute(
        select(User).where(User.auth_subject == auth_subject)
    ).scalar_one_or_none()


def _email_owned_by_other(db: Session, email: str, auth_subject: str) -> bool:
    return db.execute(
        select(User.id)
        .where(User.email == email, User.auth_subject != auth_subject)
        .limit(1)
    ).first() is not None


def upsert_user(db: Session, auth_subject: str, claims: dict) -> User:
    """
    Create the user on first login, otherwise refresh profile claims.

    A single INSERT ... ON CONFLICT (auth_subject) DO UPDATE, so parallel
    first requests for the same subject converge on one row. Role and
    active flag are never taken from claims; new users start as freelancers.
    An email already linked to a different subject is not copied.

    Raises:
        UserConflictError: a unique profile value was claimed concurrently
    """
    profile = {field: claims[field] for field in PROFILE_FIELDS if field in claims}
    email = profile.get("email")
    if email and _email_owned_by_other(db, email, auth_subject):
        logger.warning(
            "Email already linked to another account, not updating",
            extra={"user_subject": auth_subject},
        )
        del profile["email"]

    now = utcnow()
    insert = upsert_insert(db)
    stmt = insert(User).values(
        id=uuid.uuid4(),
        auth_subject=auth_subject,
        role=Role.FREELANCER.value,
        is_active=True,
        created_at=now,
        updated_at=now,
        **profile,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[User.auth_subject],
        set_={**profile, "updated_at": now},
    ).returning(User.id)

    try:
        user_id = db.execute(stmt).scalar_one()
    except IntegrityError:
        db.rollback()
        raise UserConflictError(f"Profile for {auth_subject} conflicts with another user")

    return db.get(User, user_id, populate_existing=True)


def list_users(db: Session) -> list[User]:
    """List all users, newest first."""
    return list(db.execute(select(User).order_by(User.created_at.desc())).scalars().all())


def update_user_role(db: Session, user_id: UUID, role: Role) -> User:
    """Change a user's role (admin-only at the API layer)."""
    user = get_user(db, user_id)
    if not user:
        raise UserNotFoundError(f"User {user_id} not found")
    user.role = role.value
    db.flush()
    return user


def set_user_active(db: Session, user_id: UUID, is_active: bool) -> User:
    """
    Activate or deactivate a user.

    Only the flag changes; clients, projects and invoices owned by the user
    are left untouched.
    """
    user = get_user(db, user_id)
    if not user:
        raise UserNotFoundError(f"User {user_id} not found")
    user.is_active = is_active
    db.flush()
    return user


def deactivate_user(db: Session, user_id: UUID) -> User:
    return set_user_active(db, user_id, False)


def activate_user(db: Session, user_id: UUID) -> User:
    return set_user_active(db, user_id, True)
