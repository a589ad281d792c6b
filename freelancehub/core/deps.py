"""FastAPI dependencies for authentication, authorization, and database access."""

import logging
from typing import Callable, Generator

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from freelancehub.core.config import settings
from freelancehub.core.policies import get_policy
from freelancehub.core.security import decode_session_token, extract_profile_claims
from freelancehub.db.enums import Role
from freelancehub.db.models import User
from freelancehub.db.session import SessionLocal
from freelancehub.services import user_service

logger = logging.getLogger(__name__)


# CSRF guard for state-changing requests
CSRF_HEADER = "X-Requested-With"
CSRF_HEADER_VALUE = "XMLHttpRequest"


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _get_token(request: Request) -> str | None:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    scheme, _, credentials = auth_header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Get authenticated user from the session cookie or bearer token.

    Validates:
    - Token exists
    - JWT is valid and not expired
    - User is active (the row is upserted from token claims)

    Raises:
        HTTPException 401: Authentication failed
        HTTPException 409: Profile collides with another account
    """
    token = _get_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_session_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid session")

    try:
        user = user_service.upsert_user(db, payload["sub"], extract_profile_claims(payload))
    except user_service.UserConflictError:
        logger.warning("Session profile conflicts with another account")
        raise HTTPException(status_code=409, detail="Account conflicts with an existing user")
    db.commit()

    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account disabled")

    request.state.user_id = str(user.id)
    return user


def require_permission(resource: str, action: str | None = None) -> Callable[..., User]:
    """
    Dependency factory for policy-based authorization.

    Usage:
        @router.get("/users", dependencies=[Depends(require_permission("users"))])
    """
    allowed_roles = get_policy(resource).allowed_roles(action)

    def dependency(user: User = Depends(get_current_user)) -> User:
        if not Role.has_value(user.role) or Role(user.role) not in allowed_roles:
            logger.info(
                "Permission denied",
                extra={"user_id": str(user.id), "resource": resource, "action": action},
            )
            raise HTTPException(
                status_code=403,
                detail=f"Role '{user.role}' not authorized for this action",
            )
        return user

    return dependency


def require_csrf_header(request: Request) -> None:
    """
    Verify CSRF header on mutations.

    Apply to state-changing endpoints (POST, PUT, DELETE).

    Raises:
        HTTPException 403: Missing or invalid CSRF header
    """
    if request.headers.get(CSRF_HEADER) != CSRF_HEADER_VALUE:
        raise HTTPException(
            status_code=403,
            detail=f"Missing CSRF header. Include '{CSRF_HEADER}: {CSRF_HEADER_VALUE}'",
        )
