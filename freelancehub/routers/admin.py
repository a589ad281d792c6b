"""Admin router - user roles, payment keys and the activity log.

All endpoints are admin-only via the policy table.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import User
from freelancehub.schemas.activity import ActivityLogRead
from freelancehub.schemas.payment_key import (
    PaymentKeyCreate,
    PaymentKeyRead,
    PaymentKeyUpdate,
)
from freelancehub.schemas.user import UserRead, UserRoleUpdate
from freelancehub.services import activity_service, payment_key_service, user_service

router = APIRouter()


# =============================================================================
# Users
# =============================================================================

@router.get("/users", response_model=list[UserRead])
def list_users(
    _: User = Depends(require_permission("users")),
    db: Session = Depends(get_db),
):
    return user_service.list_users(db)


@router.put(
    "/users/{user_id}/role",
    response_model=UserRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_user_role(
    user_id: UUID,
    data: UserRoleUpdate,
    request: Request,
    admin: User = Depends(require_permission("users")),
    db: Session = Depends(get_db),
):
    try:
        user = user_service.update_user_role(db, user_id, data.role)
    except user_service.UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    db.commit()
    db.refresh(user)
    result = UserRead.model_validate(user)

    activity_service.log_activity(
        db, request, admin.id, ActivityAction.UPDATE_USER_ROLE,
        EntityType.USER, user_id, {"role": data.role.value},
    )
    return result


def _set_active(
    db: Session,
    request: Request,
    admin: User,
    user_id: UUID,
    is_active: bool,
) -> UserRead:
    try:
        user = user_service.set_user_active(db, user_id, is_active)
    except user_service.UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    db.commit()
    db.refresh(user)
    result = UserRead.model_validate(user)

    action = ActivityAction.ACTIVATE_USER if is_active else ActivityAction.DEACTIVATE_USER
    activity_service.log_activity(db, request, admin.id, action, EntityType.USER, user_id)
    return result


@router.put(
    "/users/{user_id}/deactivate",
    response_model=UserRead,
    dependencies=[Depends(require_csrf_header)],
)
def deactivate_user(
    user_id: UUID,
    request: Request,
    admin: User = Depends(require_permission("users")),
    db: Session = Depends(get_db),
):
    """Disable login; the user's records are kept."""
    return _set_active(db, request, admin, user_id, False)


@router.put(
    "/users/{user_id}/activate",
    response_model=UserRead,
    dependencies=[Depends(require_csrf_header)],
)
def activate_user(
    user_id: UUID,
    request: Request,
    admin: User = Depends(require_permission("users")),
    db: Session = Depends(get_db),
):
    return _set_active(db, request, admin, user_id, True)


# =============================================================================
# Payment keys
# =============================================================================

@router.get("/payment-keys", response_model=list[PaymentKeyRead])
def list_payment_keys(
    _: User = Depends(require_permission("payment_keys")),
    db: Session = Depends(get_db),
):
    """List keys; stored values are always redacted."""
    return [PaymentKeyRead.redacted(k) for k in payment_key_service.list_payment_keys(db)]


@router.post(
    "/payment-keys",
    response_model=PaymentKeyRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_payment_key(
    data: PaymentKeyCreate,
    request: Request,
    admin: User = Depends(require_permission("payment_keys")),
    db: Session = Depends(get_db),
):
    key = payment_key_service.create_payment_key(db, data)
    db.commit()
    db.refresh(key)
    result = PaymentKeyRead.redacted(key)

    activity_service.log_activity(
        db, request, admin.id, ActivityAction.CREATE_PAYMENT_KEY,
        EntityType.PAYMENT_KEY, result.id,
        {"provider": result.provider, "key_name": result.key_name},
    )
    return result


@router.put(
    "/payment-keys/{key_id}",
    response_model=PaymentKeyRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_payment_key(
    key_id: UUID,
    data: PaymentKeyUpdate,
    request: Request,
    admin: User = Depends(require_permission("payment_keys")),
    db: Session = Depends(get_db),
):
    try:
        key = payment_key_service.update_payment_key(db, key_id, data)
    except payment_key_service.PaymentKeyNotFoundError:
        raise HTTPException(status_code=404, detail="Payment key not found")
    db.commit()
    db.refresh(key)
    result = PaymentKeyRead.redacted(key)

    activity_service.log_activity(
        db, request, admin.id, ActivityAction.UPDATE_PAYMENT_KEY,
        EntityType.PAYMENT_KEY, key_id,
        {"rotated": data.key_value is not None, "is_active": result.is_active},
    )
    return result


@router.delete(
    "/payment-keys/{key_id}", status_code=204, dependencies=[Depends(require_csrf_header)]
)
def delete_payment_key(
    key_id: UUID,
    request: Request,
    admin: User = Depends(require_permission("payment_keys")),
    db: Session = Depends(get_db),
):
    try:
        payment_key_service.delete_payment_key(db, key_id)
    except payment_key_service.PaymentKeyNotFoundError:
        raise HTTPException(status_code=404, detail="Payment key not found")
    db.commit()

    activity_service.log_activity(
        db, request, admin.id, ActivityAction.DELETE_PAYMENT_KEY,
        EntityType.PAYMENT_KEY, key_id,
    )
    return Response(status_code=204)


# =============================================================================
# Activity log
# =============================================================================

@router.get("/activity-logs", response_model=list[ActivityLogRead])
def list_activity_logs(
    user_id: UUID | None = Query(None, alias="userId"),
    limit: int | None = Query(None),
    _: User = Depends(require_permission("activity_logs")),
    db: Session = Depends(get_db),
):
    """Newest first; limit defaults to ACTIVITY_LOG_DEFAULT_LIMIT and is capped at 500."""
    return activity_service.list_activity_logs(db, user_id=user_id, limit=limit)
