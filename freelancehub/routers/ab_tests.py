"""A/B tests router - admin-managed tests; any user may record results."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import User
from freelancehub.schemas.ab_test import (
    AbTestCreate,
    AbTestRead,
    AbTestResultCreate,
    AbTestResultRead,
    AbTestUpdate,
)
from freelancehub.services import ab_test_service, activity_service

router = APIRouter()


@router.get("", response_model=list[AbTestRead])
def list_ab_tests(
    _: User = Depends(require_permission("ab_tests")),
    db: Session = Depends(get_db),
):
    return ab_test_service.list_ab_tests(db)


@router.post(
    "",
    response_model=AbTestRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_ab_test(
    data: AbTestCreate,
    request: Request,
    user: User = Depends(require_permission("ab_tests")),
    db: Session = Depends(get_db),
):
    test = ab_test_service.create_ab_test(db, data)
    db.commit()
    db.refresh(test)
    result = AbTestRead.model_validate(test)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.CREATE_AB_TEST,
        EntityType.AB_TEST, result.id, {"name": result.name},
    )
    return result


@router.put(
    "/{test_id}",
    response_model=AbTestRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_ab_test(
    test_id: UUID,
    data: AbTestUpdate,
    request: Request,
    user: User = Depends(require_permission("ab_tests")),
    db: Session = Depends(get_db),
):
    try:
        test = ab_test_service.update_ab_test(db, test_id, data)
    except ab_test_service.AbTestNotFoundError:
        raise HTTPException(status_code=404, detail="A/B test not found")
    db.commit()
    db.refresh(test)
    result = AbTestRead.model_validate(test)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.UPDATE_AB_TEST,
        EntityType.AB_TEST, test_id,
        {"fields": sorted(data.model_dump(exclude_unset=True))},
    )
    return result


@router.post(
    "/{test_id}/results",
    response_model=AbTestResultRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def record_result(
    test_id: UUID,
    data: AbTestResultCreate,
    _: User = Depends(require_permission("ab_tests", "record_result")),
    db: Session = Depends(get_db),
):
    try:
        result = ab_test_service.record_result(db, test_id, data)
    except ab_test_service.AbTestNotFoundError:
        raise HTTPException(status_code=404, detail="A/B test not found")
    db.commit()
    db.refresh(result)
    return result


@router.get("/{test_id}/results", response_model=list[AbTestResultRead])
def list_results(
    test_id: UUID,
    _: User = Depends(require_permission("ab_tests")),
    db: Session = Depends(get_db),
):
    try:
        return ab_test_service.list_results(db, test_id)
    except ab_test_service.AbTestNotFoundError:
        raise HTTPException(status_code=404, detail="A/B test not found")
