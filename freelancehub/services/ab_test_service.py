"""A/B test service - test definitions and per-entity results.

No statistics are computed server-side; results are returned raw.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.db.models import AbTest, AbTestResult
from freelancehub.schemas.ab_test import AbTestCreate, AbTestResultCreate, AbTestUpdate


class AbTestServiceError(Exception):
    """Base exception for A/B test service errors."""

    pass


class AbTestNotFoundError(AbTestServiceError):
    """A/B test not found."""

    pass


def list_ab_tests(db: Session) -> list[AbTest]:
    return db.query(AbTest).order_by(AbTest.created_at.desc()).all()


def require_ab_test(db: Session, test_id: UUID) -> AbTest:
    test = db.get(AbTest, test_id)
    if not test:
        raise AbTestNotFoundError(f"A/B test {test_id} not found")
    return test


def create_ab_test(db: Session, data: AbTestCreate) -> AbTest:
    values = data.model_dump()
    values["status"] = data.status.value
    test = AbTest(**values)
    db.add(test)
    db.flush()
    return test


def update_ab_test(db: Session, test_id: UUID, data: AbTestUpdate) -> AbTest:
    test = require_ab_test(db, test_id)
    updates = data.model_dump(exclude_unset=True)
    for field in ("name", "variant_a", "variant_b", "status", "success_metric"):
        if field in updates and updates[field] is None:
            del updates[field]
    if "status" in updates:
        updates["status"] = data.status.value
    for field, value in updates.items():
        setattr(test, field, value)
    db.flush()
    return test


def record_result(db: Session, test_id: UUID, data: AbTestResultCreate) -> AbTestResult:
    require_ab_test(db, test_id)
    result = AbTestResult(
        test_id=test_id,
        entity_id=data.entity_id,
        entity_type=data.entity_type,
        variant=data.variant.value,
        success=data.success,
    )
    db.add(result)
    db.flush()
    return result


def list_results(db: Session, test_id: UUID) -> list[AbTestResult]:
    require_ab_test(db, test_id)
    return (
        db.query(AbTestResult)
        .filter(AbTestResult.test_id == test_id)
        .order_by(AbTestResult.recorded_at.desc())
        .all()
    )
