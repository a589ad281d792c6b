"""Tests for activity logging helpers."""
from types import SimpleNamespace

from sqlalchemy.orm import Session

from freelancehub.core.config import settings
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import ActivityLog
from freelancehub.services import activity_service


def _request(headers: dict, host: str = "10.0.0.5"):
    return SimpleNamespace(headers=headers, client=SimpleNamespace(host=host))


def test_client_ip_ignores_forwarded_header_by_default(monkeypatch):
    monkeypatch.setattr(settings, "TRUST_PROXY_HEADERS", False)
    request = _request({"x-forwarded-for": "203.0.113.9"})
    assert activity_service.get_client_ip(request) == "10.0.0.5"


def test_client_ip_uses_first_forwarded_address_behind_proxy(monkeypatch):
    monkeypatch.setattr(settings, "TRUST_PROXY_HEADERS", True)
    request = _request({"x-forwarded-for": "203.0.113.9, 10.0.0.1"})
    assert activity_service.get_client_ip(request) == "203.0.113.9"


def test_user_agent_is_truncated():
    request = _request({"user-agent": "x" * 900})
    assert len(activity_service.get_user_agent(request)) == 500
    assert activity_service.get_user_agent(None) is None


def test_log_activity_persists_entry(db: Session, test_user):
    entry = activity_service.log_activity(
        db, None, test_user.id, ActivityAction.START_TIMER, EntityType.TIME_ENTRY, "abc",
        {"project_id": "p1"},
    )
    assert entry is not None
    stored = db.query(ActivityLog).one()
    assert stored.action == "start_timer"
    assert stored.entity_type == "time_entry"
    assert stored.details == {"project_id": "p1"}


def test_log_activity_failure_is_swallowed(db: Session, test_user, monkeypatch, caplog):
    def broken_commit():
        raise RuntimeError("database went away")

    monkeypatch.setattr(db, "commit", broken_commit)
    result = activity_service.log_activity(
        db, None, test_user.id, ActivityAction.DELETE_CLIENT, EntityType.CLIENT, "c1"
    )
    monkeypatch.undo()

    assert result is None
    assert "Failed to write activity log" in caplog.text
    assert db.query(ActivityLog).count() == 0


def test_list_limit_is_clamped(db: Session, test_user):
    for _ in range(3):
        db.add(ActivityLog(user_id=test_user.id, action="create_client"))
    db.commit()

    assert len(activity_service.list_activity_logs(db, limit=0)) == 1
    assert len(activity_service.list_activity_logs(db, limit=10_000)) == 3
    assert len(activity_service.list_activity_logs(db, user_id=test_user.id)) == 3
