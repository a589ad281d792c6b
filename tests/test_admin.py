"""Tests for the admin console: users, payment keys and activity logs."""
import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from freelancehub.core.encryption import decrypt
from freelancehub.db.enums import Role
from freelancehub.db.models import ActivityLog, Client, PaymentApiKey, Project, User
from freelancehub.schemas.payment_key import REDACTED
from freelancehub.services import payment_key_service, user_service


# =============================================================================
# Access control
# =============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path",
    ["/api/admin/users", "/api/admin/payment-keys", "/api/admin/activity-logs", "/api/ab-tests"],
)
async def test_admin_endpoints_forbid_freelancers(authed_client: AsyncClient, path):
    response = await authed_client.get(path)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_endpoints_require_session(client: AsyncClient):
    response = await client.get("/api/admin/users")
    assert response.status_code == 401


# =============================================================================
# Users
# =============================================================================

@pytest.mark.asyncio
async def test_admin_lists_users(admin_client: AsyncClient, test_user: User):
    response = await admin_client.get("/api/admin/users")
    assert response.status_code == 200
    assert str(test_user.id) in {u["id"] for u in response.json()}


@pytest.mark.asyncio
async def test_admin_changes_role(admin_client: AsyncClient, db: Session, test_user: User):
    response = await admin_client.put(
        f"/api/admin/users/{test_user.id}/role", json={"role": "client"}
    )
    assert response.status_code == 200
    assert response.json()["role"] == "client"

    db.expire_all()
    assert db.get(User, test_user.id).role == "client"


def test_update_user_role_takes_role_enum(db: Session, test_user: User):
    user = user_service.update_user_role(db, test_user.id, Role.ADMIN)
    assert user.role == "admin"


@pytest.mark.asyncio
async def test_unknown_role_is_rejected(admin_client: AsyncClient, test_user: User):
    response = await admin_client.put(
        f"/api/admin/users/{test_user.id}/role", json={"role": "superuser"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_deactivate_keeps_records_and_blocks_login(
    admin_client: AsyncClient,
    authed_client: AsyncClient,
    db: Session,
    test_user: User,
    test_project: Project,
):
    response = await admin_client.put(f"/api/admin/users/{test_user.id}/deactivate")
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    db.expire_all()
    assert db.query(Client).filter(Client.user_id == test_user.id).count() == 1
    assert db.query(Project).filter(Project.user_id == test_user.id).count() == 1

    blocked = await authed_client.get("/api/clients")
    assert blocked.status_code == 401

    reactivated = await admin_client.put(f"/api/admin/users/{test_user.id}/activate")
    assert reactivated.json()["is_active"] is True
    assert (await authed_client.get("/api/clients")).status_code == 200


@pytest.mark.asyncio
async def test_role_change_on_missing_user_is_404(admin_client: AsyncClient):
    response = await admin_client.put(
        "/api/admin/users/00000000-0000-0000-0000-000000000000/role", json={"role": "admin"}
    )
    assert response.status_code == 404


# =============================================================================
# Payment keys
# =============================================================================

@pytest.mark.asyncio
async def test_payment_key_is_encrypted_and_redacted(admin_client: AsyncClient, db: Session):
    response = await admin_client.post(
        "/api/admin/payment-keys",
        json={"provider": "cashfree", "key_name": "secret_key", "key_value": "cfsk_live_123"},
    )
    assert response.status_code == 201
    assert response.json()["encrypted_key"] == REDACTED
    assert "cfsk_live_123" not in response.text

    stored = db.query(PaymentApiKey).one()
    assert stored.encrypted_key != "cfsk_live_123"
    assert decrypt(stored.encrypted_key) == "cfsk_live_123"

    listed = await admin_client.get("/api/admin/payment-keys")
    assert [k["encrypted_key"] for k in listed.json()] == [REDACTED]
    assert "cfsk_live_123" not in listed.text


@pytest.mark.asyncio
async def test_payment_key_toggle_rotate_delete(admin_client: AsyncClient, db: Session):
    created = await admin_client.post(
        "/api/admin/payment-keys",
        json={"provider": "cashfree", "key_name": "app_id", "key_value": "old"},
    )
    key_id = created.json()["id"]

    toggled = await admin_client.put(
        f"/api/admin/payment-keys/{key_id}", json={"is_active": False}
    )
    assert toggled.json()["is_active"] is False
    assert payment_key_service.get_decrypted_key(db, "cashfree", "app_id") is None

    rotated = await admin_client.put(
        f"/api/admin/payment-keys/{key_id}", json={"key_value": "new", "is_active": True}
    )
    assert rotated.json()["encrypted_key"] == REDACTED
    db.expire_all()
    assert payment_key_service.get_decrypted_key(db, "cashfree", "app_id") == "new"

    deleted = await admin_client.delete(f"/api/admin/payment-keys/{key_id}")
    assert deleted.status_code == 204
    assert (await admin_client.get("/api/admin/payment-keys")).json() == []


# =============================================================================
# Activity log
# =============================================================================

@pytest.mark.asyncio
async def test_mutations_are_logged(
    admin_client: AsyncClient, authed_client: AsyncClient, db: Session, test_user: User
):
    created = await authed_client.post(
        "/api/clients", json={"name": "Logged Client"}, headers={"User-Agent": "pytest-agent"}
    )
    client_id = created.json()["id"]

    logs = await admin_client.get("/api/admin/activity-logs", params={"userId": str(test_user.id)})
    assert logs.status_code == 200
    entries = logs.json()
    assert entries[0]["action"] == "create_client"
    assert entries[0]["entity_type"] == "client"
    assert entries[0]["entity_id"] == client_id
    assert entries[0]["details"] == {"name": "Logged Client"}
    assert entries[0]["user_agent"] == "pytest-agent"


@pytest.mark.asyncio
async def test_activity_log_limit(admin_client: AsyncClient, db: Session, admin_user: User):
    for i in range(5):
        db.add(ActivityLog(user_id=admin_user.id, action="create_client", details={"i": i}))
    db.commit()

    response = await admin_client.get("/api/admin/activity-logs", params={"limit": 2})
    assert len(response.json()) == 2
