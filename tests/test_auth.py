"""Tests for session authentication and the CSRF guard."""
from datetime import timedelta

import jwt
import pytest
from httpx import AsyncClient
from sqlalchemy.orm import Session

from freelancehub.core.config import settings
from freelancehub.core.security import create_session_token, decode_session_token
from freelancehub.db.models import User
from freelancehub.services import user_service


@pytest.mark.asyncio
async def test_protected_endpoint_requires_session(client: AsyncClient):
    response = await client.get("/api/auth/user")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(client: AsyncClient):
    response = await client.get(
        "/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_is_rejected(client: AsyncClient):
    token = create_session_token("sub-expired", expires_in=timedelta(seconds=-1))
    response = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_first_request_creates_freelancer(client: AsyncClient, db: Session):
    token = create_session_token(
        "idp|new-user",
        email="new@example.com",
        first_name="Nia",
        last_name="Okafor",
        profile_image_url="https://img.example.com/n.png",
    )
    response = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "new@example.com"
    assert data["role"] == "freelancer"
    assert data["is_active"] is True

    assert db.query(User).filter(User.auth_subject == "idp|new-user").count() == 1


@pytest.mark.asyncio
async def test_login_refreshes_profile_but_not_role(
    client: AsyncClient, db: Session, admin_user: User
):
    token = create_session_token(admin_user.auth_subject, email=admin_user.email, first_name="Renamed")
    response = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.json()["first_name"] == "Renamed"
    assert response.json()["role"] == "admin"


@pytest.mark.asyncio
async def test_session_cookie_is_accepted(authed_client: AsyncClient, test_user: User):
    response = await authed_client.get("/api/auth/user")
    assert response.status_code == 200
    assert response.json()["id"] == str(test_user.id)


@pytest.mark.asyncio
async def test_mutation_without_csrf_header_is_forbidden(authed_client: AsyncClient):
    response = await authed_client.post(
        "/api/clients", json={"name": "No CSRF"}, headers={"X-Requested-With": ""}
    )
    assert response.status_code == 403


def test_previous_secret_still_verifies(monkeypatch):
    token = create_session_token("sub-rotated")
    monkeypatch.setattr(settings, "JWT_SECRET_PREVIOUS", settings.JWT_SECRET)
    monkeypatch.setattr(settings, "JWT_SECRET", "a-brand-new-secret-after-rotation-000000")
    assert decode_session_token(token)["sub"] == "sub-rotated"


def test_unknown_secret_fails(monkeypatch):
    token = jwt.encode(
        {"sub": "x", "exp": 9999999999}, "some-other-secret-of-sufficient-length", algorithm="HS256"
    )
    with pytest.raises(jwt.InvalidTokenError):
        decode_session_token(token)


def test_upsert_converges_when_lookup_is_stale(db: Session, monkeypatch):
    first = user_service.upsert_user(db, "sub-new", {"email": "new@example.com"})
    db.commit()

    # A parallel first request that never saw the committed row
    monkeypatch.setattr(user_service, "get_user_by_subject", lambda *_: None)
    second = user_service.upsert_user(db, "sub-new", {"first_name": "Later"})
    db.commit()

    assert second.id == first.id
    assert second.first_name == "Later"
    assert second.email == "new@example.com"
    assert second.role == "freelancer"
    assert db.query(User).filter(User.auth_subject == "sub-new").count() == 1


@pytest.mark.asyncio
async def test_repeated_first_requests_share_one_user(client: AsyncClient, db: Session):
    token = create_session_token("idp|repeat", email="repeat@example.com")
    headers = {"Authorization": f"Bearer {token}"}

    ids = set()
    for _ in range(3):
        response = await client.get("/api/auth/user", headers=headers)
        assert response.status_code == 200
        ids.add(response.json()["id"])

    assert len(ids) == 1
    assert db.query(User).filter(User.auth_subject == "idp|repeat").count() == 1


@pytest.mark.asyncio
async def test_email_of_another_account_is_not_copied(
    client: AsyncClient, db: Session, test_user: User
):
    token = create_session_token("idp|second-login", email=test_user.email, first_name="Second")
    response = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] is None
    assert response.json()["first_name"] == "Second"
    assert db.query(User).filter(User.email == test_user.email).count() == 1


@pytest.mark.asyncio
async def test_concurrent_email_claim_is_conflict(
    client: AsyncClient, db: Session, other_user: User, monkeypatch
):
    # The email is claimed between the ownership check and the insert
    monkeypatch.setattr(user_service, "_email_owned_by_other", lambda *_: False)

    token = create_session_token("idp|late", email=other_user.email)
    response = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 409
    assert db.query(User).filter(User.auth_subject == "idp|late").count() == 0
