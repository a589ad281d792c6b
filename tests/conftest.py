"""
Test configuration and fixtures.

Provides:
- In-memory SQLite schema, created and dropped per test
- Users and JWT session tokens for authenticated tests
- HTTPX AsyncClient with the CSRF header
"""
import os
import uuid
from dataclasses import dataclass
from typing import AsyncGenerator, Generator

# Environment must be set before the application modules read settings
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-jwt-secret-with-enough-length-0123456789"
os.environ["ENCRYPTION_SECRET"] = "test-encryption-secret"
os.environ["TESTING"] = "1"
os.environ.setdefault("CASHFREE_APP_ID", "")
os.environ.setdefault("CASHFREE_SECRET_KEY", "")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from freelancehub.core.config import settings
from freelancehub.core.deps import get_db
from freelancehub.core.security import create_session_token
from freelancehub.db.base import Base
from freelancehub.db.enums import Role
from freelancehub.db.models import Client, Project, User
from freelancehub.db.session import SessionLocal, engine
from freelancehub.main import app


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema and session per test."""
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


def make_user(db: Session, role: Role = Role.FREELANCER, **fields) -> User:
    suffix = uuid.uuid4().hex[:8]
    user = User(
        auth_subject=fields.pop("auth_subject", f"sub-{suffix}"),
        email=fields.pop("email", f"user-{suffix}@test.com"),
        first_name=fields.pop("first_name", "Test"),
        last_name=fields.pop("last_name", "User"),
        role=role.value,
        **fields,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture(scope="function")
def test_user(db: Session) -> User:
    return make_user(db)


@pytest.fixture(scope="function")
def other_user(db: Session) -> User:
    return make_user(db)


@pytest.fixture(scope="function")
def admin_user(db: Session) -> User:
    return make_user(db, Role.ADMIN, first_name="Admin")


@pytest.fixture(scope="function")
def test_client_record(db: Session, test_user: User) -> Client:
    client = Client(user_id=test_user.id, name="Acme Corp", email="billing@acme.test")
    db.add(client)
    db.commit()
    return client


@pytest.fixture(scope="function")
def test_project(db: Session, test_user: User, test_client_record: Client) -> Project:
    project = Project(
        user_id=test_user.id, client_id=test_client_record.id, name="Website"
    )
    db.add(project)
    db.commit()
    return project


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str
    cookie_name: str = settings.SESSION_COOKIE_NAME


def mint_token(user: User) -> str:
    return create_session_token(
        user.auth_subject,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )


@pytest.fixture(scope="function")
def test_auth(test_user: User) -> TestAuth:
    return TestAuth(user=test_user, token=mint_token(test_user))


@pytest.fixture(scope="function")
def admin_auth(admin_user: User) -> TestAuth:
    return TestAuth(user=admin_user, token=mint_token(admin_user))


# =============================================================================
# Client Fixtures
# =============================================================================

def _make_client(db: Session, auth: TestAuth | None = None) -> AsyncClient:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    cookies = {auth.cookie_name: auth.token} if auth else None
    return AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies=cookies,
        headers={"X-Requested-With": "XMLHttpRequest"},  # CSRF header
    )


@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated AsyncClient for public endpoints."""
    async with _make_client(db) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(db: Session, test_auth: TestAuth) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient for a freelancer, with session cookie and CSRF header."""
    async with _make_client(db, test_auth) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def admin_client(db: Session, admin_auth: TestAuth) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient for an admin, with session cookie and CSRF header."""
    async with _make_client(db, admin_auth) as c:
        yield c
    app.dependency_overrides.clear()
