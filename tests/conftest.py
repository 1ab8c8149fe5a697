"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from backoffice.database import Base, get_db
from backoffice.main import app
from backoffice.models.user import User
from backoffice.services.rbac import ADMIN_ROLE, VIEWER_ROLE, assign_role, seed_rbac


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").rsplit("/", 1)[0] + "/backoffice_test"
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, db, email: str, role: str | None = None) -> AuthHeaders:
    """Register a user through the API and optionally grant a seeded role."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": "testpass123", "name": email.split("@")[0]},
    )
    assert response.status_code == 201
    data = response.json()
    user_id = data["user"]["id"]

    if role is not None:
        seed_rbac(db)
        assign_role(db, db.get(User, user_id), role)

    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"}, user_id=user_id, email=email
    )


@pytest.fixture
def auth_headers(client, db):
    """Headers for a user holding the admin role."""
    return register(client, db, "admin@example.com", ADMIN_ROLE)


@pytest.fixture
def viewer_headers(client, db):
    """Headers for a user holding the read-only viewer role."""
    return register(client, db, "viewer@example.com", VIEWER_ROLE)


@pytest.fixture
def outsider_headers(client, db):
    """Headers for a user without any role."""
    return register(client, db, "outsider@example.com")


@pytest.fixture
def make_category(client, auth_headers):
    """Create stat categories through the API."""

    def _make(name: str = "casualties", **overrides) -> dict:
        payload = {"name": name, "label": name.title(), "color": "#dc2626", "status": "active"}
        payload.update(overrides)
        response = client.post("/api/v1/stat-categories", headers=auth_headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_item(client, auth_headers):
    """Create stat category items through the API."""

    def _make(category_id: int, name: str, **overrides) -> dict:
        payload = {
            "stat_category_id": category_id,
            "name": name,
            "label": name.replace("_", " ").title(),
            "status": "active",
        }
        payload.update(overrides)
        response = client.post("/api/v1/stat-category-items", headers=auth_headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
