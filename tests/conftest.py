"""
Pytest configuration and fixtures.
"""

import os

# Must be set before the application settings are first imported
os.environ["DB_TYPE"] = "sqlite"
os.environ["SQLITE_DB"] = ":memory:"
os.environ["CACHE_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-at-least-32-bytes!"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from typing import Generator, Dict

from accounts.core.database import Base, get_db
from accounts.models.user import User
from accounts.services import store
from accounts import app

# One in-memory database shared by every connection of the test engine
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=test_engine,
    expire_on_commit=False
)

ADMIN_DATA = {"name": "Admin User", "email": "admin@example.com", "password": "adminpass123"}
USER_DATA = {"name": "Test User", "email": "test@example.com", "password": "testpass123"}


@pytest.fixture(scope="function", autouse=True)
def db_engine():
    """
    Create every table before each test and drop them afterwards so that no
    data leaks between tests.
    """
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine) -> Generator:
    """
    Create test client with database session override.
    Each request gets its own session, as it would in production.
    """
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client) -> Dict:
    """Register a regular user through the API and return the response body."""
    response = client.post("/users", json=USER_DATA)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def admin_user(db_session) -> User:
    """Create an admin directly in the store."""
    user = store.create(db_session, ADMIN_DATA["name"], ADMIN_DATA["email"], ADMIN_DATA["password"])
    user.is_admin = True
    return store.save(db_session, user)


@pytest.fixture
def admin_headers(client, admin_user) -> Dict[str, str]:
    response = client.post(
        "/users/login",
        json={"email": ADMIN_DATA["email"], "password": ADMIN_DATA["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def user_headers(registered_user) -> Dict[str, str]:
    return {"Authorization": f"Bearer {registered_user['token']}"}
