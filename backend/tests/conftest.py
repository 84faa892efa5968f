"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["ENVIRONMENT"] = "test"

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from menu_api.main import app
from menu_api.models import Base, Category, MenuItem, User
from shared.config.constants import MenuGroup, Roles
from shared.infrastructure import redis_pool
from shared.infrastructure.db import create_db_engine, get_db
from shared.security import password as password_module
from shared.security.password import hash_password


# SQLite in-memory database with foreign keys enforced
engine = create_db_engine("sqlite://")
TestingSessionLocal = sessionmaker(
    bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
)

ADMIN_PASSWORD = "testpass123"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Cheap bcrypt cost so the suite does not spend seconds hashing."""
    monkeypatch.setattr(password_module, "BCRYPT_ROUNDS", 4)


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """In-process Redis for the token blacklist."""
    client = fakeredis.FakeRedis(decode_responses=True)
    monkeypatch.setattr(redis_pool, "_redis_client", client)
    return client


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_admin_user(db_session):
    """Create an admin user for testing authenticated endpoints."""
    user = User(
        name="Test Admin",
        username="admin",
        email="admin@test.com",
        password=hash_password(ADMIN_PASSWORD),
        role=Roles.ADMIN,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(client, seed_admin_user):
    """Get authentication headers for API calls."""
    response = client.post(
        "/api/admin/login",
        json={"username": "admin", "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_category(db_session):
    """FOOD category STARTERS at position 1."""
    category = Category(name="STARTERS", group=MenuGroup.FOOD, sort_order=1)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_drinks_category(db_session):
    """DRINKS category COFFEE at position 1."""
    category = Category(name="COFFEE", group=MenuGroup.DRINKS, sort_order=1)
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_menu_item(db_session, seed_category):
    """Available item in STARTERS."""
    item = MenuItem(
        name="Spring Rolls",
        description="Crispy vegetable rolls",
        category_id=seed_category.id,
        price_room=3500,
        price_restaurant=3000,
        available=True,
        tags=["Vegetarian"],
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item


@pytest.fixture
def seed_hidden_item(db_session, seed_category):
    """Unavailable item in STARTERS."""
    item = MenuItem(
        name="Suya Platter",
        category_id=seed_category.id,
        price_room=8000,
        price_restaurant=7500,
        available=False,
        tags=[],
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item
