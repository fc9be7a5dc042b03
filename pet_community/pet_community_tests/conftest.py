"""
Pytest configuration for the auth service tests.

Points the service at a throwaway sqlite database before the application
modules are imported.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_pet_community.db")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from pet_community.auth_service.db import Base, engine
from pet_community.auth_service.main import app
from pet_community.auth_service import models  # noqa: F401


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session():
    """Create a database session for testing."""
    session = Session(bind=engine)
    yield session
    session.close()


@pytest.fixture
def register_user(client):
    """Register a user through the API and return (response, payload)."""
    def _register(email="ann@example.com", password="secret1", name="Ann", role="PET_OWNER", **extra):
        payload = {"email": email, "password": password, "name": name, "role": role, **extra}
        return client.post("/api/auth/register", json=payload), payload
    return _register


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
