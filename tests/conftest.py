"""Pytest fixtures."""

import os

# Settings are read at import time; keep the app off PostgreSQL during tests.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_app.db")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from hazardmap.db.base import Base
from hazardmap.db.session import build_engine, get_db
from hazardmap.main import app
from hazardmap.models import Hazard, User  # noqa: F401 - register for create_all

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session")
def setup_db():
    """Create tables once for test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(setup_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(setup_db):
    """Test client with overridden DB."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register a user with a unique name; returns the response body."""

    def _make(prefix: str = "user") -> dict:
        uid = uuid.uuid4().hex[:8]
        r = client.post("/api/users", json={"username": f"{prefix}_{uid}", "email": f"{prefix}_{uid}@test.com"})
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_hazard(client):
    def _make(user_id: int | None = None, lat: float = 25.2, lng: float = 55.3, description: str = "spill") -> dict:
        body = {"lat": lat, "lng": lng, "description": description}
        if user_id is not None:
            body["userId"] = user_id
        r = client.post("/api/hazards", json=body)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
