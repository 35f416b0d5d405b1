"""
Test configuration and fixtures.
Every test gets a fresh in-memory SQLite database; the API client routes the
app's get_db dependency to it.
"""
import os

# app startup runs init_db() against the configured engine; keep it off disk
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from template_builder.db import Base, get_db
from template_builder.services.template_store import InMemoryTemplateStore, SqlTemplateStore

# Test database URL (in-memory SQLite)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

# Create test engine
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    import template_builder.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database session override."""
    from fastapi.testclient import TestClient
    from template_builder.main import app
    from template_builder.rate_limit import limiter

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    limiter.reset()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(params=["memory", "sql"])
def store(request, db_session):
    """Both store backends, so behaviour is checked against each."""
    if request.param == "memory":
        return InMemoryTemplateStore()
    return SqlTemplateStore(db_session)


@pytest.fixture
def template(client):
    """A template created through the API."""
    response = client.post(
        "/api/templates",
        json={"name": "Acme Theme", "author": "Acme", "tags": ["business", "one-page"]},
    )
    return response.json()


@pytest.fixture
def page(client, template):
    """Home page of the `template` fixture, with no components."""
    response = client.post(
        f"/api/templates/{template['id']}/pages",
        json={"name": "Home", "is_home_page": True},
    )
    return response.json()
