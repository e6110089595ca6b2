"""
conftest.py — Shared Test Fixtures for the User Registry

Provides an in-memory SQLite database, a FastAPI TestClient wired to
it, and factory fixtures for User rows.

Business Rules:
- All tests run against an isolated in-memory DB
- Each test function gets fresh tables (ids start at 1)
- Rate limiting is off unless a test turns it on

Called by: all test files via pytest autodiscovery
Depends on: app.models (Base), app.database (get_db)
"""

import os
os.environ["TESTING"] = "1"  # Must be set before importing app modules
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base, User

# ── In-memory SQLite engine ──────────────────────────────────────────

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def db_session():
    """Create all tables, yield a session, then tear down."""
    Base.metadata.create_all(bind=engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session: Session) -> TestClient:
    """FastAPI TestClient with get_db overridden to use the test session."""
    from app.database import get_db
    from app.main import app

    def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """A single stored user."""
    user = User(name="Alice Example", email="alice@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """A second stored user."""
    user = User(name="Bob Example", email="bob@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user
