"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Signing up and logging in test users
"""

import os

# Settings are read at import time, so the test environment goes first
os.environ["JWT_SECRET"] = "test-signing-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JSON_LOGS"] = "false"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.models import User, Job  # noqa: F401 - registers the tables
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
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
def token_issuer():
    """The issuer the application signs tokens with"""
    return app.state.token_issuer


@pytest.fixture
def register_user(client):
    """
    Factory that signs up and logs in a user.

    Returns (user_json, auth_headers).
    """
    def _register(email="a@x.com", password="pw123456", name=None):
        payload = {"email": email, "password": password}
        if name is not None:
            payload["name"] = name
        signup = client.post("/users", json=payload)
        assert signup.status_code == 201, signup.text

        login = client.post("/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text

        headers = {"Authorization": f"Bearer {login.json()['token']}"}
        return signup.json(), headers

    return _register


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "Backend Engineer",
        "company": "Acme",
        "status": "APPLIED",
        "description": "Python services on FastAPI and PostgreSQL",
        "notes": "Referred by a former colleague",
        "deadline": "2025-03-31",
    }
