"""
Pytest configuration and shared fixtures.
"""
import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("MAIL_API_URL", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from wallet_api.database import Base, get_db
from wallet_api.main import app
from wallet_api.core.config import Settings


# In-memory SQLite database shared by every connection of the test engine
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "secret-password"


@pytest.fixture(scope="function")
def test_db():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(test_db):
    """
    Create a test client with database dependency override.
    """
    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def mock_settings():
    """
    Settings with test values.
    """
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key-for-testing-only",
        ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=30,
        PASSWORD_RESET_EXPIRE_MINUTES=60,
        PASSWORD_RESET_URL="http://frontend.test/reset-password",
        MAIL_API_URL="http://mail.test/send",
        MAIL_API_KEY="test-mail-key",
        APP_NAME="Wallet API Test",
        DEBUG=True,
    )


def register_user(client, name="Ada Obi", email="ada@example.com", password=TEST_PASSWORD):
    response = client.post(
        "/users/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


def login(client, email="ada@example.com", password=TEST_PASSWORD) -> str:
    response = client.post("/users/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def user(client):
    """
    A registered user.
    """
    return register_user(client)


@pytest.fixture
def auth_headers(client, user):
    """
    Authorization header for the registered user.
    """
    token = login(client)
    return {"Authorization": f"Bearer {token}"}
