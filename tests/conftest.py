"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from finance_tracker import models  # noqa: F401
from finance_tracker.api.dependencies import get_auth_service
from finance_tracker.database import Base, engine_options, get_db
from finance_tracker.main import app
from finance_tracker.services.auth import AuthService

TEST_JWT_SECRET = "test-secret-key"
TEST_PASSWORD = "secret123"


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-up user's id, email and token."""

    def __init__(
        self,
        *args,
        user_id: int | None = None,
        email: str | None = None,
        token: str | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.token = token


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/finance_tracker", "/finance_tracker_test"
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))
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


@pytest.fixture
def auth_service():
    """Auth service with a fixed secret and cheap hashing."""
    return AuthService(secret=TEST_JWT_SECRET, bcrypt_rounds=4)


@pytest.fixture(scope="function")
def client(db, auth_service):
    """Create a test client with database and auth overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def graphql(client):
    """Run a GraphQL operation and return the decoded response body."""

    def execute(query: str, variables: dict | None = None, headers: dict | None = None) -> dict:
        response = client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers or {},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return execute


SIGNUP = """
mutation Signup($email: String!, $password: String!, $name: String!) {
  signup(email: $email, password: $password, name: $name) {
    token
    user { id email name }
  }
}
"""


def signup(graphql, email: str, name: str, password: str = TEST_PASSWORD) -> AuthHeaders:
    """Register a user and return bearer headers for them."""
    body = graphql(SIGNUP, {"email": email, "password": password, "name": name})
    assert "errors" not in body, body
    payload = body["data"]["signup"]
    return AuthHeaders(
        {"Authorization": f"Bearer {payload['token']}"},
        user_id=int(payload["user"]["id"]),
        email=payload["user"]["email"],
        token=payload["token"],
    )


@pytest.fixture
def auth_headers(graphql):
    """Create a user and return auth headers with user info."""
    return signup(graphql, "a@x.com", "Ana")


@pytest.fixture
def other_auth_headers(graphql):
    """A second, unrelated user."""
    return signup(graphql, "b@x.com", "Bruno")


def error_code(body: dict) -> str:
    """Machine-readable code of the first GraphQL error."""
    return body["errors"][0]["extensions"]["code"]
