"""API endpoint tests: health, signup, login and identity."""

from finance_tracker.api import mutations
from finance_tracker.models import User

from conftest import SIGNUP, TEST_PASSWORD, error_code, signup

LOGIN = """
mutation Login($email: String!, $password: String!) {
  login(email: $email, password: $password) {
    token
    user { id email name }
  }
}
"""

ME = "query { me { id email name createdAt } }"


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_signup(graphql):
    """Test user registration."""
    body = graphql(SIGNUP, {"email": "new@example.com", "password": "password123", "name": "New"})
    assert "errors" not in body
    payload = body["data"]["signup"]
    assert payload["token"]
    assert payload["user"]["email"] == "new@example.com"
    assert payload["user"]["name"] == "New"


def test_signup_normalizes_email(graphql):
    """Test that emails are stored lowercased."""
    body = graphql(SIGNUP, {"email": "Mixed@Example.COM", "password": "password123", "name": "M"})
    assert body["data"]["signup"]["user"]["email"] == "mixed@example.com"


def test_signup_duplicate_email(graphql, auth_headers):
    """Test registration with duplicate email fails."""
    body = graphql(SIGNUP, {"email": auth_headers.email, "password": "password123", "name": "Dup"})
    assert error_code(body) == "ALREADY_EXISTS"
    assert body["errors"][0]["message"] == "User already exists"


def test_signup_race_on_unique_email(graphql, db, auth_headers, monkeypatch):
    """Test that a signup losing the race to the unique index still reports ALREADY_EXISTS."""
    monkeypatch.setattr(mutations, "get_user_by_email", lambda db, email: None)

    body = graphql(SIGNUP, {"email": auth_headers.email, "password": "password123", "name": "Dup"})
    assert error_code(body) == "ALREADY_EXISTS"
    assert body["errors"][0]["message"] == "User already exists"

    assert db.query(User).filter(User.email == auth_headers.email).count() == 1
    assert graphql("query { me { email } }", headers=auth_headers)["data"]["me"]


def test_signup_validation(graphql):
    """Test that malformed signup input is rejected before anything is stored."""
    body = graphql(SIGNUP, {"email": "not-an-email", "password": "password123", "name": "X"})
    assert error_code(body) == "VALIDATION_ERROR"

    body = graphql(SIGNUP, {"email": "short@example.com", "password": "short", "name": "X"})
    assert error_code(body) == "VALIDATION_ERROR"
    assert body["errors"][0]["message"].startswith("password")

    body = graphql(SIGNUP, {"email": "blank@example.com", "password": "password123", "name": "  "})
    assert error_code(body) == "VALIDATION_ERROR"


def test_signup_then_login_same_user(graphql, auth_service):
    """Test that signup and login tokens resolve to the same user."""
    headers = signup(graphql, "a@x.com", "Ana")

    body = graphql(LOGIN, {"email": "a@x.com", "password": TEST_PASSWORD})
    assert "errors" not in body
    login_token = body["data"]["login"]["token"]

    assert auth_service.verify_token(headers.token).user_id == headers.user_id
    assert auth_service.verify_token(login_token).user_id == headers.user_id


def test_login_failures_are_indistinguishable(graphql, auth_headers):
    """Test that wrong password and unknown email fail identically."""
    wrong_password = graphql(LOGIN, {"email": auth_headers.email, "password": "wrongpass"})
    unknown_email = graphql(LOGIN, {"email": "nobody@x.com", "password": TEST_PASSWORD})
    malformed = graphql(LOGIN, {"email": "", "password": ""})

    for body in (wrong_password, unknown_email, malformed):
        assert body["data"] is None
        assert error_code(body) == "INVALID_CREDENTIALS"
        assert body["errors"][0]["message"] == "Invalid credentials"


def test_me(graphql, auth_headers):
    """Test getting current user info."""
    body = graphql(ME, headers=auth_headers)
    me = body["data"]["me"]
    assert me["email"] == "a@x.com"
    assert me["name"] == "Ana"
    assert int(me["id"]) == auth_headers.user_id
    assert "T" in me["createdAt"]


def test_me_requires_authentication(graphql):
    """Test that queries without a token are rejected."""
    body = graphql(ME)
    assert error_code(body) == "UNAUTHENTICATED"
    assert body["errors"][0]["message"] == "Not authenticated"


def test_invalid_tokens_are_unauthenticated(graphql, auth_headers):
    """Test that bad headers degrade to anonymous instead of erroring differently."""
    for header in (
        "Bearer not-a-token",
        f"Basic {auth_headers.token}",
        f"Bearer {auth_headers.token} extra",
        auth_headers.token,
    ):
        body = graphql(ME, headers={"Authorization": header})
        assert error_code(body) == "UNAUTHENTICATED"


def test_me_nested_collections(graphql, auth_headers):
    """Test that the user exposes their own categories and transactions."""
    graphql('mutation { createCategory(name: "Food") { id } }', headers=auth_headers)

    body = graphql("query { me { categories { name } transactions { id } } }", headers=auth_headers)
    assert body["data"]["me"]["categories"] == [{"name": "Food"}]
    assert body["data"]["me"]["transactions"] == []
