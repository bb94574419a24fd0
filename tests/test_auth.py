"""Tests for credentials, tokens and the auth endpoints."""

import base64
import json
from datetime import UTC, datetime, timedelta

from jose import jwt

from sanctum.config import get_settings
from sanctum.models.user import User
from sanctum.services.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:
    """Tests for password hashing helpers."""

    def test_hash_is_salted(self):
        first = get_password_hash("secret1")
        second = get_password_hash("secret1")
        assert first != second
        assert verify_password("secret1", first)
        assert verify_password("secret1", second)

    def test_wrong_password_does_not_verify(self):
        assert verify_password("secret2", get_password_hash("secret1")) is False

    def test_malformed_hash_returns_false(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False
        assert verify_password("secret1", "") is False


class TestTokens:
    """Tests for issuing and verifying session tokens."""

    def test_round_trip(self):
        token = create_access_token("user-123", "alice")
        claims = decode_access_token(token)
        assert claims is not None
        assert claims.user_id == "user-123"
        assert claims.username == "alice"
        assert claims.expires_at - claims.issued_at == timedelta(days=7)

    def test_verification_is_idempotent(self):
        token = create_access_token("user-123", "alice")
        assert decode_access_token(token) == decode_access_token(token)

    def test_tampered_token_is_invalid(self):
        token = create_access_token("user-123", "alice")
        header, _payload, signature = token.split(".")
        forged = base64.urlsafe_b64encode(
            json.dumps({"sub": "someone-else", "exp": 4102444800, "iat": 0}).encode()
        )
        tampered = f"{header}.{forged.decode().rstrip('=')}.{signature}"
        assert decode_access_token(tampered) is None

    def test_wrong_secret_is_invalid(self):
        settings = get_settings()
        token = jwt.encode(
            {
                "sub": "user-123",
                "iat": datetime.now(UTC),
                "exp": datetime.now(UTC) + timedelta(hours=1),
            },
            "some-other-secret",
            algorithm=settings.jwt_algorithm,
        )
        assert decode_access_token(token) is None

    def test_expired_token_is_invalid(self):
        settings = get_settings()
        issued = datetime.now(UTC) - timedelta(days=8)
        token = jwt.encode(
            {
                "sub": "user-123",
                "username": "alice",
                "iat": issued,
                "exp": issued + timedelta(days=7),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        assert decode_access_token(token) is None

    def test_garbage_is_invalid(self):
        assert decode_access_token("not.a.token") is None
        assert decode_access_token("") is None


def test_register_user(client):
    """Registering returns 201 with the user and a token."""
    response = client.post(
        "/api/auth?action=register", json={"username": "alice", "password": "secret1"}
    )
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["user"]["username"] == "alice"
    assert data["token"]
    assert "password_hash" not in data["user"]


def test_register_duplicate_username(client, register_user):
    """A second registration with the same name is rejected."""
    register_user("alice", "secret1")
    response = client.post(
        "/api/auth?action=register", json={"username": "alice", "password": "secret2"}
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Username already exists"}


def test_register_duplicate_is_case_insensitive(client, register_user):
    register_user("alice", "secret1")
    response = client.post(
        "/api/auth?action=register", json={"username": "  ALICE ", "password": "secret2"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Username already exists"


def test_register_short_password(client):
    response = client.post(
        "/api/auth?action=register", json={"username": "alice", "password": "12345"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Password must be at least 6 characters long"


def test_register_short_username(client):
    response = client.post(
        "/api/auth?action=register", json={"username": "al", "password": "secret1"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Username must be at least 3 characters long"


def test_register_missing_fields(client):
    response = client.post("/api/auth?action=register", json={"username": "alice"})
    assert response.status_code == 400
    assert response.json()["message"] == "Username and password are required"


def test_register_then_login_share_user_id(client):
    """Tokens from registration and login resolve to the same user."""
    registered = client.post(
        "/api/auth?action=register", json={"username": "alice", "password": "secret1"}
    ).json()
    response = client.post(
        "/api/auth?action=login", json={"username": "Alice", "password": "secret1"}
    )
    assert response.status_code == 200
    logged_in = response.json()

    register_claims = decode_access_token(registered["token"])
    login_claims = decode_access_token(logged_in["token"])
    assert register_claims.user_id == login_claims.user_id == registered["user"]["id"]


def test_login_failures_are_indistinguishable(client, auth_headers):
    """Unknown user and wrong password produce the same response."""
    wrong_password = client.post(
        "/api/auth?action=login", json={"username": "testuser", "password": "wrongpass"}
    )
    unknown_user = client.post(
        "/api/auth?action=login", json={"username": "nobody", "password": "wrongpass"}
    )
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json()["message"] == "Invalid username or password"


def test_verify_returns_current_user(client, auth_headers):
    response = client.post("/api/auth?action=verify", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["id"] == auth_headers.user_id
    assert data["user"]["username"] == "testuser"


def test_verify_without_token(client):
    response = client.post("/api/auth?action=verify")
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Authorization token required"}


def test_verify_with_invalid_token(client):
    response = client.post(
        "/api/auth?action=verify", headers={"Authorization": "Bearer garbage"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_token_for_deleted_user_is_rejected(client, db, auth_headers):
    db.query(User).filter(User.id == auth_headers.user_id).delete()
    db.commit()

    response = client.post("/api/auth?action=verify", headers=auth_headers)
    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


def test_unknown_action(client):
    response = client.post("/api/auth?action=logout", json={})
    assert response.status_code == 405
    assert response.json()["success"] is False


def test_wrong_method(client):
    response = client.get("/api/auth?action=login")
    assert response.status_code == 405
    assert response.json()["success"] is False


def test_path_style_routes(client):
    response = client.post(
        "/api/auth/register", json={"username": "bob", "password": "secret1"}
    )
    assert response.status_code == 201

    response = client.post("/api/auth/login", json={"username": "bob", "password": "secret1"})
    assert response.status_code == 200
    token = response.json()["token"]

    response = client.post("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "bob"


def test_protected_endpoints_require_auth(client):
    for method, url in [
        ("get", "/api/tracks"),
        ("get", "/api/environments"),
        ("get", "/api/sections?section=ambient"),
    ]:
        response = getattr(client, method)(url)
        assert response.status_code == 401
        assert response.json()["success"] is False


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_cors_preflight(client):
    response = client.options(
        "/api/tracks",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
