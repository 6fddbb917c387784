# =============================================================================
# tests/test_login.py - Login Flow Tests
# =============================================================================

import pytest

from core.models import UserProfile
from lib.identity import IdentityErrorCode


@pytest.fixture
def credentials(identity, store):
    """A user with a stored profile."""
    uid = identity.add_user("sam@example.com", "secret123", "Sam")
    store.profiles[uid] = UserProfile(uid=uid, full_name="Sam", email="sam@example.com")
    return {"uid": uid, "email": "sam@example.com", "password": "secret123"}


class TestLoginSuccess:
    """Happy-path login."""

    def test_returns_tokens_and_profile(self, client, credentials):
        response = client.post(
            "/api/login",
            json={"email": credentials["email"], "password": credentials["password"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful."
        assert body["auth"]["uid"] == credentials["uid"]
        assert body["auth"]["email"] == "sam@example.com"
        assert body["auth"]["idToken"]
        assert body["auth"]["refreshToken"] == f"refresh-{credentials['uid']}"
        assert body["auth"]["expiresIn"] == 3600
        assert body["profile"]["fullName"] == "Sam"
        assert body["profile"]["role"] == "user"
        assert body["profile"]["status"] == "active"

    def test_id_token_works_as_bearer(self, client, credentials):
        login = client.post(
            "/api/login",
            json={"email": credentials["email"], "password": credentials["password"]},
        ).json()

        response = client.get(
            "/api/universities/click",
            headers={"Authorization": f"Bearer {login['auth']['idToken']}"},
        )

        assert response.status_code == 200

    def test_email_trimmed(self, client, credentials):
        response = client.post(
            "/api/login",
            json={"email": "  sam@example.com ", "password": credentials["password"]},
        )

        assert response.status_code == 200

    def test_missing_profile_is_null(self, client, identity):
        identity.add_user("nobody@example.com", "secret123")

        response = client.post("/api/login", json={"email": "nobody@example.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["profile"] is None

    def test_profile_lookup_failure_is_not_fatal(self, client, store, credentials):
        store.fail_on.add("get_profile")

        response = client.post(
            "/api/login",
            json={"email": credentials["email"], "password": credentials["password"]},
        )

        assert response.status_code == 200
        assert response.json()["profile"] is None


class TestLoginFailures:
    """Identity provider failures map to HTTP statuses."""

    def test_missing_fields(self, client, identity):
        response = client.post("/api/login", json={"email": "  "})

        assert response.status_code == 400
        assert response.json()["error"] == "email and password are required."
        assert identity.calls == []

    def test_unknown_email(self, client, credentials):
        response = client.post("/api/login", json={"email": "who@example.com", "password": "secret123"})

        assert response.status_code == 404
        assert response.json()["error"] == "Email not found."

    def test_wrong_password(self, client, store, credentials):
        response = client.post("/api/login", json={"email": credentials["email"], "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password."
        assert "www-authenticate" not in response.headers
        assert store.calls == []

    def test_disabled_account(self, client, identity):
        identity.add_user("off@example.com", "secret123", disabled=True)

        response = client.post("/api/login", json={"email": "off@example.com", "password": "secret123"})

        assert response.status_code == 403
        assert response.json()["error"] == "User account disabled."

    def test_invalid_password_code(self, client, identity, credentials):
        identity.fail_with = IdentityErrorCode.INVALID_PASSWORD

        response = client.post(
            "/api/login",
            json={"email": credentials["email"], "password": credentials["password"]},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid password."

    def test_unexpected_provider_failure(self, client, identity, credentials):
        identity.fail_with = IdentityErrorCode.UNKNOWN

        response = client.post(
            "/api/login",
            json={"email": credentials["email"], "password": credentials["password"]},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error."
