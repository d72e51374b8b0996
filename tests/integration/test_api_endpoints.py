"""
Integration tests for the account API endpoints.
Tests complete request/response flow against an in-memory database.
"""
import pytest
from fastapi import status

from tests.factories import DEFAULT_PASSWORD

API = "/api/v1"


def register(client, email="ada@example.com", password=DEFAULT_PASSWORD):
    return client.post(f"{API}/auth/register", json={
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": email,
        "password": password,
        "phone": "+15550100"
    })


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.integration
class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"] is True


@pytest.mark.integration
@pytest.mark.auth
class TestAuthEndpoints:
    """Integration tests for auth endpoints."""

    def test_register_success(self, client, recording_notifier):
        response = register(client)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["status"] == "success"
        assert data["user"]["email"] == "ada@example.com"
        assert data["user"]["is_verified"] is False
        assert data["user"]["profile"]["first_name"] == "Ada"
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["mail_dispatch"]["sent"] is True
        assert "password_hash" not in data["user"]
        assert "otp" not in data["user"]
        assert len(recording_notifier.outbox) == 1

    def test_register_duplicate(self, client):
        register(client)

        response = register(client, email="ADA@example.com")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {
            "status": "unsuccessful",
            "status_code": 409,
            "message": "User already exists.",
            "error_code": "CONFLICT"
        }

    def test_register_invalid_email(self, client):
        response = register(client, email="not-an-email")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["status"] == "unsuccessful"
        assert data["error_code"] == "BAD_REQUEST"
        assert data["errors"]

    def test_register_empty_password(self, client):
        response = register(client, password="")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Email and password must be provided."

    def test_verify_email_flow(self, client, recording_notifier):
        token = register(client).json()["access_token"]
        code = recording_notifier.last_code_for("ada@example.com")
        wrong = "100000" if code != "100000" else "100001"

        response = client.post(f"{API}/auth/verify-email", json={"otp": wrong}, headers=bearer(token))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error_code"] == "INVALID_CREDENTIAL"

        response = client.post(f"{API}/auth/verify-email", json={"otp": int(code)}, headers=bearer(token))
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "status": "success",
            "status_code": 200,
            "message": "Email successfully verified"
        }

        response = client.post(f"{API}/auth/verify-email", json={"otp": code}, headers=bearer(token))
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "No pending verification code."

    def test_verify_email_requires_token(self, client):
        response = client.post(f"{API}/auth/verify-email", json={"otp": "123456"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error_code"] == "INVALID_TOKEN"

    def test_verify_email_rejects_forged_token(self, client):
        response = client.post(
            f"{API}/auth/verify-email",
            json={"otp": "123456"},
            headers=bearer("eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiIxIn0.forged")
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid or expired token."

    def test_resend_otp(self, client, recording_notifier):
        token = register(client).json()["access_token"]

        response = client.post(f"{API}/auth/resend-otp", headers=bearer(token))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["mail_dispatch"]["sent"] is True
        assert len(recording_notifier.outbox) == 2

    def test_login_success(self, client):
        register(client)

        response = client.post(f"{API}/auth/login", json={"email": "ada@example.com", "password": DEFAULT_PASSWORD})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["email"] == "ada@example.com"

    def test_register_and_login_with_nul_byte_password(self, client):
        response = register(client, password="pass\u0000word")

        assert response.status_code == status.HTTP_201_CREATED

        login = client.post(f"{API}/auth/login", json={"email": "ada@example.com", "password": "pass\u0000word"})
        truncated = client.post(f"{API}/auth/login", json={"email": "ada@example.com", "password": "pass"})
        assert login.status_code == status.HTTP_200_OK
        assert truncated.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_long_password_prefix_is_rejected(self, client):
        register(client, password="a" * 72 + "correct")

        response = client.post(f"{API}/auth/login", json={"email": "ada@example.com", "password": "a" * 72 + "attacker"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.parametrize("email,password", [
        ("ada@example.com", "wrong-password"),
        ("nobody@example.com", DEFAULT_PASSWORD),
        ("not-an-email", DEFAULT_PASSWORD),
        ("", DEFAULT_PASSWORD),
    ])
    def test_login_failures_are_indistinguishable(self, client, email, password):
        register(client)

        response = client.post(f"{API}/auth/login", json={"email": email, "password": password})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {
            "status": "unsuccessful",
            "status_code": 401,
            "message": "Invalid email or password.",
            "error_code": "INVALID_CREDENTIAL"
        }


@pytest.mark.integration
class TestUserEndpoints:

    @pytest.fixture
    def token(self, client):
        return register(client).json()["access_token"]

    def test_update_password(self, client, token):
        response = client.put(
            f"{API}/user/update-password",
            json={"current_password": DEFAULT_PASSWORD, "new_password": "AnotherPassword456!"},
            headers=bearer(token)
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "status": "success",
            "status_code": 200,
            "message": "Password updated successfully."
        }

        old = client.post(f"{API}/auth/login", json={"email": "ada@example.com", "password": DEFAULT_PASSWORD})
        new = client.post(f"{API}/auth/login", json={"email": "ada@example.com", "password": "AnotherPassword456!"})
        assert old.status_code == status.HTTP_401_UNAUTHORIZED
        assert new.status_code == status.HTTP_200_OK

    @pytest.mark.parametrize("body,message", [
        ({"new_password": "AnotherPassword456!"}, "Current password and new password must be provided."),
        ({"current_password": "wrong", "new_password": "AnotherPassword456!"}, "Current password is incorrect."),
        ({"current_password": DEFAULT_PASSWORD, "new_password": "   "}, "New password cannot be empty."),
    ])
    def test_update_password_rejections(self, client, token, body, message):
        response = client.put(f"{API}/user/update-password", json=body, headers=bearer(token))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == message

    def test_update_password_to_nul_byte_password(self, client, token):
        response = client.put(
            f"{API}/user/update-password",
            json={"current_password": DEFAULT_PASSWORD, "new_password": "new\u0000secret"},
            headers=bearer(token)
        )

        assert response.status_code == status.HTTP_200_OK

        login = client.post(f"{API}/auth/login", json={"email": "ada@example.com", "password": "new\u0000secret"})
        assert login.status_code == status.HTTP_200_OK

    def test_update_password_requires_token(self, client):
        response = client.put(
            f"{API}/user/update-password",
            json={"current_password": "a", "new_password": "b"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_and_list_users(self, client, token):
        me = client.get(f"{API}/users/1", headers=bearer(token))
        listing = client.get(f"{API}/users", params={"limit": 10}, headers=bearer(token))
        missing = client.get(f"{API}/users/999", headers=bearer(token))

        assert me.status_code == status.HTTP_200_OK
        assert me.json()["email"] == "ada@example.com"
        assert listing.status_code == status.HTTP_200_OK
        assert [user["email"] for user in listing.json()["users"]] == ["ada@example.com"]
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert missing.json()["message"] == "User not found."

    def test_delete_current_user(self, client, token):
        first = client.delete(f"{API}/user", headers=bearer(token))
        second = client.delete(f"{API}/user", headers=bearer(token))

        assert first.status_code == status.HTTP_200_OK
        assert first.json()["message"] == "User deleted successfully."
        assert second.status_code == status.HTTP_200_OK

        login = client.post(f"{API}/auth/login", json={"email": "ada@example.com", "password": DEFAULT_PASSWORD})
        assert login.status_code == status.HTTP_401_UNAUTHORIZED

        again = register(client)
        assert again.status_code == status.HTTP_409_CONFLICT
