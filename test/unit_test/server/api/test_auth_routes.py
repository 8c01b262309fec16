from unittest.mock import Mock, patch

import pytest
from httpx import AsyncClient

from ecodata.core.security import decode_access_token
from ecodata.core.storage import Storage

pytestmark = pytest.mark.asyncio

REGISTER_BODY = {
    "username": "newdonor",
    "password": "secret123",
    "email": "newdonor@example.org",
    "firstName": "New",
}


class TestRegister:
    async def test_register_returns_token_and_user(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json=REGISTER_BODY)

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["username"] == "newdonor"
        assert data["user"]["role"] == "user"
        assert "hashedPassword" not in data["user"]
        claims = decode_access_token(data["token"])
        assert claims.user_id == data["user"]["id"]
        assert claims.role == "user"

    async def test_role_cannot_be_chosen(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json={**REGISTER_BODY, "role": "admin"})

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "user"

    async def test_duplicate_username(self, client: AsyncClient, donor):
        response = await client.post("/api/auth/register", json={**REGISTER_BODY, "username": "donor"})

        assert response.status_code == 400
        assert response.json() == {"message": "Username already taken"}

    async def test_duplicate_email(self, client: AsyncClient, donor):
        response = await client.post("/api/auth/register", json={**REGISTER_BODY, "email": "donor@example.org"})

        assert response.status_code == 400
        assert response.json() == {"message": "Email already registered"}

    async def test_invalid_body(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json={"username": "ab", "password": "x", "email": "nope"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"
        assert len(response.json()["errors"]) == 3


class TestLogin:
    async def test_login(self, client: AsyncClient, donor):
        response = await client.post("/api/auth/login", json={"username": "donor", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "donor@example.org"

    async def test_wrong_password(self, client: AsyncClient, donor):
        response = await client.post("/api/auth/login", json={"username": "donor", "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid username or password"}

    async def test_unknown_user(self, client: AsyncClient):
        response = await client.post("/api/auth/login", json={"username": "ghost", "password": "whatever"})

        assert response.status_code == 401

    async def test_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/auth/login", json={"username": "donor"})

        assert response.status_code == 400
        assert response.json() == {"message": "Username and password are required"}


class TestPasswordRecovery:
    async def test_unknown_email_gets_generic_message(self, client: AsyncClient, email_service: Mock):
        response = await client.post("/api/auth/forgot-password", json={"email": "ghost@example.org"})

        assert response.status_code == 200
        assert response.json() == {"message": "If that email exists in our system, we've sent a password reset link"}
        email_service.send_password_reset_email.assert_not_called()

    async def test_missing_email(self, client: AsyncClient):
        response = await client.post("/api/auth/forgot-password", json={})

        assert response.status_code == 400
        assert response.json() == {"message": "Email is required"}

    async def test_known_email_sends_link_without_leaking_token(
        self, client: AsyncClient, email_service: Mock, donor
    ):
        response = await client.post("/api/auth/forgot-password", json={"email": "donor@example.org"})

        assert response.status_code == 200
        assert set(response.json()) == {"message"}
        to, token, name = email_service.send_password_reset_email.call_args.args
        assert to == "donor@example.org"
        assert name == "Dana"
        assert len(token) >= 32

    async def test_development_echoes_token(self, client: AsyncClient, donor):
        with patch("ecodata.server.services.auth.settings") as mock_settings:
            mock_settings.is_development = True
            mock_settings.password_reset_token_ttl_minutes = 60
            response = await client.post("/api/auth/forgot-password", json={"email": "donor@example.org"})

        data = response.json()
        assert data["token"]
        assert data["resetURL"].endswith(f"?token={data['token']}")

    async def test_full_reset_flow(self, client: AsyncClient, storage: Storage, email_service: Mock, donor):
        token = (await storage.create_password_reset_token(donor.id, ttl_minutes=60)).token

        validated = await client.get(f"/api/auth/validate-reset-token/{token}")
        assert validated.status_code == 200
        assert validated.json() == {"message": "Token is valid", "email": "donor@example.org"}

        reset = await client.post("/api/auth/reset-password", json={"token": token, "password": "newpass456"})
        assert reset.status_code == 200
        assert reset.json() == {"message": "Password has been successfully reset"}
        email_service.send_password_change_confirmation.assert_called_once_with("donor@example.org", "Dana")

        login = await client.post("/api/auth/login", json={"username": "donor", "password": "newpass456"})
        assert login.status_code == 200

        reused = await client.post("/api/auth/reset-password", json={"token": token, "password": "another789"})
        assert reused.status_code == 400
        assert reused.json() == {"message": "Invalid or expired token"}

    async def test_expired_token_is_invalid(self, client: AsyncClient, storage: Storage, donor):
        token = (await storage.create_password_reset_token(donor.id, ttl_minutes=-1)).token

        response = await client.get(f"/api/auth/validate-reset-token/{token}")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid or expired token"}

    async def test_reset_requires_token_and_password(self, client: AsyncClient):
        response = await client.post("/api/auth/reset-password", json={"token": "abc"})

        assert response.status_code == 400
        assert response.json() == {"message": "Token and new password are required"}
