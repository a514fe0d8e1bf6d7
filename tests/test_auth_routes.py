"""
HTTP tests for /auth/register and /auth/login.
"""

import pytest

from conftest import register, user_payload


class TestRegisterEndpoint:
    @pytest.mark.asyncio
    async def test_register_minimal(self, client):
        resp = await client.post(
            "/auth/register",
            json={"email": "a@x.com", "username": "u1", "password": "123456"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert isinstance(body["id"], int)
        assert body["email"] == "a@x.com"
        assert body["username"] == "u1"
        assert body["coinBalance"] == 0
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_register_with_profile(self, client):
        body = await register(
            client,
            firstName="John",
            lastName="Doe",
            phone="123456789",
            address="123 Main St",
            cin="12345678",
        )
        assert body["firstName"] == "John"
        assert body["lastName"] == "Doe"
        assert body["phone"] == "123456789"
        assert body["address"] == "123 Main St"
        assert body["cin"] == "12345678"
        assert body["coinBalance"] == 0

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client):
        await register(client, 1)
        resp = await client.post(
            "/auth/register", json=user_payload(2, email="user1@example.com")
        )
        assert resp.status_code == 400
        assert "Email already in use" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_duplicate_username(self, client):
        await register(client, 1)
        resp = await client.post("/auth/register", json=user_payload(2, username="user1"))
        assert resp.status_code == 400
        assert "Username already in use" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_short_password(self, client):
        resp = await client.post("/auth/register", json=user_payload(password="123"))
        assert resp.status_code == 400
        assert "Password must be at least 6 characters" in resp.json()["message"]

    @pytest.mark.asyncio
    async def test_invalid_cin(self, client):
        resp = await client.post("/auth/register", json=user_payload(cin="invalid"))
        assert resp.status_code == 400
        body = resp.json()
        assert "CIN must be exactly 8 digits" in body["message"]
        assert body["statusCode"] == 400
        assert body["error"] == "Bad Request"

    @pytest.mark.asyncio
    async def test_missing_fields_is_400(self, client):
        resp = await client.post("/auth/register", json={"email": "a@x.com"})
        assert resp.status_code == 400
        assert isinstance(resp.json()["message"], list)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["p" * 100, "пароль" * 10])
    async def test_long_passwords_register_and_log_in(self, client, password):
        resp = await client.post("/auth/register", json=user_payload(password=password))
        assert resp.status_code == 201, resp.text

        resp = await client.post(
            "/auth/login", json={"email": "user1@example.com", "password": password}
        )
        assert resp.status_code == 201

        resp = await client.post(
            "/auth/login", json={"email": "user1@example.com", "password": password[:-1]}
        )
        assert resp.status_code == 401


class TestLoginEndpoint:
    @pytest.mark.asyncio
    async def test_login_returns_token_and_user(self, client):
        await register(client)
        resp = await client.post(
            "/auth/login", json={"email": "user1@example.com", "password": "password123"}
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["accessToken"]
        assert body["user"]["email"] == "user1@example.com"
        assert "password" not in body["user"]
        assert "coinBalance" in body["user"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email, password",
        [
            ("nonexistent@example.com", "password123"),
            ("user1@example.com", "wrongpassword"),
        ],
    )
    async def test_bad_credentials(self, client, email, password):
        await register(client)
        resp = await client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 401
        assert "Invalid email or password" in resp.json()["message"]
