"""
Registration, login and bearer-token resolution through the HTTP API.
"""

from datetime import datetime

import pytest

from app.exceptions import BadRequestError
from app.schemas import UserCreate
from app.security import create_access_token
from app.services import users


class TestRegister:

    async def test_register_returns_identity_and_role(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "a@x.com", "password": "pw"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "alice"
        assert body["email"] == "a@x.com"
        assert body["role"] == "USER"
        assert body["tokenType"] == "bearer"
        assert body["accessToken"]

    async def test_duplicate_email_rejected(self, client, register):
        await register("alice", "a@x.com")
        response = await client.post(
            "/api/auth/register",
            json={"username": "alice2", "email": "a@x.com", "password": "pw2"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    async def test_blank_fields_rejected(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"username": " ", "email": "a@x.com", "password": "pw"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "bad_request"

    async def test_unknown_field_rejected(self, client):
        response = await client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "a@x.com", "password": "pw", "role": "ADMIN"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    async def test_users_endpoint_creates_without_body(self, client):
        response = await client.post(
            "/api/users",
            json={"username": "carol", "email": "c@x.com", "password": "pw"},
        )
        assert response.status_code == 201
        assert response.content == b""

        login = await client.post("/api/auth/login", json={"email": "c@x.com", "password": "pw"})
        assert login.status_code == 200

    async def test_users_endpoint_rejects_duplicate(self, client, register):
        await register("alice", "a@x.com")
        response = await client.post(
            "/api/users",
            json={"username": "x", "email": "a@x.com", "password": "pw"},
        )
        assert response.status_code == 400


class TestLogin:

    async def test_login_scenario(self, client, register):
        await register("alice", "a@x.com", "pw")

        ok = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "pw"})
        assert ok.status_code == 200
        assert ok.json()["username"] == "alice"
        assert ok.json()["role"] == "USER"

        wrong = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "wrong"})
        assert wrong.status_code == 401
        assert wrong.json()["message"] == "Invalid credentials"

    async def test_unknown_email(self, client):
        response = await client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "pw"})
        assert response.status_code == 401

    async def test_login_token_authenticates(self, client, register):
        await register("alice", "a@x.com", "pw")
        login = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "pw"})
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}

        me = await client.get("/api/auth/me", headers=headers)
        assert me.status_code == 200
        assert me.json()["email"] == "a@x.com"


class TestIdentityResolver:

    async def test_missing_token(self, client):
        response = await client.get("/api/projects")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_invalid_token(self, client):
        response = await client.get("/api/projects", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    async def test_token_for_unknown_user(self, client):
        token = create_access_token("ghost@x.com")
        response = await client.get("/api/projects", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert "ghost@x.com" in response.json()["message"]

    async def test_me_reports_utc_creation_time(self, client, alice):
        me = await client.get("/api/auth/me", headers=alice)
        assert me.status_code == 200
        created = datetime.fromisoformat(me.json()["createdAt"].replace("Z", "+00:00"))
        assert created.utcoffset().total_seconds() == 0


class TestRegisterRace:

    async def test_unique_email_violation_is_bad_request(self, test_session, monkeypatch):
        """Two registrations that both pass the lookup still end in a 400, not a 500."""
        await users.register_user(
            test_session, UserCreate(username="alice", email="a@x.com", password="pw")
        )
        await test_session.commit()

        async def not_found(session, email):
            return None

        monkeypatch.setattr(users, "get_user_by_email", not_found)

        with pytest.raises(BadRequestError) as exc_info:
            await users.register_user(
                test_session, UserCreate(username="alice2", email="a@x.com", password="pw2")
            )
        assert exc_info.value.message == "Email already registered"
        assert exc_info.value.status_code == 400
