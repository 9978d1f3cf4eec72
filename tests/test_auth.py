"""Tests for registration, login and the password recovery flow."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from video_api.dependencies import get_mailer
from video_api.main import app
from video_api.services import auth_service

from tests.helpers import auth_header, register


class FakeMailer:
    def __init__(self):
        self.sent = []

    async def send_password_reset(self, email, reset_url):
        self.sent.append((email, reset_url))


class BrokenMailer:
    async def send_password_reset(self, email, reset_url):
        raise ConnectionError("smtp down")


async def test_register_returns_token_and_hides_password(client, mongo_db):
    r = await client.post("/api/auth/register", json={
        "name": "Ana", "email": "Ana@Example.com",
        "password": "secret123", "age": 30,
    })
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "User registered"
    assert body["token"]
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["role"] == "user"
    assert "password" not in body["user"]

    stored = await mongo_db["users"].find_one({})
    assert stored["password"] != "secret123"


async def test_duplicate_email_is_rejected(client):
    await register(client, email="dup@example.com")

    r = await client.post("/api/auth/register", json={
        "name": "Bo", "email": "dup@example.com",
        "password": "secret123", "age": 20,
    })
    assert r.status_code == 400
    assert r.json() == {"error": "A user with this email already exists"}


async def test_register_validation(client):
    r = await client.post("/api/auth/register", json={
        "name": "Ana", "email": "not-an-email",
        "password": "secret123", "age": 30,
    })
    assert r.status_code == 400

    r = await client.post("/api/auth/register", json={
        "name": "Ana", "email": "a@example.com",
        "password": "123", "age": 30,
    })
    assert r.status_code == 400


async def test_login_and_profile(client):
    await register(client, email="ana@example.com", password="secret123")

    r = await client.post("/api/auth/login", json={
        "email": "ana@example.com", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["token"]

    r = await client.get("/api/auth/profile", headers=auth_header(token))
    assert r.status_code == 200
    assert r.json()["user"]["email"] == "ana@example.com"


async def test_login_wrong_password(client):
    await register(client, email="ana@example.com")

    r = await client.post("/api/auth/login", json={
        "email": "ana@example.com", "password": "wrong-one"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid credentials"}

    r = await client.post("/api/auth/login", json={
        "email": "nobody@example.com", "password": "wrong-one"})
    assert r.json() == {"error": "Invalid credentials"}


async def test_forgot_password_same_answer_for_unknown_email(client):
    mailer = FakeMailer()
    app.dependency_overrides[get_mailer] = lambda: mailer

    r = await client.post("/api/auth/forgot-password",
                          json={"email": "ghost@example.com"})
    assert r.status_code == 200
    assert mailer.sent == []
    assert r.json()["message"].startswith("If the email exists")


async def test_reset_password_flow(client, mongo_db):
    mailer = FakeMailer()
    app.dependency_overrides[get_mailer] = lambda: mailer
    await register(client, email="ana@example.com", password="secret123")

    r = await client.post("/api/auth/forgot-password",
                          json={"email": "ana@example.com"})
    assert r.status_code == 200
    email, url = mailer.sent[0]
    assert email == "ana@example.com"
    raw = url.rsplit("/", 1)[-1]

    stored = await mongo_db["users"].find_one({})
    assert stored["reset_password_token"] != raw

    r = await client.post("/api/auth/reset-password", json={
        "token": raw, "newPassword": "brand-new"})
    assert r.status_code == 200
    assert r.json()["message"] == "Password updated"
    assert r.json()["token"]

    r = await client.post("/api/auth/login", json={
        "email": "ana@example.com", "password": "brand-new"})
    assert r.status_code == 200

    # токен одноразовый
    r = await client.post("/api/auth/reset-password", json={
        "token": raw, "newPassword": "again-new"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid or expired token"}


async def test_expired_reset_token_is_rejected(client, mongo_db):
    mailer = FakeMailer()
    app.dependency_overrides[get_mailer] = lambda: mailer
    await register(client, email="ana@example.com")
    await client.post("/api/auth/forgot-password",
                      json={"email": "ana@example.com"})
    raw = mailer.sent[0][1].rsplit("/", 1)[-1]

    await mongo_db["users"].update_one({}, {"$set": {
        "reset_password_expires":
            datetime.now(timezone.utc) - timedelta(minutes=1)}})

    r = await client.post("/api/auth/reset-password", json={
        "token": raw, "newPassword": "brand-new"})
    assert r.status_code == 400


async def test_mailer_failure_clears_token(client, mongo_db, monkeypatch):
    app.dependency_overrides[get_mailer] = BrokenMailer
    logged = []

    def record(msg, *args, **kwargs):
        logged.append(kwargs.get("extra") or {})

    monkeypatch.setattr(auth_service.logger, "warning", record)
    monkeypatch.setattr(auth_service.logger, "exception", record)
    await register(client, email="ana@example.com")

    r = await client.post("/api/auth/forgot-password",
                          json={"email": "ana@example.com"})
    assert r.status_code == 500
    assert r.json() == {"error": "Could not send the password reset email"}

    stored = await mongo_db["users"].find_one({})
    assert "reset_password_token" not in stored
    # ссылка с токеном не должна попасть в логи
    assert logged
    assert all("reset_url" not in extra for extra in logged)


async def test_change_password(client):
    token, _ = await register(client, email="ana@example.com",
                              password="secret123")

    r = await client.put("/api/auth/change-password", json={
        "currentPassword": "wrong-one", "newPassword": "brand-new"},
        headers=auth_header(token))
    assert r.status_code == 400
    assert r.json() == {"error": "Current password is incorrect"}

    r = await client.put("/api/auth/change-password", json={
        "currentPassword": "secret123", "newPassword": "brand-new"},
        headers=auth_header(token))
    assert r.status_code == 200
    assert r.json() == {"message": "Password changed"}

    r = await client.post("/api/auth/login", json={
        "email": "ana@example.com", "password": "brand-new"})
    assert r.status_code == 200
