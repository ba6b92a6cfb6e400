"""Identity Routes — register, login and /me.

Invariants:
    - Duplicate email (case-insensitive) -> 409
    - Unknown email and wrong password answer the SAME 401 body
    - /me requires a valid, unexpired bearer token
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from biblioteca.config import get_settings
from biblioteca.infrastructure.credentials import issue_token

USER = {"username": "ana", "email": "ana@example.com", "password": "s3cret-pass"}


async def _register(client, **overrides):
    return await client.post("/register", json={**USER, **overrides})


async def _login(client, email=USER["email"], password=USER["password"]):
    return await client.post("/login", json={"email": email, "password": password})


async def test_register_returns_201(client):
    res = await _register(client)
    assert res.status_code == 201
    assert res.json() == {"message": "User registered"}


async def test_duplicate_email_is_a_conflict(client):
    await _register(client)
    res = await _register(client, username="otra", email="ANA@example.com")
    assert res.status_code == 409
    assert res.json()["code"] == "CONFLICT"


async def test_short_password_is_rejected(client):
    res = await _register(client, password="short")
    assert res.status_code == 400


async def test_invalid_email_is_rejected(client):
    res = await _register(client, email="not-an-email")
    assert res.status_code == 400


async def test_login_returns_bearer_token(client):
    await _register(client)
    res = await _login(client)
    assert res.status_code == 200
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["token"]


async def test_login_failures_are_indistinguishable(client):
    await _register(client)

    wrong_password = await _login(client, password="wrong-password")
    unknown_email = await _login(client, email="nobody@example.com")

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json()["message"] == unknown_email.json()["message"]
    assert wrong_password.json()["code"] == "UNAUTHORIZED"


async def test_me_with_valid_token(client):
    await _register(client)
    token = (await _login(client)).json()["token"]

    res = await client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 200
    assert res.json()["email"] == "ana@example.com"
    assert "password_hash" not in res.json()


async def test_me_without_token_is_unauthorized(client):
    res = await client.get("/me")
    assert res.status_code == 401
    assert res.json()["code"] == "UNAUTHORIZED"


async def test_me_with_garbage_token_is_unauthorized(client):
    res = await client.get("/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert res.status_code == 401


async def test_me_with_expired_token_is_unauthorized(client):
    settings = get_settings()
    token = issue_token(
        uuid4(), settings.jwt_secret_key,
        now=datetime.now(timezone.utc) - timedelta(hours=2),
    )
    res = await client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json()["message"] == "Token has expired"


async def test_me_for_deleted_user_is_unauthorized(client):
    settings = get_settings()
    token = issue_token(uuid4(), settings.jwt_secret_key)
    res = await client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
