import httpx

from novel_nest.core.db import get_db
from novel_nest.main import app
from tests.conftest import auth_headers


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_signup_then_login(client):
    response = await client.post("/api/auth/signup", json={
        "username": "new_reader", "email": "new@novelnest.io", "password": "secret123"
    })
    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "Reader"
    assert body["user_id"] == 7
    assert "password" not in body and "password_hash" not in body

    response = await client.post("/api/auth/login", json={"email": "new@novelnest.io", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "new_reader"
    assert response.json()["token_type"] == "bearer"


async def test_signup_conflict(client):
    response = await client.post("/api/auth/signup", json={
        "username": "ReaderJoe", "email": "joe2@novelnest.io", "password": "secret123"
    })

    assert response.status_code == 409
    assert "error" in response.json()


async def test_signup_validation_error_shape(client):
    response = await client.post("/api/auth/signup", json={
        "username": "x!", "email": "bad", "password": "short"
    })

    assert response.status_code == 422
    assert isinstance(response.json()["error"], str)


async def test_login_failures_are_indistinguishable(client):
    unknown = await client.post("/api/auth/login", json={"email": "ghost@novelnest.io", "password": "novelnest123"})
    wrong = await client.post("/api/auth/login", json={"email": "reader@novelnest.io", "password": "nope12345"})

    assert unknown.status_code == wrong.status_code == 404
    assert unknown.json() == wrong.json() == {"error": "Invalid email or password"}


async def test_me(client):
    headers = await auth_headers(client, "admin@novelnest.io")

    response = await client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["role"] == "Admin"


async def test_me_requires_token(client):
    missing = await client.get("/api/auth/me")
    bogus = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert missing.status_code in (401, 403)
    assert bogus.status_code == 401
    assert "error" in bogus.json()


async def test_users(client):
    response = await client.get("/api/users/2")
    assert response.status_code == 200
    assert response.json()["bio"] == "Avid writer of fantasy."

    assert (await client.get("/api/users/999")).status_code == 404


async def test_unknown_method_uses_error_payload(client):
    response = await client.put("/api/novels")

    assert response.status_code == 405
    assert "error" in response.json()


async def test_unexpected_failure_uses_error_payload():
    async def broken_db():
        raise RuntimeError("database is gone")
        yield

    app.dependency_overrides[get_db] = broken_db
    try:
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
            response = await ac.get("/api/novels/101")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


async def test_email_is_case_insensitive(client):
    conflict = await client.post("/api/auth/signup", json={
        "username": "reader_two", "email": "READER@novelnest.io", "password": "secret123"
    })
    assert conflict.status_code == 409

    response = await client.post("/api/auth/login", json={"email": "Reader@NovelNest.io", "password": "novelnest123"})
    assert response.status_code == 200
    assert response.json()["user"]["user_id"] == 1


async def test_signup_stores_lowercase_email(client):
    response = await client.post("/api/auth/signup", json={
        "username": "MixedCase", "email": "Mixed.Case@NovelNest.io", "password": "secret123"
    })

    assert response.status_code == 201
    assert response.json()["email"] == "mixed.case@novelnest.io"
