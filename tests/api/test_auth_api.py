"""HTTP tests for /api/auth and /api/health."""

import pytest

from compliancedocs.core.limiter import LOGIN_LIMIT, configure_limiter


@pytest.fixture
def rate_limited():
    limiter = configure_limiter(True)
    limiter.reset()
    yield limiter
    limiter.reset()
    configure_limiter(False)


async def test_health(client) -> None:
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "x-request-id" in response.headers


async def test_register_login_me_change_password(client) -> None:
    register = await client.post(
        "/api/auth/register",
        json={"email": "Ana@Example.com", "name": "Ana", "password": "secret123"},
    )
    assert register.status_code == 201
    body = register.json()
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["role"] == "employee"
    assert "password" not in body["user"]

    login = await client.post(
        "/api/auth/login", json={"email": "ana@example.com", "password": "secret123"}
    )
    assert login.status_code == 200
    headers = {"x-auth-token": login.json()["token"]}

    me = await client.get("/api/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["name"] == "Ana"
    assert me.json()["last_login"] is not None

    changed = await client.put(
        "/api/auth/change-password",
        json={"current_password": "secret123", "new_password": "newsecret"},
        headers=headers,
    )
    assert changed.status_code == 200
    assert changed.json() == {"message": "Password updated successfully"}

    old = await client.post(
        "/api/auth/login", json={"email": "ana@example.com", "password": "secret123"}
    )
    assert old.status_code == 400
    assert old.json()["error"] == "INVALID_CREDENTIALS"


async def test_short_password_account_round_trip(client) -> None:
    register = await client.post(
        "/api/auth/register", json={"email": "a@x.no", "name": "A", "password": "pw123"}
    )
    assert register.status_code == 201

    login = await client.post("/api/auth/login", json={"email": "a@x.no", "password": "pw123"})
    assert login.status_code == 200
    headers = {"x-auth-token": login.json()["token"]}

    me = await client.get("/api/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["email"] == "a@x.no"
    assert "password" not in me.json()
    assert "hashed_password" not in me.json()

    changed = await client.put(
        "/api/auth/change-password",
        json={"current_password": "pw123", "new_password": "pw456"},
        headers=headers,
    )
    assert changed.status_code == 200

    relogin = await client.post(
        "/api/auth/login", json={"email": "a@x.no", "password": "pw456"}
    )
    assert relogin.status_code == 200


async def test_empty_password_rejected(client) -> None:
    response = await client.post(
        "/api/auth/register", json={"email": "b@x.no", "name": "B", "password": ""}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_bearer_header_accepted(client) -> None:
    register = await client.post(
        "/api/auth/register",
        json={"email": "bo@example.com", "name": "Bo", "password": "secret123"},
    )
    token = register.json()["token"]
    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200


async def test_duplicate_register_rejected(client, employee_headers) -> None:
    response = await client.post(
        "/api/auth/register",
        json={"email": "employee@example.com", "name": "Again", "password": "secret123"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "DUPLICATE_USER"


async def test_wrong_current_password(client, employee_headers) -> None:
    response = await client.put(
        "/api/auth/change-password",
        json={"current_password": "nope", "new_password": "newsecret"},
        headers=employee_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Current password is incorrect"


async def test_me_requires_token(client) -> None:
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHENTICATED"


async def test_me_rejects_bad_token(client) -> None:
    response = await client.get("/api/auth/me", headers={"x-auth-token": "not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "INVALID_TOKEN"


async def test_validation_error_shape(client) -> None:
    response = await client.post(
        "/api/auth/register", json={"email": "not-an-email", "name": "X", "password": "secret123"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["message"].startswith("email")
    assert isinstance(body["details"], list)


async def test_logout(client) -> None:
    response = await client.post("/api/auth/logout")
    assert response.status_code == 200
    assert "message" in response.json()


async def test_login_rate_limit_uses_error_body(client, rate_limited) -> None:
    attempts = int(LOGIN_LIMIT.split("/")[0])
    body = {"email": "nobody@example.com", "password": "wrong"}
    for _ in range(attempts):
        assert (await client.post("/api/auth/login", json=body)).status_code == 400

    response = await client.post("/api/auth/login", json=body)
    assert response.status_code == 429
    assert response.json()["error"] == "RATE_LIMITED"
    assert response.json()["message"].startswith("Rate limit exceeded")
