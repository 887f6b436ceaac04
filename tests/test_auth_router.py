from __future__ import annotations

from dataclasses import replace

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from focusforge.api.container import build_container
from focusforge.application.dto.auth import RegisterUserInput
from focusforge.main import create_app
from focusforge.shared.config import load_settings


def _settings(**overrides):
    settings = load_settings(
        {
            "DATABASE_URL": "sqlite+pysqlite://",
            "JWT_SECRET": "test-jwt-secret-key-for-testing-purposes-only",
            "NODE_ENV": "test",
            "PASSWORD_HASH_ROUNDS": "4",
            "DB_CREATE_SCHEMA": "true",
        }
    )
    return replace(settings, **overrides)


def _app(**overrides):
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    container = build_container(_settings(**overrides), engine=engine)
    return create_app(container=container), container


@pytest.fixture
def client():
    app, _container = _app()
    with TestClient(app) as test_client:
        yield test_client


def _register(client, email="a@x.com", full_name="A", password="secret1"):
    return client.post(
        "/api/v1/auth/register",
        json={"email": email, "fullName": full_name, "password": password},
    )


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_register_me_logout_flow(client):
    response = _register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    assert body["data"]["user"]["email"] == "a@x.com"
    assert body["data"]["user"]["fullName"] == "A"
    assert "password" not in body["data"]["user"]
    assert "passwordHash" not in body["data"]["user"]
    token = body["data"]["token"]

    me = client.get("/api/v1/auth/me", headers=_bearer(token))
    assert me.status_code == 200
    assert me.json()["message"] == "Current user retrieved successfully"
    assert me.json()["data"]["fullName"] == "A"
    assert "passwordHash" not in me.json()["data"]

    logout = client.post("/api/v1/auth/logout", headers=_bearer(token))
    assert logout.status_code == 200
    assert logout.json() == {"message": "Logout successful"}

    after = client.get("/api/v1/auth/me", headers=_bearer(token))
    assert after.status_code == 401
    assert after.json() == {"error": "Unauthorized", "message": "Invalid or expired token"}

    again = client.post("/api/v1/auth/logout", headers=_bearer(token))
    assert again.status_code == 401
    assert again.json()["message"] == "Invalid token"


def test_register_short_password_persists_nothing(client):
    response = _register(client, email="b@x.com", full_name="B", password="short")

    assert response.status_code == 400
    assert response.json() == {
        "error": "Bad Request",
        "message": "Password must be at least 6 characters long",
    }
    assert _register(client, email="b@x.com", full_name="B", password="longer1").status_code == 201


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"email": "test@example.com"}, "Email, fullName, and password are required"),
        ({"email": "invalid-email", "fullName": "T", "password": "password123"}, "Invalid email format"),
    ],
)
def test_register_validation_errors(client, payload, message):
    response = client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Bad Request", "message": message}


def test_register_duplicate_email_conflicts(client):
    assert _register(client).status_code == 201

    response = _register(client, full_name="Someone Else", password="another1")

    assert response.status_code == 409
    assert response.json() == {"error": "Conflict", "message": "User with this email already exists"}


def test_register_rejects_non_json_body(client):
    response = client.post(
        "/api/v1/auth/register",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request body"


def test_login_success_and_enumeration_resistance(client):
    _register(client, email="login@example.com", full_name="Login User", password="password123")

    ok = client.post("/api/v1/auth/login", json={"email": "login@example.com", "password": "password123"})
    assert ok.status_code == 200
    assert ok.json()["message"] == "Login successful"
    assert ok.json()["data"]["user"]["email"] == "login@example.com"
    assert ok.json()["data"]["token"]

    wrong_password = client.post("/api/v1/auth/login", json={"email": "login@example.com", "password": "nope123"})
    unknown_email = client.post("/api/v1/auth/login", json={"email": "ghost@example.com", "password": "password123"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "error": "Unauthorized",
        "message": "Invalid email or password",
    }


def test_login_without_password_set_is_rejected_like_wrong_password():
    app, container = _app()
    with TestClient(app) as client:
        container.register_user_use_case.execute(
            RegisterUserInput(
                email="g@x.com",
                full_name="G",
                password=None,
                google_id="google-1",
            )
        )

        response = client.post("/api/v1/auth/login", json={"email": "g@x.com", "password": "whatever1"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_login_missing_fields(client):
    response = client.post("/api/v1/auth/login", json={"email": "login@example.com"})

    assert response.status_code == 400
    assert response.json()["message"] == "Email and password are required"


@pytest.mark.parametrize(
    ("headers", "message"),
    [
        ({}, "Access token is required"),
        ({"Authorization": "InvalidFormat token"}, "Access token is required"),
        ({"Authorization": "Bearer invalid-token"}, "Invalid or expired token"),
    ],
)
def test_me_gate_rejections(client, headers, message):
    response = client.get("/api/v1/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized", "message": message}


def test_logout_requires_bearer_token(client):
    response = client.post("/api/v1/auth/logout")

    assert response.status_code == 401
    assert response.json()["message"] == "Access token is required"


def test_me_returns_not_found_after_user_deleted():
    app, container = _app()
    with TestClient(app) as client:
        body = _register(client).json()["data"]
        container.user_repository.delete_user(user_id=body["user"]["id"])

        response = client.get("/api/v1/auth/me", headers=_bearer(body["token"]))

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found", "message": "User not found"}


def test_health_and_unknown_route(client):
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"
    assert health.json()["environment"] == "test"

    missing = client.get("/api/v1/nowhere")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Not Found", "message": "Route /api/v1/nowhere not found"}


def test_rate_limit_rejects_requests_over_the_window_budget():
    app, _container = _app(rate_limit_max_requests=2)
    with TestClient(app) as client:
        first = client.get("/health")
        client.get("/health")
        third = client.get("/health")

    assert first.headers["RateLimit-Limit"] == "2"
    assert third.status_code == 429
    assert third.json()["message"] == "Too many requests from this IP, please try again later."


@pytest.mark.parametrize(
    ("environment", "message"),
    [("production", "Something went wrong"), ("development", "boom")],
)
def test_unhandled_errors_hide_details_outside_development(environment, message):
    app, _container = _app(environment=environment)
    router = APIRouter()

    @router.get("/explode")
    def explode():
        raise RuntimeError("boom")

    app.include_router(router)
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/explode")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error", "message": message}


def test_rate_limited_responses_keep_cors_headers():
    app, _container = _app(environment="development", rate_limit_max_requests=1)
    origin = {"Origin": "http://localhost:3000"}
    with TestClient(app) as client:
        first = client.get("/health", headers=origin)
        second = client.get("/health", headers=origin)

    assert first.status_code == 200
    assert second.status_code == 429
    assert second.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    assert second.headers["RateLimit-Remaining"] == "0"


def test_cors_preflight_does_not_consume_rate_limit():
    app, _container = _app(environment="development", rate_limit_max_requests=1)
    preflight_headers = {
        "Origin": "http://localhost:3000",
        "Access-Control-Request-Method": "POST",
    }
    with TestClient(app) as client:
        for _ in range(3):
            preflight = client.options("/api/v1/auth/login", headers=preflight_headers)
            assert preflight.status_code == 200
        response = client.get("/health")

    assert response.status_code == 200


def test_responses_carry_security_headers(client):
    ok = client.get("/health")
    missing = client.get("/api/v1/nowhere")

    for response in (ok, missing):
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["Referrer-Policy"] == "no-referrer"


def test_rate_limited_responses_carry_security_headers():
    app, _container = _app(rate_limit_max_requests=1)
    with TestClient(app) as client:
        client.get("/health")
        limited = client.get("/health")

    assert limited.status_code == 429
    assert limited.headers["X-Content-Type-Options"] == "nosniff"
