from __future__ import annotations

from datetime import timedelta

from jose import jwt
from starlette.requests import Request

from app.config import settings
from app.database import engine
from app.models.admin_db_models import Admin
from app.services.auth import create_access_token, decode_access_token, get_current_admin, verify_password


def _login(client, email: str, password: str):
    return client.post("/api/admin/login", json={"email": email, "password": password})


def test_check_reports_admin_presence(client) -> None:
    assert client.get("/api/admin/check").json() == {"hasAdmin": False, "count": 0}

    client.post("/api/admin/init")

    assert client.get("/api/admin/check").json() == {"hasAdmin": True, "count": 1}


def test_init_creates_default_admin_once(client, db) -> None:
    created = client.post("/api/admin/init").json()
    assert created["message"] == "Default admin created successfully"
    assert created["email"] == settings.ADMIN_EMAIL
    assert created["tempPassword"] == settings.ADMIN_PASSWORD
    assert isinstance(created["adminId"], int)

    again = client.post("/api/admin/init").json()
    assert again == {"message": "Admin already exists", "adminExists": True, "count": 1}
    assert db.query(Admin).count() == 1


def test_password_is_stored_as_bcrypt_hash(client, db) -> None:
    client.post("/api/admin/init")

    admin = db.query(Admin).one()

    assert admin.password != settings.ADMIN_PASSWORD
    assert admin.password.startswith("$2b$12$")
    assert verify_password(settings.ADMIN_PASSWORD, admin.password)


def test_login_after_init_returns_verifiable_token(client) -> None:
    client.post("/api/admin/init")

    response = _login(client, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["admin"]["email"] == settings.ADMIN_EMAIL
    assert payload["admin"]["name"] == "Administrator"
    assert "password" not in payload["admin"]
    claims = decode_access_token(payload["token"])
    assert claims["id"] == payload["admin"]["id"]
    assert claims["email"] == settings.ADMIN_EMAIL
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_login_failures_are_indistinguishable(client) -> None:
    client.post("/api/admin/init")

    wrong_password = _login(client, settings.ADMIN_EMAIL, "not-the-password")
    unknown_email = _login(client, "nobody@example.com", settings.ADMIN_PASSWORD)

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid email or password"}


def test_login_requires_email_and_password(client) -> None:
    response = client.post("/api/admin/login", json={"email": settings.ADMIN_EMAIL})

    assert response.status_code == 400
    assert response.json() == {"error": "Email and password are required"}


def test_reset_password(client) -> None:
    client.post("/api/admin/init")

    missing = client.post("/api/admin/reset-password", json={"email": settings.ADMIN_EMAIL})
    assert missing.status_code == 400

    unknown = client.post(
        "/api/admin/reset-password", json={"email": "ghost@example.com", "newPassword": "x"}
    )
    assert unknown.status_code == 404
    assert unknown.json() == {"error": "Admin not found"}

    done = client.post(
        "/api/admin/reset-password", json={"email": settings.ADMIN_EMAIL, "newPassword": "fresh-pass"}
    )
    assert done.json() == {"message": "Password updated successfully"}
    assert _login(client, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD).status_code == 401
    assert _login(client, settings.ADMIN_EMAIL, "fresh-pass").status_code == 200


def test_missing_token_is_unauthorized(client) -> None:
    for method, url in (
        ("get", "/api/admin/stats"),
        ("post", "/api/admin/categories"),
        ("delete", "/api/admin/materials/1"),
        ("put", "/api/admin/videos/1"),
    ):
        response = getattr(client, method)(url)
        assert response.status_code == 401, url
        assert response.json() == {"error": "Access token required"}


def test_header_without_token_is_unauthorized(client) -> None:
    response = client.get("/api/admin/stats", headers={"Authorization": "Bearer"})

    assert response.status_code == 401


def test_bad_tokens_are_forbidden(client) -> None:
    expired = create_access_token(1, "admin@example.com", expires_delta=timedelta(seconds=-5))
    foreign = jwt.encode({"id": 1, "email": "admin@example.com"}, "another-secret", algorithm="HS256")

    for token in ("not-a-jwt", expired, foreign):
        response = client.get("/api/admin/stats", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403
        assert response.json() == {"error": "Invalid or expired token"}


def test_valid_token_opens_admin_routes(client, auth_headers) -> None:
    response = client.get("/api/admin/stats", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"materials": 0, "videos": 0, "categories": 0}


def test_missing_body_reports_required_fields(client) -> None:
    login = client.post("/api/admin/login")
    assert login.status_code == 400
    assert login.json() == {"error": "Email and password are required"}

    reset = client.post("/api/admin/reset-password")
    assert reset.status_code == 400
    assert reset.json() == {"error": "Email and new password are required"}


def test_valid_token_attaches_admin_to_request() -> None:
    token = create_access_token(7, "editor@example.com")
    request = Request({
        "type": "http",
        "method": "GET",
        "path": "/api/admin/stats",
        "headers": [(b"authorization", f"Bearer {token}".encode())],
    })

    admin = get_current_admin(request)

    assert admin == {"id": 7, "email": "editor@example.com"}
    assert request.state.admin == admin


def test_store_errors_are_not_echoed_to_clients(client) -> None:
    client.post("/api/admin/init")
    Admin.__table__.drop(bind=engine)

    reset = client.post(
        "/api/admin/reset-password", json={"email": settings.ADMIN_EMAIL, "newPassword": "s3cret"}
    )
    login = _login(client, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    check = client.get("/api/admin/check")

    assert reset.status_code == login.status_code == check.status_code == 500
    assert reset.json() == {"error": "Failed to reset password"}
    assert login.json() == {"error": "Login failed"}
    assert check.json() == {"error": "Failed to check admin status"}


def test_development_errors_carry_details_without_parameters(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
    Admin.__table__.drop(bind=engine)

    body = client.post(
        "/api/admin/reset-password", json={"email": settings.ADMIN_EMAIL, "newPassword": "s3cret"}
    ).json()

    assert body["error"] == "Failed to reset password"
    assert "admins" in body["details"]
    assert "$2b$" not in body["details"]
    assert settings.ADMIN_EMAIL not in body["details"]
    assert "Traceback" in body["stack"]
