from __future__ import annotations

from app.config import settings
from scripts import generate_secret, reset_admin


def test_env_secrets_cover_portal_variables() -> None:
    values = generate_secret.env_secrets()

    assert set(values) == {"JWT_SECRET", "ADMIN_PASSWORD", "DB_PASSWORD"}
    assert len(values["ADMIN_PASSWORD"]) == 24
    assert values["ADMIN_PASSWORD"] != values["DB_PASSWORD"]
    for value in values.values():
        assert not set(value) & set("'\"\\$#")


def test_reset_admin_cli(client, capsys) -> None:
    client.post("/api/admin/init")

    assert reset_admin.main(["--email", settings.ADMIN_EMAIL, "--password", "rotated"]) == 0
    assert "PASSED" in capsys.readouterr().out
    assert client.post(
        "/api/admin/login", json={"email": settings.ADMIN_EMAIL, "password": "rotated"}
    ).status_code == 200

    assert reset_admin.main(["--email", "ghost@example.com", "--password", "x"]) == 1
