from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are read at import time, so the environment is prepared first
_TMP_ROOT = Path(tempfile.mkdtemp(prefix="portal-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{(_TMP_ROOT / 'portal.db').as_posix()}"
os.environ["UPLOAD_DIR"] = str(_TMP_ROOT / "uploads")
os.environ["PUBLIC_DIR"] = str(_TMP_ROOT / "public")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["ENVIRONMENT"] = "test"

pytest.importorskip("httpx")

from fastapi.testclient import TestClient

import main
from app.config import settings
from app.database import Base, SessionLocal, engine
from app.models.category_db_models import Category
from app.models.material_db_models import Material
from app.models.video_db_models import Video


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


@pytest.fixture()
def client() -> TestClient:
    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def auth_headers(client: TestClient) -> dict[str, str]:
    client.post("/api/admin/init")
    response = client.post(
        "/api/admin/login",
        json={"email": settings.ADMIN_EMAIL, "password": settings.ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


def add_category(db, name: str, description: str | None = None) -> Category:
    category = Category(name=name, description=description)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def add_material(db, title: str, content: str = "Body text", **fields) -> Material:
    fields.setdefault("status", "published")
    material = Material(title=title, content=content, **fields)
    db.add(material)
    db.commit()
    db.refresh(material)
    return material


def add_video(db, title: str, description: str = "Video description", **fields) -> Video:
    fields.setdefault("status", "published")
    fields.setdefault("video_url", "https://videos.example.com/watch/1")
    video = Video(title=title, description=description, **fields)
    db.add(video)
    db.commit()
    db.refresh(video)
    return video
