from __future__ import annotations

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.config import settings
from app.services import file_utils
from app.services.file_utils import UploadRejected


def _upload(filename: str, content_type: str, data: bytes = b"data") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_generated_names_are_unique_and_keep_extension() -> None:
    names = {file_utils.generate_filename("image", "photo.jpeg") for _ in range(50)}

    assert len(names) == 50
    assert all(name.startswith("image-") and name.endswith(".jpeg") for name in names)


def test_validate_uploads_accepts_matching_prefixes() -> None:
    file_utils.validate_uploads({
        "image": _upload("a.gif", "image/gif"),
        "thumbnail": _upload("b.png", "image/png"),
        "video": _upload("c.webm", "video/webm"),
        "missing": None,
    })


def test_validate_uploads_rejects_unknown_field() -> None:
    with pytest.raises(UploadRejected) as exc_info:
        file_utils.validate_uploads({"attachment": _upload("a.pdf", "application/pdf")})

    assert exc_info.value.status_code == 400


def test_validate_uploads_rejects_total_size(monkeypatch) -> None:
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 10)

    with pytest.raises(UploadRejected) as exc_info:
        file_utils.validate_uploads({
            "image": _upload("a.png", "image/png", b"123456"),
            "thumbnail": _upload("b.png", "image/png", b"123456"),
        })

    assert exc_info.value.status_code == 413


def test_check_request_size(monkeypatch) -> None:
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 100)

    file_utils.check_request_size(None)
    file_utils.check_request_size("100")
    with pytest.raises(UploadRejected):
        file_utils.check_request_size("101")


def test_save_and_delete_file() -> None:
    web_path = file_utils.save_file("thumbnail", _upload("thumb.png", "image/png", b"pixels"))

    assert web_path.startswith("/uploads/images/thumbnail-")
    stored = settings.UPLOAD_DIR / web_path[len("/uploads/"):]
    assert stored.read_bytes() == b"pixels"

    file_utils.delete_file(web_path)
    assert not stored.exists()
    # Paths outside the uploads tree are ignored
    file_utils.delete_file("/etc/passwd")
