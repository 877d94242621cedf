"""
Utilities for working with uploaded files
"""
import logging
import os
import secrets
import shutil
import time
from pathlib import Path
from typing import Iterable, Mapping, Optional

from fastapi import UploadFile
from app.config import settings

logger = logging.getLogger(__name__)

# Upload field -> (subdirectory of the uploads root, required MIME prefix)
UPLOAD_RULES = {
    "image": ("images", "image/"),
    "thumbnail": ("images", "image/"),
    "video": ("videos", "video/"),
}


class UploadRejected(Exception):
    """Upload refused before anything was stored"""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def has_file(upload: Optional[UploadFile]) -> bool:
    """True if the form field carries an actual file"""
    return bool(upload and upload.filename)


def upload_size(upload: UploadFile) -> int:
    """
    Size of an uploaded file in bytes

    Args:
        upload: Uploaded file

    Returns:
        int: Size in bytes
    """
    if upload.size is not None:
        return upload.size
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def check_request_size(content_length: Optional[str]) -> None:
    """
    Reject request bodies larger than MAX_UPLOAD_SIZE

    Args:
        content_length: Value of the Content-Length header

    Raises:
        UploadRejected: With status 413 if the body is too large
    """
    if content_length and content_length.isdigit() and int(content_length) > settings.MAX_UPLOAD_SIZE:
        raise UploadRejected("File too large", status_code=413)


def validate_uploads(files: Mapping[str, Optional[UploadFile]]) -> None:
    """
    Check field names, MIME types and total size of the uploaded files

    Runs before any file is written or row inserted.

    Args:
        files: Form field name -> uploaded file (None when absent)

    Raises:
        UploadRejected: On an unknown field, wrong MIME type or oversize upload
    """
    total = 0
    for field, upload in files.items():
        if not has_file(upload):
            continue
        if field not in UPLOAD_RULES:
            raise UploadRejected(f"Unexpected file field: {field}")

        prefix = UPLOAD_RULES[field][1]
        content_type = (upload.content_type or "").lower()
        if not content_type.startswith(prefix):
            kind = "video" if prefix == "video/" else "image"
            raise UploadRejected(f"Only {kind} files are allowed for {kind} uploads")

        total += upload_size(upload)

    if total > settings.MAX_UPLOAD_SIZE:
        raise UploadRejected("File too large", status_code=413)


def generate_filename(field: str, original_name: str) -> str:
    """
    Collision-free stored filename keeping the original extension

    Args:
        field: Upload field name
        original_name: Client-side filename

    Returns:
        str: <field>-<epoch ms>-<random><ext>
    """
    unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}"
    return f"{field}-{unique_suffix}{Path(original_name).suffix}"


def save_file(field: str, upload: UploadFile) -> str:
    """
    Store an uploaded file and return its web path

    Args:
        field: Upload field name (image, thumbnail or video)
        upload: Uploaded file, already validated

    Returns:
        str: Web-relative path, e.g. "/uploads/images/image-1700000000000-42.png"
    """
    subdir = UPLOAD_RULES[field][0]
    directory = settings.UPLOAD_DIR / subdir
    directory.mkdir(parents=True, exist_ok=True)

    filename = generate_filename(field, upload.filename)
    upload.file.seek(0)
    with open(directory / filename, "wb") as buffer:
        shutil.copyfileobj(upload.file, buffer)

    return f"/uploads/{subdir}/{filename}"


def save_files(files: Mapping[str, Optional[UploadFile]]) -> dict[str, str]:
    """
    Store every present upload

    Args:
        files: Form field name -> uploaded file

    Returns:
        dict: Form field name -> web path
    """
    saved = {}
    try:
        for field, upload in files.items():
            if has_file(upload):
                saved[field] = save_file(field, upload)
    except OSError:
        delete_files(saved.values())
        raise
    return saved


def delete_file(web_path: str) -> None:
    """
    Remove a stored upload by its web path

    Args:
        web_path: Path as stored in the database (e.g. "/uploads/images/x.png")
    """
    if not web_path or not web_path.startswith("/uploads/"):
        return

    full_path = settings.UPLOAD_DIR / web_path[len("/uploads/"):]
    try:
        if full_path.is_file():
            full_path.unlink()
            logger.info("Deleted file: %s", full_path)
    except OSError as e:
        logger.warning("Error deleting file %s: %s", full_path, e)


def delete_files(web_paths: Iterable[str]) -> None:
    for web_path in web_paths:
        delete_file(web_path)
