"""
Database initialization run at application startup
"""
import logging

from app.config import settings
from app.database import init_db

logger = logging.getLogger(__name__)


def ensure_directories():
    """
    Create the upload and dashboard directories served as static files
    """
    for directory in (
        settings.UPLOAD_DIR,
        settings.UPLOAD_DIR / "images",
        settings.UPLOAD_DIR / "videos",
        settings.PUBLIC_DIR,
    ):
        directory.mkdir(parents=True, exist_ok=True)


def init_database():
    """
    Initialize the database schema

    Raises:
        Exception: Any failure to reach the store or create tables. The
            caller must not start serving requests in that case.
    """
    try:
        init_db()
    except Exception:
        logger.critical("Error initializing database", exc_info=True)
        raise


if __name__ == "__main__":
    ensure_directories()
    init_database()
