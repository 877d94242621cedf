"""
Migration: add the author column to the materials table

Databases created before materials carried an author lack this column;
fresh databases get it from the model and need nothing.
"""
import logging

from sqlalchemy import inspect, text

from app.database import engine

logger = logging.getLogger(__name__)


def migrate():
    """
    Run the migration

    Returns:
        bool: True if the column was added
    """
    inspector = inspect(engine)
    if not inspector.has_table("materials"):
        logger.info("Table materials not found, nothing to migrate")
        return False

    columns = [column["name"] for column in inspector.get_columns("materials")]
    if "author" in columns:
        logger.info("Column author already exists, nothing to migrate")
        return False

    with engine.begin() as conn:
        conn.execute(text("ALTER TABLE materials ADD COLUMN author VARCHAR(255) NULL"))
    logger.info("Migration completed: author column added to materials")
    return True


if __name__ == "__main__":
    from app.logging_utils import configure_logging
    configure_logging()
    migrate()
