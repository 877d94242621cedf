"""
SQLAlchemy database setup
"""
import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """
    Build the database URL

    DATABASE_URL wins when set, otherwise the MySQL URL is assembled
    from the DB_* variables.

    Returns:
        str: SQLAlchemy database URL
    """
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    return (
        f"mysql+pymysql://{settings.DB_USER}:{settings.DB_PASSWORD}"
        f"@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
    )


def _is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def _engine_options(url: str) -> dict:
    # Bound parameters stay out of error messages (password hashes, emails)
    if _is_sqlite(url):
        return {"connect_args": {"check_same_thread": False}, "hide_parameters": True}
    # Fixed-size pool; waiters give up after DB_POOL_TIMEOUT seconds
    return {
        "hide_parameters": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


DATABASE_URL = get_database_url()

# Database engine
engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

if _is_sqlite(DATABASE_URL):
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE SET NULL unless foreign keys are switched on
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency that provides a database session

    Yields:
        Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_database_if_missing(url: str = DATABASE_URL) -> None:
    """
    Create the MySQL database named in the URL if it does not exist yet

    Other backends create their database on first connect or are
    provisioned externally, so nothing happens for them.

    Args:
        url: Database URL
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "mysql" or not parsed.database:
        return

    server_engine = create_engine(parsed.set(database=None))
    try:
        with server_engine.connect() as conn:
            conn.execute(text(f"CREATE DATABASE IF NOT EXISTS `{parsed.database}`"))
            conn.commit()
    finally:
        server_engine.dispose()


def init_db():
    """
    Initialize the database - create the database and all tables
    """
    # Import models so they are registered on Base
    from app.models import admin_db_models, category_db_models, material_db_models, video_db_models
    create_database_if_missing()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")
