"""
Service for working with administrators in the database
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.admin_db_models import Admin
from app.services.auth import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def count_admins(db: Session) -> int:
    """
    Count administrators

    Args:
        db: Database session

    Returns:
        int: Number of admin rows
    """
    return db.query(func.count(Admin.id)).scalar() or 0


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    """
    Get administrator by email

    Args:
        db: Database session
        email: Administrator email

    Returns:
        Optional[Admin]: Administrator or None
    """
    return db.query(Admin).filter(Admin.email == email).first()


def create_admin(db: Session, email: str, password: str, name: str = "Administrator") -> Admin:
    """
    Create an administrator with a hashed password

    Args:
        db: Database session
        email: Unique email
        password: Plain text password
        name: Display name

    Returns:
        Admin: Created administrator
    """
    admin = Admin(email=email, password=get_password_hash(password), name=name)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Admin created with ID: %s", admin.id)
    return admin


def initialize_admin(db: Session, email: str, password: str) -> tuple[Optional[Admin], int]:
    """
    Create the default administrator unless one already exists

    Args:
        db: Database session
        email: Default admin email
        password: Default admin password

    Returns:
        (created admin or None, number of admins that already existed)
    """
    existing = count_admins(db)
    if existing > 0:
        return None, existing

    logger.info("Creating admin with email: %s", email)
    return create_admin(db, email, password), 0


def authenticate_admin(db: Session, email: str, password: str) -> Optional[Admin]:
    """
    Check administrator credentials

    Unknown email and wrong password both return None, so callers
    cannot tell the two apart.

    Args:
        db: Database session
        email: Email
        password: Plain text password

    Returns:
        Optional[Admin]: Administrator if the credentials are valid
    """
    admin = get_admin_by_email(db, email)
    if admin is None:
        logger.info("No admin found with email: %s", email)
        return None
    if not verify_password(password, admin.password):
        logger.info("Invalid password for admin ID: %s", admin.id)
        return None
    return admin


def reset_password(db: Session, email: str, new_password: str) -> bool:
    """
    Overwrite an administrator's password hash

    Args:
        db: Database session
        email: Administrator email
        new_password: New plain text password

    Returns:
        bool: False if no administrator has this email
    """
    updated = (
        db.query(Admin)
        .filter(Admin.email == email)
        .update({Admin.password: get_password_hash(new_password)}, synchronize_session=False)
    )
    db.commit()
    if updated:
        logger.info("Password reset for admin %s", email)
    return updated > 0
