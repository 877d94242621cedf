#!/usr/bin/env python3
"""
Reset an administrator's password from the command line

Usage:
    python scripts/reset_admin.py --email admin@example.com --password newpass
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.config import settings
from app.database import SessionLocal
from app.services.admin_service import get_admin_by_email, reset_password
from app.services.auth import verify_password


def reset_admin_password(email: str, new_password: str) -> int:
    """
    Overwrite the password and check the stored hash

    Args:
        email: Administrator email
        new_password: New password

    Returns:
        int: Process exit code
    """
    db = SessionLocal()
    try:
        print("Hashing password...")
        if not reset_password(db, email, new_password):
            print(f"Admin not found: {email}")
            return 1

        print("Password updated successfully!")
        print(f"Email: {email}")

        admin = get_admin_by_email(db, email)
        is_valid = admin is not None and verify_password(new_password, admin.password)
        print(f"Password verification test: {'PASSED' if is_valid else 'FAILED'}")
        return 0 if is_valid else 1
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Reset an administrator password")
    parser.add_argument("--email", default=settings.ADMIN_EMAIL, help="administrator email")
    parser.add_argument("--password", default=settings.ADMIN_PASSWORD, help="new password")
    args = parser.parse_args(argv)
    return reset_admin_password(args.email, args.password)


if __name__ == "__main__":
    sys.exit(main())
