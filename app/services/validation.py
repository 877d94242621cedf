"""
Normalization of form and query fields
"""
from typing import Optional

from app.models.material_db_models import CONTENT_STATUSES


class ValidationError(ValueError):
    """Missing or malformed input, reported as 400"""


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Empty form values count as absent"""
    if value is None or value == "":
        return None
    return value


def require(**fields) -> None:
    """
    Check that required fields are present

    Raises:
        ValidationError: Naming every missing field
    """
    missing = [name for name, value in fields.items() if blank_to_none(value) is None]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def optional_int(value, field: str, default: Optional[int] = None) -> Optional[int]:
    """
    Parse an optional integer form field

    Raises:
        ValidationError: If the value is not an integer
    """
    value = blank_to_none(value)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Field '{field}' must be an integer")


def parse_status(value: Optional[str]) -> str:
    """
    Content status, defaulting to published

    Raises:
        ValidationError: If the status is not one of CONTENT_STATUSES
    """
    value = blank_to_none(value)
    if value is None:
        return "published"
    if value not in CONTENT_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(CONTENT_STATUSES)}")
    return value
