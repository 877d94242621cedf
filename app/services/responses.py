"""
JSON envelopes for the public and admin APIs

Public routes answer {success, data, pagination?} / {success: false, error};
admin routes answer bare objects / {error}.
"""
import traceback
from typing import Any, Optional

from fastapi.responses import JSONResponse
from app.config import settings


def success(data: Any, pagination: Optional[dict] = None, **extra) -> dict:
    """Public success envelope"""
    body = {"success": True, "data": data}
    body.update(extra)
    if pagination is not None:
        body["pagination"] = pagination
    return body


def public_error(status_code: int, message: str) -> JSONResponse:
    """Public failure envelope"""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def admin_error(status_code: int, message: str, exc: Optional[BaseException] = None) -> JSONResponse:
    """
    Admin failure body

    Args:
        status_code: HTTP status
        message: Client-facing message
        exc: Cause; in development its message and stack trace are added,
            elsewhere it is only logged by the caller

    Returns:
        JSONResponse: {error[, details][, stack]}
    """
    content = {"error": message}
    if exc is not None and settings.is_development:
        content["details"] = str(exc)
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=content)
