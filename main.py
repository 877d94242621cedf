"""
Main FastAPI application file
"""
import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.init_db import ensure_directories, init_database
from app.logging_utils import configure_logging
from app.routers import admin_router, api_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Education Portal API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _is_admin_api(request: Request) -> bool:
    return request.url.path.startswith("/api/admin")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Render HTTP errors as {error}

    Args:
        request: HTTP request
        exc: HTTP exception

    Returns:
        JSONResponse: "Route not found" for unmatched routes, the detail otherwise
    """
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Report malformed parameters and bodies as 400

    Args:
        request: HTTP request
        exc: Validation error

    Returns:
        JSONResponse: {error} on admin routes, {success: false, error} elsewhere
    """
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"Invalid value for '{location}': {errors[0].get('msg')}"
    else:
        message = "Invalid request"

    content = {"error": message}
    if not _is_admin_api(request):
        content = {"success": False, "error": message}
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catch-all for errors no route handled

    Args:
        request: HTTP request
        exc: Unhandled exception

    Returns:
        JSONResponse: Generic 500, with the stack trace in development
    """
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    content = {"error": "Something went wrong!"}
    if settings.is_development:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@app.on_event("startup")
async def startup_event():
    """
    Initialize the database when the application starts

    A failure propagates and aborts startup.
    """
    init_database()
    logger.info("Admin Dashboard: http://localhost:%s/admin", settings.PORT)
    logger.info("API Documentation: http://localhost:%s/api", settings.PORT)


# Static files: uploads and the admin dashboard
ensure_directories()
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
app.mount("/admin", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="admin")

# Routes
app.include_router(admin_router.router)
app.include_router(api_router.router)


@app.get("/", include_in_schema=False)
def root():
    """
    Service index

    Returns:
        dict: Service name, version and entry points
    """
    return {
        "message": "Education Portal API",
        "version": "1.0.0",
        "endpoints": {
            "admin": "/admin",
            "api": "/api",
            "materials": "/api/materials",
            "videos": "/api/videos",
            "categories": "/api/categories"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
