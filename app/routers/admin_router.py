"""
Admin API: authentication, dashboard stats and content CRUD
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.auth_models import AdminInfo, LoginRequest, ResetPasswordRequest
from app.models.category_models import CategoryPayload
from app.services import admin_service, category_service, material_service, video_service
from app.services.auth import create_access_token, get_current_admin
from app.services.file_utils import (
    UploadRejected,
    check_request_size,
    has_file,
    delete_files,
    save_files,
    validate_uploads,
)
from app.services.responses import admin_error
from app.services.validation import (
    ValidationError,
    blank_to_none,
    optional_int,
    parse_status,
    require,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


# -----------------------------------------------------------------------------
# Authentication (not token-gated)
# -----------------------------------------------------------------------------

@router.get("/check")
def check_admin(db: Session = Depends(get_db)):
    """
    Report whether an administrator exists

    Args:
        db: Database session

    Returns:
        dict: hasAdmin flag and admin count
    """
    try:
        count = admin_service.count_admins(db)
    except SQLAlchemyError as e:
        logger.exception("Check admin error")
        return admin_error(500, "Failed to check admin status", e)
    return {"hasAdmin": count > 0, "count": count}


@router.post("/init")
def init_admin(db: Session = Depends(get_db)):
    """
    Create the default administrator if none exists

    The configured password is echoed once so the operator can log in.

    Args:
        db: Database session

    Returns:
        dict: Created admin data, or the existing admin count
    """
    try:
        admin, existing = admin_service.initialize_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    except SQLAlchemyError as e:
        logger.exception("Init admin error")
        return admin_error(500, "Failed to create admin", e)

    if admin is None:
        return {
            "message": "Admin already exists",
            "adminExists": True,
            "count": existing
        }

    return {
        "message": "Default admin created successfully",
        "adminId": admin.id,
        "email": admin.email,
        "tempPassword": settings.ADMIN_PASSWORD
    }


@router.post("/login")
def login(credentials: Optional[LoginRequest] = None, db: Session = Depends(get_db)):
    """
    Administrator login

    Args:
        credentials: Email and password
        db: Database session

    Returns:
        dict: Bearer token and administrator data
    """
    if credentials is None or not credentials.email or not credentials.password:
        return admin_error(400, "Email and password are required")

    logger.info("Login attempt for email: %s", credentials.email)
    try:
        admin = admin_service.authenticate_admin(db, credentials.email, credentials.password)
    except SQLAlchemyError as e:
        logger.exception("Login error")
        return admin_error(500, "Login failed", e)

    if admin is None:
        return admin_error(401, "Invalid email or password")

    token = create_access_token(admin.id, admin.email)
    logger.info("Login successful for admin ID: %s", admin.id)

    return {
        "success": True,
        "token": token,
        "admin": AdminInfo.model_validate(admin).model_dump()
    }


@router.post("/reset-password")
def reset_password(body: Optional[ResetPasswordRequest] = None, db: Session = Depends(get_db)):
    """
    Overwrite an administrator's password (operator tool, not self-service)

    Args:
        body: Email and new password
        db: Database session

    Returns:
        dict: Confirmation message
    """
    if body is None or not body.email or not body.newPassword:
        return admin_error(400, "Email and new password are required")

    try:
        updated = admin_service.reset_password(db, body.email, body.newPassword)
    except SQLAlchemyError as e:
        logger.exception("Reset password error")
        return admin_error(500, "Failed to reset password", e)

    if not updated:
        return admin_error(404, "Admin not found")
    return {"message": "Password updated successfully"}


# -----------------------------------------------------------------------------
# Dashboard stats
# -----------------------------------------------------------------------------

@router.get("/stats")
def get_stats(db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    """
    Row counts for the dashboard

    Returns:
        dict: materials, videos, categories
    """
    try:
        return {
            "materials": material_service.count_materials(db),
            "videos": video_service.count_videos(db),
            "categories": category_service.count_categories(db)
        }
    except SQLAlchemyError:
        logger.exception("Stats error")
        return admin_error(500, "Failed to fetch stats")


# -----------------------------------------------------------------------------
# Categories
# -----------------------------------------------------------------------------

@router.get("/categories")
def list_categories(db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    """All categories, newest first"""
    try:
        return category_service.list_all_categories(db)
    except SQLAlchemyError:
        logger.exception("Fetch categories error")
        return admin_error(500, "Failed to fetch categories")


@router.post("/categories")
def create_category(
    payload: CategoryPayload,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin)
):
    """
    Create a category

    Args:
        payload: Name and description
        db: Database session
        admin: Current administrator

    Returns:
        dict: Created category
    """
    if not payload.name:
        return admin_error(400, "Category name is required")

    try:
        category = category_service.create_category(db, payload.name, payload.description)
    except SQLAlchemyError:
        logger.exception("Create category error")
        return admin_error(500, "Failed to create category")
    return {"id": category.id, "name": category.name, "description": category.description}


@router.put("/categories/{category_id}")
def update_category(
    category_id: int,
    payload: CategoryPayload,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin)
):
    """Overwrite a category's name and description"""
    if not payload.name:
        return admin_error(400, "Category name is required")

    try:
        category_service.update_category(db, category_id, payload.name, payload.description)
    except SQLAlchemyError:
        logger.exception("Update category error")
        return admin_error(500, "Failed to update category")
    return {"id": category_id, "name": payload.name, "description": payload.description}


@router.delete("/categories/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    """Delete a category; its content loses the category reference"""
    try:
        category_service.delete_category(db, category_id)
    except SQLAlchemyError:
        logger.exception("Delete category error")
        return admin_error(500, "Failed to delete category")
    return {"message": "Category deleted successfully"}


# -----------------------------------------------------------------------------
# Materials
# -----------------------------------------------------------------------------

@router.get("/materials")
def list_materials(db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    """All materials including drafts, with category names"""
    try:
        return material_service.list_all_materials(db)
    except SQLAlchemyError:
        logger.exception("Fetch materials error")
        return admin_error(500, "Failed to fetch materials")


@router.post("/materials")
def create_material(
    request: Request,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin)
):
    """
    Create a material with an optional image

    Args:
        request: HTTP request
        title: Material title
        content: Material text
        author: Author name
        category_id: Category ID
        status: published (default) or draft
        image: Image file
        db: Database session
        admin: Current administrator

    Returns:
        dict: Created material
    """
    saved = {}
    try:
        check_request_size(request.headers.get("content-length"))
        validate_uploads({"image": image})
        require(title=title, content=content)
        fields = {
            "title": title,
            "content": content,
            "author": blank_to_none(author),
            "category_id": optional_int(category_id, "category_id"),
            "status": parse_status(status),
        }

        saved = save_files({"image": image})
        fields["image"] = saved.get("image")
        material = material_service.create_material(db, **fields)
    except UploadRejected as e:
        return admin_error(e.status_code, e.message)
    except ValidationError as e:
        return admin_error(400, str(e))
    except SQLAlchemyError:
        logger.exception("Create material error")
        delete_files(saved.values())
        return admin_error(500, "Failed to create material")

    return {"id": material.id, **fields}


@router.put("/materials/{material_id}")
def update_material(
    material_id: int,
    request: Request,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin)
):
    """
    Overwrite a material

    All fields are overwritten (omitted optional ones become null); the
    stored image only changes when a new image is uploaded.

    Args:
        material_id: Material ID
        request: HTTP request
        title: Material title
        content: Material text
        author: Author name
        category_id: Category ID
        status: published (default) or draft
        image: New image file
        db: Database session
        admin: Current administrator

    Returns:
        dict: Submitted fields
    """
    saved = {}
    try:
        check_request_size(request.headers.get("content-length"))
        validate_uploads({"image": image})
        require(title=title, content=content)
        fields = {
            "title": title,
            "content": content,
            "author": blank_to_none(author),
            "category_id": optional_int(category_id, "category_id"),
            "status": parse_status(status),
        }

        saved = save_files({"image": image})
        material_service.update_material(db, material_id, image=saved.get("image"), **fields)
    except UploadRejected as e:
        return admin_error(e.status_code, e.message)
    except ValidationError as e:
        return admin_error(400, str(e))
    except SQLAlchemyError:
        logger.exception("Update material error")
        delete_files(saved.values())
        return admin_error(500, "Failed to update material")

    result = {"id": material_id, **fields}
    if "image" in saved:
        result["image"] = saved["image"]
    return result


@router.delete("/materials/{material_id}")
def delete_material(material_id: int, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    try:
        material_service.delete_material(db, material_id)
    except SQLAlchemyError:
        logger.exception("Delete material error")
        return admin_error(500, "Failed to delete material")
    return {"message": "Material deleted successfully"}


# -----------------------------------------------------------------------------
# Videos
# -----------------------------------------------------------------------------

@router.get("/videos")
def list_videos(db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    """All videos including drafts, with category names"""
    try:
        return video_service.list_all_videos(db)
    except SQLAlchemyError:
        logger.exception("Fetch videos error")
        return admin_error(500, "Failed to fetch videos")


@router.post("/videos")
def create_video(
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    video_url: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    video: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin)
):
    """
    Create a video from an external URL or an uploaded file

    Args:
        request: HTTP request
        title: Video title
        description: Video description
        video_url: External URL, ignored when a video file is uploaded
        duration: Length in seconds
        category_id: Category ID
        status: published (default) or draft
        video: Video file
        thumbnail: Thumbnail image
        db: Database session
        admin: Current administrator

    Returns:
        dict: Created video
    """
    files = {"video": video, "thumbnail": thumbnail}
    saved = {}
    try:
        check_request_size(request.headers.get("content-length"))
        validate_uploads(files)
        require(title=title, description=description)
        if not has_file(video):
            require(video_url=video_url)
        fields = {
            "title": title,
            "description": description,
            "duration": optional_int(duration, "duration", default=0),
            "category_id": optional_int(category_id, "category_id"),
            "status": parse_status(status),
        }

        saved = save_files(files)
        fields["video_url"] = saved.get("video", video_url)
        fields["thumbnail"] = saved.get("thumbnail")
        created = video_service.create_video(db, **fields)
    except UploadRejected as e:
        return admin_error(e.status_code, e.message)
    except ValidationError as e:
        return admin_error(400, str(e))
    except SQLAlchemyError:
        logger.exception("Create video error")
        delete_files(saved.values())
        return admin_error(500, "Failed to create video")

    return {"id": created.id, **fields}


@router.put("/videos/{video_id}")
def update_video(
    video_id: int,
    request: Request,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    video_url: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    video: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin)
):
    """
    Overwrite a video

    The video URL changes when a video file is uploaded, or else when a
    non-empty video_url is sent; the thumbnail only changes on upload.

    Args:
        video_id: Video ID
        request: HTTP request
        title: Video title
        description: Video description
        video_url: New external URL
        duration: Length in seconds
        category_id: Category ID
        status: published (default) or draft
        video: New video file
        thumbnail: New thumbnail image
        db: Database session
        admin: Current administrator

    Returns:
        dict: Submitted fields
    """
    files = {"video": video, "thumbnail": thumbnail}
    saved = {}
    try:
        check_request_size(request.headers.get("content-length"))
        validate_uploads(files)
        require(title=title, description=description)
        fields = {
            "title": title,
            "description": description,
            "duration": optional_int(duration, "duration", default=0),
            "category_id": optional_int(category_id, "category_id"),
            "status": parse_status(status),
        }

        saved = save_files(files)
        video_service.update_video(
            db,
            video_id,
            video_url=saved.get("video", blank_to_none(video_url)),
            thumbnail=saved.get("thumbnail"),
            **fields
        )
    except UploadRejected as e:
        return admin_error(e.status_code, e.message)
    except ValidationError as e:
        return admin_error(400, str(e))
    except SQLAlchemyError:
        logger.exception("Update video error")
        delete_files(saved.values())
        return admin_error(500, "Failed to update video")

    return {"id": video_id, **fields}


@router.delete("/videos/{video_id}")
def delete_video(video_id: int, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    try:
        video_service.delete_video(db, video_id)
    except SQLAlchemyError:
        logger.exception("Delete video error")
        return admin_error(500, "Failed to delete video")
    return {"message": "Video deleted successfully"}
