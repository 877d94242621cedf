"""
Public read-only API for categories, materials and videos
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.services import category_service, material_service, video_service
from app.services.responses import success, public_error
from app.services.validation import ValidationError, optional_int

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["public"])


@router.get("")
@router.get("/", include_in_schema=False)
def api_index():
    """
    API index

    Returns:
        dict: Service name, version and the public endpoints
    """
    return {
        "message": "Education Portal API",
        "version": "1.0.0",
        "endpoints": {
            "categories": {
                "GET /api/categories": "Get all categories",
                "GET /api/categories/:id": "Get category by ID"
            },
            "materials": {
                "GET /api/materials": "Get all published materials",
                "GET /api/materials/:id": "Get material by ID",
                "GET /api/materials/category/:categoryId": "Get materials by category",
                "GET /api/materials/author/:author": "Get materials by author",
                "GET /api/authors": "Get all authors"
            },
            "videos": {
                "GET /api/videos": "Get all published videos",
                "GET /api/videos/:id": "Get video by ID",
                "GET /api/videos/category/:categoryId": "Get videos by category"
            },
            "search": {
                "GET /api/search?q=keyword": "Search materials and videos"
            },
            "latest": {
                "GET /api/latest": "Get latest materials and videos"
            }
        }
    }


# -----------------------------------------------------------------------------
# Categories
# -----------------------------------------------------------------------------

@router.get("/categories")
def get_categories(db: Session = Depends(get_db)):
    """
    All categories with published content counts

    Args:
        db: Database session

    Returns:
        dict: Envelope with the categories ordered by name
    """
    try:
        return success(category_service.list_categories_with_counts(db))
    except SQLAlchemyError:
        logger.exception("Fetch categories error")
        return public_error(500, "Failed to fetch categories")


@router.get("/categories/{category_id}")
def get_category(category_id: int, db: Session = Depends(get_db)):
    """
    Category by ID

    Args:
        category_id: Category ID
        db: Database session

    Returns:
        dict: Envelope with the category, or 404
    """
    try:
        category = category_service.get_category(db, category_id)
    except SQLAlchemyError:
        logger.exception("Fetch category error")
        return public_error(500, "Failed to fetch category")

    if category is None:
        return public_error(404, "Category not found")
    return success(category)


# -----------------------------------------------------------------------------
# Materials
# -----------------------------------------------------------------------------

@router.get("/materials")
def get_materials(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    category: Optional[str] = None,
    author: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Published materials, filterable by category and author

    Args:
        page: Page number
        limit: Page size
        category: Category ID filter
        author: Author substring filter
        db: Database session

    Returns:
        dict: Envelope with materials and pagination
    """
    try:
        category_id = optional_int(category, "category")
    except ValidationError as e:
        return public_error(400, str(e))

    try:
        materials, pagination = material_service.list_published_materials(
            db, page=page, limit=limit, category_id=category_id, author=author
        )
    except SQLAlchemyError:
        logger.exception("Fetch materials error")
        return public_error(500, "Failed to fetch materials")
    return success(materials, pagination=pagination)


@router.get("/materials/category/{category_id}")
def get_materials_by_category(
    category_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db)
):
    """Published materials of one category"""
    try:
        materials, pagination = material_service.list_published_materials(
            db, page=page, limit=limit, category_id=category_id
        )
    except SQLAlchemyError:
        logger.exception("Fetch materials by category error")
        return public_error(500, "Failed to fetch materials")
    return success(materials, pagination=pagination)


@router.get("/materials/author/{author}")
def get_materials_by_author(
    author: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db)
):
    """Published materials whose author contains the given text"""
    try:
        materials, pagination = material_service.list_published_materials(
            db, page=page, limit=limit, author=author
        )
    except SQLAlchemyError:
        logger.exception("Fetch materials by author error")
        return public_error(500, "Failed to fetch materials by author")
    return success(materials, pagination=pagination)


@router.get("/materials/{material_id}")
def get_material(material_id: int, db: Session = Depends(get_db)):
    """
    Published material by ID

    Args:
        material_id: Material ID
        db: Database session

    Returns:
        dict: Envelope with the material, or 404 for unknown and draft materials
    """
    try:
        material = material_service.get_published_material(db, material_id)
    except SQLAlchemyError:
        logger.exception("Fetch material error")
        return public_error(500, "Failed to fetch material")

    if material is None:
        return public_error(404, "Material not found")
    return success(material)


@router.get("/authors")
def get_authors(db: Session = Depends(get_db)):
    """Authors of published materials with counts"""
    try:
        return success(material_service.list_authors(db))
    except SQLAlchemyError:
        logger.exception("Fetch authors error")
        return public_error(500, "Failed to fetch authors")


# -----------------------------------------------------------------------------
# Videos
# -----------------------------------------------------------------------------

@router.get("/videos")
def get_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    category: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Published videos, filterable by category

    Args:
        page: Page number
        limit: Page size
        category: Category ID filter
        db: Database session

    Returns:
        dict: Envelope with videos and pagination
    """
    try:
        category_id = optional_int(category, "category")
    except ValidationError as e:
        return public_error(400, str(e))

    try:
        videos, pagination = video_service.list_published_videos(
            db, page=page, limit=limit, category_id=category_id
        )
    except SQLAlchemyError:
        logger.exception("Fetch videos error")
        return public_error(500, "Failed to fetch videos")
    return success(videos, pagination=pagination)


@router.get("/videos/category/{category_id}")
def get_videos_by_category(
    category_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db)
):
    """Published videos of one category"""
    try:
        videos, pagination = video_service.list_published_videos(
            db, page=page, limit=limit, category_id=category_id
        )
    except SQLAlchemyError:
        logger.exception("Fetch videos by category error")
        return public_error(500, "Failed to fetch videos")
    return success(videos, pagination=pagination)


@router.get("/videos/{video_id}")
def get_video(video_id: int, db: Session = Depends(get_db)):
    """Published video by ID"""
    try:
        video = video_service.get_published_video(db, video_id)
    except SQLAlchemyError:
        logger.exception("Fetch video error")
        return public_error(500, "Failed to fetch video")

    if video is None:
        return public_error(404, "Video not found")
    return success(video)


# -----------------------------------------------------------------------------
# Search and home screen
# -----------------------------------------------------------------------------

@router.get("/search")
def search(
    q: Optional[str] = None,
    content_type: Optional[str] = Query(None, alias="type", pattern="^(materials|videos)$"),
    category: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db)
):
    """
    Search published materials and videos

    Each content type is paginated on its own with the same page and limit.

    Args:
        q: Search text (required)
        content_type: Restrict to "materials" or "videos" (query parameter "type")
        category: Category ID filter
        page: Page number
        limit: Page size
        db: Database session

    Returns:
        dict: Envelope with {materials, videos}, the query and page/limit
    """
    if not q:
        return public_error(400, "Search query is required")
    try:
        category_id = optional_int(category, "category")
    except ValidationError as e:
        return public_error(400, str(e))

    results = {"materials": [], "videos": []}
    try:
        if content_type in (None, "materials"):
            results["materials"] = material_service.search_materials(
                db, q, page=page, limit=limit, category_id=category_id
            )
        if content_type in (None, "videos"):
            results["videos"] = video_service.search_videos(
                db, q, page=page, limit=limit, category_id=category_id
            )
    except SQLAlchemyError:
        logger.exception("Search error")
        return public_error(500, "Search failed")

    return success(results, pagination={"page": page, "limit": limit}, query=q)


@router.get("/latest")
def get_latest(limit: int = Query(5, ge=1), db: Session = Depends(get_db)):
    """
    Newest published materials and videos for the home screen

    Args:
        limit: Number of items of each type
        db: Database session

    Returns:
        dict: Envelope with {materials, videos}
    """
    try:
        data = {
            "materials": material_service.latest_materials(db, limit),
            "videos": video_service.latest_videos(db, limit),
        }
    except SQLAlchemyError:
        logger.exception("Fetch latest content error")
        return public_error(500, "Failed to fetch latest content")
    return success(data)
