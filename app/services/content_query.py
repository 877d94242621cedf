"""
Query construction shared by the material and video services

Every listing is described by one list of AND-composed predicates. The
same list filters the row query and the count query, so the reported
total always matches the rows a page is cut from.
"""
import math
from typing import Any, Iterable, Optional

from sqlalchemy import func, literal, or_
from sqlalchemy.orm import Session

from app.models.category_db_models import Category
from app.models.material_db_models import Material
from app.models.video_db_models import Video

# Columns matched by free-text search, per content model
SEARCH_COLUMNS = {
    Material: ("title", "content", "author"),
    Video: ("title", "description"),
}

# Discriminator attached to rows of mixed listings
CONTENT_TYPES = {
    Material: "material",
    Video: "video",
}


def contains(column, value: str):
    """Case-insensitive substring match"""
    return column.ilike(f"%{value}%")


def content_predicates(
    model,
    published_only: bool = True,
    category_id: Optional[int] = None,
    author: Optional[str] = None,
    term: Optional[str] = None,
) -> list:
    """
    Build the filter predicates for a content listing

    Args:
        model: Material or Video
        published_only: Hide drafts
        category_id: Restrict to one category
        author: Author substring (materials only)
        term: Search term matched against SEARCH_COLUMNS

    Returns:
        list: SQLAlchemy boolean clauses, AND-composed by the caller
    """
    predicates = []
    if published_only:
        predicates.append(model.status == "published")
    if category_id is not None:
        predicates.append(model.category_id == category_id)
    if author:
        predicates.append(contains(model.author, author))
    if term:
        predicates.append(or_(*(contains(getattr(model, name), term) for name in SEARCH_COLUMNS[model])))
    return predicates


def row_query(db: Session, model, predicates: Iterable, with_content_type: bool = False):
    """
    Rows of a content model joined with their category name, newest first

    Args:
        db: Database session
        model: Material or Video
        predicates: Filter clauses
        with_content_type: Add the content_type discriminator column

    Returns:
        Query yielding (model, category_name[, content_type]) tuples
    """
    columns = [model, Category.name.label("category_name")]
    if with_content_type:
        columns.append(literal(CONTENT_TYPES[model]).label("content_type"))

    return (
        db.query(*columns)
        .outerjoin(Category, model.category_id == Category.id)
        .filter(*predicates)
        .order_by(model.created_at.desc(), model.id.desc())
    )


def count_query(db: Session, model, predicates: Iterable) -> int:
    """
    Count rows matching the same predicates as row_query

    Args:
        db: Database session
        model: Material or Video
        predicates: Filter clauses

    Returns:
        int: Number of matching rows
    """
    return db.query(func.count(model.id)).filter(*predicates).scalar() or 0


def page_offset(page: int, limit: int) -> int:
    """Offset of a 1-indexed page"""
    return (page - 1) * limit


def build_pagination(total: int, page: int, limit: int) -> dict:
    """
    Pagination metadata for a listing

    Args:
        total: Rows matching the filter
        page: 1-indexed page number
        limit: Page size

    Returns:
        dict: total, page, limit, pages
    """
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if limit else 0,
    }


def model_to_dict(obj) -> dict:
    """Column values of an ORM object"""
    return {column.name: getattr(obj, column.name) for column in obj.__table__.columns}


def serialize_row(row) -> dict:
    """
    Flatten a row_query result into a dict

    Args:
        row: (model, category_name[, content_type]) tuple

    Returns:
        dict: Model columns plus the extra labelled columns
    """
    obj, *extra = row
    data = model_to_dict(obj)
    data["category_name"] = extra[0]
    if len(extra) > 1:
        data["content_type"] = extra[1]
    return data


def fetch_page(
    db: Session,
    model,
    predicates: list,
    page: int,
    limit: int,
    with_content_type: bool = False,
) -> list[dict[str, Any]]:
    """
    One page of serialized rows

    Args:
        db: Database session
        model: Material or Video
        predicates: Filter clauses
        page: 1-indexed page number
        limit: Page size
        with_content_type: Add the content_type discriminator

    Returns:
        list: Serialized rows
    """
    rows = (
        row_query(db, model, predicates, with_content_type)
        .limit(limit)
        .offset(page_offset(page, limit))
        .all()
    )
    return [serialize_row(row) for row in rows]


def paginate(db: Session, model, predicates: list, page: int, limit: int) -> tuple[list[dict], dict]:
    """
    A page of rows plus pagination metadata computed from the same predicates

    Args:
        db: Database session
        model: Material or Video
        predicates: Filter clauses
        page: 1-indexed page number
        limit: Page size

    Returns:
        (rows, pagination)
    """
    rows = fetch_page(db, model, predicates, page, limit)
    total = count_query(db, model, predicates)
    return rows, build_pagination(total, page, limit)


def fetch_one(db: Session, model, item_id: int, published_only: bool = True) -> Optional[dict]:
    """
    A single serialized row by ID

    Args:
        db: Database session
        model: Material or Video
        item_id: Row ID
        published_only: Hide drafts

    Returns:
        Optional[dict]: Serialized row or None
    """
    predicates = [model.id == item_id] + content_predicates(model, published_only=published_only)
    row = row_query(db, model, predicates).first()
    return serialize_row(row) if row else None


def fetch_latest(db: Session, model, limit: int) -> list[dict]:
    """Newest published rows tagged with their content type"""
    return fetch_page(db, model, content_predicates(model), 1, limit, with_content_type=True)


def fetch_all(db: Session, model) -> list[dict]:
    """All rows including drafts, newest first"""
    return [serialize_row(row) for row in row_query(db, model, []).all()]
