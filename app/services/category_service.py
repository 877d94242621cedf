"""
Service for working with categories in the database
"""
from typing import Optional, List

from sqlalchemy import and_, distinct, func
from sqlalchemy.orm import Session

from app.models.category_db_models import Category
from app.models.material_db_models import Material
from app.models.video_db_models import Video
from app.services.content_query import model_to_dict


def list_categories_with_counts(db: Session) -> List[dict]:
    """
    All categories with their published material and video counts

    Categories without content are kept by the outer joins.

    Args:
        db: Database session

    Returns:
        List[dict]: Categories ordered by name
    """
    rows = (
        db.query(
            Category,
            func.count(distinct(Material.id)).label("material_count"),
            func.count(distinct(Video.id)).label("video_count"),
        )
        .outerjoin(Material, and_(Material.category_id == Category.id, Material.status == "published"))
        .outerjoin(Video, and_(Video.category_id == Category.id, Video.status == "published"))
        .group_by(Category.id)
        .order_by(Category.name, Category.id)
        .all()
    )
    return [
        {**model_to_dict(category), "material_count": material_count, "video_count": video_count}
        for category, material_count, video_count in rows
    ]


def get_category(db: Session, category_id: int) -> Optional[dict]:
    """
    Get category by ID

    Args:
        db: Database session
        category_id: Category ID

    Returns:
        Optional[dict]: Category or None
    """
    category = db.query(Category).filter(Category.id == category_id).first()
    return model_to_dict(category) if category else None


def list_all_categories(db: Session) -> List[dict]:
    """All categories, newest first"""
    categories = db.query(Category).order_by(Category.created_at.desc(), Category.id.desc()).all()
    return [model_to_dict(category) for category in categories]


def create_category(db: Session, name: str, description: Optional[str] = None) -> Category:
    """
    Create a new category

    Args:
        db: Database session
        name: Category name
        description: Category description

    Returns:
        Category: Created category
    """
    category = Category(name=name, description=description)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(db: Session, category_id: int, name: str, description: Optional[str]) -> None:
    """
    Overwrite a category's name and description

    Args:
        db: Database session
        category_id: Category ID
        name: New name
        description: New description, None clears it
    """
    db.query(Category).filter(Category.id == category_id).update(
        {Category.name: name, Category.description: description},
        synchronize_session=False
    )
    db.commit()


def delete_category(db: Session, category_id: int) -> None:
    """
    Delete a category

    Materials and videos keep their rows; the foreign key nulls
    their category_id.

    Args:
        db: Database session
        category_id: Category ID
    """
    db.query(Category).filter(Category.id == category_id).delete(synchronize_session=False)
    db.commit()


def count_categories(db: Session) -> int:
    return db.query(func.count(Category.id)).scalar() or 0
