"""
Service for working with materials in the database
"""
from typing import Optional, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.material_db_models import Material
from app.services import content_query as cq


def list_published_materials(db: Session, page: int = 1, limit: int = 10,
                             category_id: Optional[int] = None,
                             author: Optional[str] = None) -> tuple[List[dict], dict]:
    """
    Published materials, newest first, one page at a time

    Args:
        db: Database session
        page: 1-indexed page
        limit: Page size
        category_id: Restrict to one category
        author: Case-insensitive author substring

    Returns:
        (materials, pagination)
    """
    predicates = cq.content_predicates(Material, category_id=category_id, author=author)
    return cq.paginate(db, Material, predicates, page, limit)


def get_published_material(db: Session, material_id: int) -> Optional[dict]:
    """
    Get a published material by ID

    Args:
        db: Database session
        material_id: Material ID

    Returns:
        Optional[dict]: Material or None if absent or draft
    """
    return cq.fetch_one(db, Material, material_id)


def list_authors(db: Session) -> List[dict]:
    """
    Authors of published materials with their material count

    Args:
        db: Database session

    Returns:
        List[dict]: author, material_count, latest_material; most prolific first
    """
    material_count = func.count(Material.id).label("material_count")
    rows = (
        db.query(Material.author, material_count, func.max(Material.created_at).label("latest_material"))
        .filter(Material.author.isnot(None), Material.author != "", Material.status == "published")
        .group_by(Material.author)
        .order_by(material_count.desc(), Material.author)
        .all()
    )
    return [
        {"author": author, "material_count": count, "latest_material": latest}
        for author, count, latest in rows
    ]


def search_materials(db: Session, term: str, page: int = 1, limit: int = 10,
                     category_id: Optional[int] = None) -> List[dict]:
    """
    Search published materials by title, content and author

    Args:
        db: Database session
        term: Search term
        page: 1-indexed page
        limit: Page size
        category_id: Restrict to one category

    Returns:
        List[dict]: Matching materials tagged with content_type
    """
    predicates = cq.content_predicates(Material, category_id=category_id, term=term)
    return cq.fetch_page(db, Material, predicates, page, limit, with_content_type=True)


def latest_materials(db: Session, limit: int = 5) -> List[dict]:
    return cq.fetch_latest(db, Material, limit)


def list_all_materials(db: Session) -> List[dict]:
    """All materials including drafts, newest first"""
    return cq.fetch_all(db, Material)


def create_material(db: Session, title: str, content: str, author: Optional[str] = None,
                    category_id: Optional[int] = None, image: Optional[str] = None,
                    status: str = "published") -> Material:
    """
    Create a new material

    Args:
        db: Database session
        title: Material title
        content: Material text
        author: Author name
        category_id: Category ID
        image: Web path of the uploaded image
        status: published or draft

    Returns:
        Material: Created material
    """
    material = Material(
        title=title,
        content=content,
        author=author,
        category_id=category_id,
        image=image,
        status=status
    )
    db.add(material)
    db.commit()
    db.refresh(material)
    return material


def update_material(db: Session, material_id: int, title: str, content: str,
                    author: Optional[str], category_id: Optional[int], status: str,
                    image: Optional[str] = None) -> None:
    """
    Overwrite a material in one UPDATE statement

    Every editable column is written. The image path is only written
    when a new image was uploaded.

    Args:
        db: Database session
        material_id: Material ID
        title: Material title
        content: Material text
        author: Author name, None clears it
        category_id: Category ID, None clears it
        status: published or draft
        image: Web path of a newly uploaded image
    """
    values = {
        Material.title: title,
        Material.content: content,
        Material.author: author,
        Material.category_id: category_id,
        Material.status: status,
    }
    if image:
        values[Material.image] = image

    db.query(Material).filter(Material.id == material_id).update(values, synchronize_session=False)
    db.commit()


def delete_material(db: Session, material_id: int) -> None:
    """
    Delete a material; unknown IDs are ignored

    Args:
        db: Database session
        material_id: Material ID
    """
    db.query(Material).filter(Material.id == material_id).delete(synchronize_session=False)
    db.commit()


def count_materials(db: Session) -> int:
    return db.query(func.count(Material.id)).scalar() or 0
