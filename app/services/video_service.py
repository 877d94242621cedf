"""
Service for working with videos in the database
"""
from typing import Optional, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.video_db_models import Video
from app.services import content_query as cq


def list_published_videos(db: Session, page: int = 1, limit: int = 10,
                          category_id: Optional[int] = None) -> tuple[List[dict], dict]:
    """
    Published videos, newest first, one page at a time

    Args:
        db: Database session
        page: 1-indexed page
        limit: Page size
        category_id: Restrict to one category

    Returns:
        (videos, pagination)
    """
    predicates = cq.content_predicates(Video, category_id=category_id)
    return cq.paginate(db, Video, predicates, page, limit)


def get_published_video(db: Session, video_id: int) -> Optional[dict]:
    """Published video by ID, None if absent or draft"""
    return cq.fetch_one(db, Video, video_id)


def search_videos(db: Session, term: str, page: int = 1, limit: int = 10,
                  category_id: Optional[int] = None) -> List[dict]:
    """
    Search published videos by title and description

    Args:
        db: Database session
        term: Search term
        page: 1-indexed page
        limit: Page size
        category_id: Restrict to one category

    Returns:
        List[dict]: Matching videos tagged with content_type
    """
    predicates = cq.content_predicates(Video, category_id=category_id, term=term)
    return cq.fetch_page(db, Video, predicates, page, limit, with_content_type=True)


def latest_videos(db: Session, limit: int = 5) -> List[dict]:
    return cq.fetch_latest(db, Video, limit)


def list_all_videos(db: Session) -> List[dict]:
    return cq.fetch_all(db, Video)


def create_video(db: Session, title: str, description: str, video_url: str,
                 thumbnail: Optional[str] = None, duration: int = 0,
                 category_id: Optional[int] = None, status: str = "published") -> Video:
    """
    Create a new video

    Args:
        db: Database session
        title: Video title
        description: Video description
        video_url: External URL or web path of the uploaded file
        thumbnail: Web path of the uploaded thumbnail
        duration: Length in seconds
        category_id: Category ID
        status: published or draft

    Returns:
        Video: Created video
    """
    video = Video(
        title=title,
        description=description,
        video_url=video_url,
        thumbnail=thumbnail,
        duration=duration,
        category_id=category_id,
        status=status
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


def update_video(db: Session, video_id: int, title: str, description: str, duration: int,
                 category_id: Optional[int], status: str,
                 video_url: Optional[str] = None, thumbnail: Optional[str] = None) -> None:
    """
    Overwrite a video in one UPDATE statement

    video_url and thumbnail are only written when a value is given;
    everything else is always overwritten.

    Args:
        db: Database session
        video_id: Video ID
        title: Video title
        description: Video description
        duration: Length in seconds
        category_id: Category ID, None clears it
        status: published or draft
        video_url: New URL or uploaded file path
        thumbnail: Web path of a newly uploaded thumbnail
    """
    values = {
        Video.title: title,
        Video.description: description,
        Video.duration: duration,
        Video.category_id: category_id,
        Video.status: status,
    }
    if video_url:
        values[Video.video_url] = video_url
    if thumbnail:
        values[Video.thumbnail] = thumbnail

    db.query(Video).filter(Video.id == video_id).update(values, synchronize_session=False)
    db.commit()


def delete_video(db: Session, video_id: int) -> None:
    db.query(Video).filter(Video.id == video_id).delete(synchronize_session=False)
    db.commit()


def count_videos(db: Session) -> int:
    return db.query(func.count(Video.id)).scalar() or 0
