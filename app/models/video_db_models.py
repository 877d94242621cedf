"""
SQLAlchemy models for videos
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum
from sqlalchemy.sql import func
from app.database import Base
from app.models.material_db_models import CONTENT_STATUSES


class Video(Base):
    """Video model in database"""
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    video_url = Column(String(500), nullable=False)
    thumbnail = Column(String(255), nullable=True)
    duration = Column(Integer, nullable=False, server_default="0")  # seconds
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(Enum(*CONTENT_STATUSES, name="video_status"), nullable=False, server_default="published")
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Video(id={self.id}, title='{self.title[:30]}...')>"
