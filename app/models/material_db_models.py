"""
SQLAlchemy models for materials (articles)
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum
from sqlalchemy.sql import func
from app.database import Base

CONTENT_STATUSES = ("published", "draft")


class Material(Base):
    """Material model in database"""
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String(255), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    image = Column(String(255), nullable=True)
    status = Column(Enum(*CONTENT_STATUSES, name="material_status"), nullable=False, server_default="published")
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Material(id={self.id}, title='{self.title[:30]}...')>"
