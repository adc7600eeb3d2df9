"""Video model"""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from videotube.database import Base
from videotube.utils.identifiers import generate_id


class Video(Base):
    """Video model - a published video owned by a channel (user)"""

    __tablename__ = "videos"

    id = Column(String(36), primary_key=True, default=generate_id)
    owner_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    video_file = Column(String(1024), nullable=False)  # asset store URL
    thumbnail = Column(String(1024), nullable=True)
    duration = Column(Float, default=0, nullable=False)  # seconds
    views = Column(Integer, default=0, nullable=False)
    is_published = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User")
