"""Video schemas"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class VideoResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    description: Optional[str]
    video_file: str
    thumbnail: Optional[str]
    duration: float
    views: int
    is_published: bool
    created_at: datetime

    class Config:
        from_attributes = True
