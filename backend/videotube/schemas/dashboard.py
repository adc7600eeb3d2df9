"""Channel statistics and profile schemas"""
from typing import Optional

from pydantic import BaseModel, Field


class ChannelStats(BaseModel):
    """Independent, eventually-consistent channel counters"""

    total_videos: int = 0
    total_views: int = 0
    total_subscribers: int = 0
    total_likes: int = 0


class ChannelProfile(BaseModel):
    id: str
    username: str
    full_name: str
    email: str
    avatar: Optional[str]
    cover_image: Optional[str]
    subscribers_count: int = 0
    subscribed_to_count: int = 0
    is_subscribed_by_viewer: bool = Field(False, description="False when no viewer is authenticated")
