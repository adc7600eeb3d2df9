"""Channel dashboard endpoints"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.user import User
from videotube.schemas.dashboard import ChannelStats
from videotube.services.stats import channel_stats

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=ChannelStats)
def get_channel_stats(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Counters for the caller's own channel

    Returns:
      - total_videos: videos owned by the channel
      - total_views: sum of view counters over those videos
      - total_subscribers: subscriptions to the channel
      - total_likes: likes on the channel's videos
    """
    return channel_stats(db, user.id)
