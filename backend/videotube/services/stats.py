"""Read-only channel statistics derived from videos, reactions and subscriptions"""
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from videotube.errors import InvalidArgument, NotFound
from videotube.models.like import Like, TargetKind
from videotube.models.subscription import Subscription
from videotube.models.user import User
from videotube.models.video import Video
from videotube.schemas.dashboard import ChannelProfile, ChannelStats
from videotube.utils.identifiers import canonical_id


def channel_stats(db: Session, channel_id: str) -> ChannelStats:
    """
    Dashboard counters for one channel.

    Each figure is its own query, so under concurrent writes they may disagree
    with each other slightly.
    """
    channel_id = canonical_id(channel_id)
    if channel_id is None:
        raise InvalidArgument("Invalid channel ID")

    total_videos = db.query(func.count(Video.id)).filter(Video.owner_id == channel_id).scalar()
    total_views = db.query(func.coalesce(func.sum(Video.views), 0)).filter(Video.owner_id == channel_id).scalar()
    total_subscribers = (
        db.query(func.count(Subscription.id)).filter(Subscription.channel_id == channel_id).scalar()
    )
    # Reactions join to videos, so reactions on deleted videos drop out
    total_likes = (
        db.query(func.count(Like.id))
        .join(Video, Video.id == Like.target_id)
        .filter(Like.target_type == TargetKind.VIDEO.value, Video.owner_id == channel_id)
        .scalar()
    )

    return ChannelStats(
        total_videos=total_videos or 0,
        total_views=int(total_views or 0),
        total_subscribers=total_subscribers or 0,
        total_likes=total_likes or 0,
    )


def channel_profile(db: Session, username: str, viewer_id: Optional[str] = None) -> ChannelProfile:
    """Public channel page: profile fields plus subscription counts"""
    if not username or not username.strip():
        raise InvalidArgument("Username is required")

    channel = db.query(User).filter(User.username == username.strip().lower()).first()
    if not channel:
        raise NotFound("Channel not found")

    subscribers_count = (
        db.query(func.count(Subscription.id)).filter(Subscription.channel_id == channel.id).scalar()
    )
    subscribed_to_count = (
        db.query(func.count(Subscription.id)).filter(Subscription.subscriber_id == channel.id).scalar()
    )

    is_subscribed = False
    if viewer_id:
        is_subscribed = db.query(Subscription.id).filter(
            Subscription.channel_id == channel.id,
            Subscription.subscriber_id == viewer_id,
        ).first() is not None

    return ChannelProfile(
        id=channel.id,
        username=channel.username,
        full_name=channel.full_name,
        email=channel.email,
        avatar=channel.avatar,
        cover_image=channel.cover_image,
        subscribers_count=subscribers_count or 0,
        subscribed_to_count=subscribed_to_count or 0,
        is_subscribed_by_viewer=is_subscribed,
    )
