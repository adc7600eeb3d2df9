"""Reaction and subscription schemas"""
from datetime import datetime

from pydantic import BaseModel

from videotube.schemas.user import ChannelSummary


class ReactionToggleResponse(BaseModel):
    reacted: bool


class SubscriptionToggleResponse(BaseModel):
    subscribed: bool


class SubscriberResponse(BaseModel):
    """One subscription row seen from the channel side"""

    id: str
    subscriber: ChannelSummary
    created_at: datetime

    class Config:
        from_attributes = True


class SubscribedChannelResponse(BaseModel):
    """One subscription row seen from the subscriber side"""

    id: str
    channel: ChannelSummary
    created_at: datetime

    class Config:
        from_attributes = True
