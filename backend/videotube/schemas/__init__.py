"""Pydantic schemas for request/response validation"""
from videotube.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    TokenPair,
)
from videotube.schemas.dashboard import ChannelProfile, ChannelStats
from videotube.schemas.engagement import (
    ReactionToggleResponse,
    SubscribedChannelResponse,
    SubscriberResponse,
    SubscriptionToggleResponse,
)
from videotube.schemas.user import ChannelSummary, UserCreate, UserResponse
from videotube.schemas.video import VideoResponse

__all__ = [
    "ChangePasswordRequest",
    "ChannelProfile",
    "ChannelStats",
    "ChannelSummary",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ReactionToggleResponse",
    "RefreshRequest",
    "SubscribedChannelResponse",
    "SubscriberResponse",
    "SubscriptionToggleResponse",
    "TokenPair",
    "UserCreate",
    "UserResponse",
    "VideoResponse",
]
