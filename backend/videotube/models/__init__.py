"""Database models"""
from videotube.models.like import Like, TargetKind
from videotube.models.subscription import Subscription
from videotube.models.user import User
from videotube.models.video import Video

__all__ = ["Like", "Subscription", "TargetKind", "User", "Video"]
