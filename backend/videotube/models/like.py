"""Like model - a user's reaction to exactly one video, comment or tweet"""
import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import validates

from videotube.database import Base
from videotube.utils.identifiers import generate_id


class TargetKind(str, enum.Enum):
    """Discriminant of the reaction target"""

    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


class Like(Base):
    """A reaction row.

    The target is a tagged reference: ``target_type`` selects the kind and
    ``target_id`` names the entity, so a row can never point at two targets.
    (liked_by, target_type, target_id) is unique; toggling off deletes the row.
    """

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("liked_by", "target_type", "target_id", name="uq_likes_reactor_target"),
        CheckConstraint(
            "target_type IN ('video', 'comment', 'tweet')",
            name="ck_likes_target_type",
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    liked_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    target_type = Column(String(10), nullable=False)
    target_id = Column(String(36), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    @validates("target_type")
    def _validate_target_type(self, key, value):
        return TargetKind(value).value
