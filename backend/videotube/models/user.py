"""User model"""
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from videotube.database import Base
from videotube.utils.identifiers import generate_id


class User(Base):
    """A channel owner / viewer account.

    ``refresh_token`` holds the single live refresh token for the account.
    Overwriting it revokes the previous session; clearing it logs the user out.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(64), unique=True, nullable=False, index=True)  # stored lower-cased
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    avatar = Column(String(1024), nullable=True)
    cover_image = Column(String(1024), nullable=True)
    password_hash = Column(String(255), nullable=False)
    refresh_token = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
