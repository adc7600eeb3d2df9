"""User schemas"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from videotube.utils.auth import MAX_PASSWORD_BYTES


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
    return value


class UserCreate(BaseModel):
    """Schema for registering a new account"""

    full_name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Unique email address")
    username: str = Field(..., min_length=1, max_length=64, description="Unique channel handle")
    password: str = Field(..., min_length=1, max_length=72, description="Plaintext password")
    avatar: Optional[str] = Field(None, max_length=1024, description="Avatar URL from the asset store")
    cover_image: Optional[str] = Field(None, max_length=1024, description="Cover image URL from the asset store")

    @field_validator("full_name", "username", "password")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, value: str) -> str:
        return check_password_bytes(value)


class UserResponse(BaseModel):
    """Sanitized user projection (never includes password hash or refresh token)"""

    id: str
    username: str
    email: str
    full_name: str
    avatar: Optional[str]
    cover_image: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ChannelSummary(BaseModel):
    id: str
    username: str
    full_name: str
    avatar: Optional[str]

    class Config:
        from_attributes = True
