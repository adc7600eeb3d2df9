"""Session schemas"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from videotube.schemas.user import UserResponse, check_password_bytes


class LoginRequest(BaseModel):
    """Credentials: either email or username identifies the account"""

    email: Optional[str] = Field(None, description="Account email")
    username: Optional[str] = Field(None, description="Account handle")
    password: str = Field(..., min_length=1, description="Plaintext password")

    @property
    def identifier(self) -> Optional[str]:
        for value in (self.email, self.username):
            if value and value.strip():
                return value.strip()
        return None


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # access token lifetime in seconds


class LoginResponse(TokenPair):
    user: UserResponse


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=72)

    @field_validator("new_password")
    @classmethod
    def password_fits_hash(cls, value: str) -> str:
        return check_password_bytes(value)


class MessageResponse(BaseModel):
    message: str
