"""Account and session endpoints"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.orm import Session

from videotube.api.deps import (
    REFRESH_COOKIE,
    clear_session_cookies,
    get_current_user,
    get_optional_user,
    set_session_cookies,
)
from videotube.database import get_db
from videotube.middleware.rate_limit import credential_limit
from videotube.models.user import User
from videotube.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    TokenPair,
)
from videotube.schemas.dashboard import ChannelProfile
from videotube.schemas.user import UserCreate, UserResponse
from videotube.services import session as sessions
from videotube.services.stats import channel_profile
from videotube.utils.jwt_utils import access_token_max_age

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@credential_limit
def register_user(
    request: Request,
    user_data: UserCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new account

    Username is stored lower-cased. Returns 409 if the email or username is taken.
    """
    return sessions.register(db, user_data)


@router.post("/login", response_model=LoginResponse)
@credential_limit
def login_user(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Log in with email or username and password

    Returns the user plus a new access/refresh token pair, also set as
    http-only cookies. Any previous session of this user is revoked.
    """
    result = sessions.authenticate(db, credentials.identifier, credentials.password)
    set_session_cookies(response, result.access_token, result.refresh_token)

    return LoginResponse(
        user=UserResponse.model_validate(result.user),
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        expires_in=access_token_max_age(),
    )


@router.post("/refresh-token", response_model=TokenPair)
@credential_limit
def refresh_access_token(
    request: Request,
    response: Response,
    payload: Optional[RefreshRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """
    Exchange a refresh token for a new token pair

    The token is read from the JSON body (`refresh_token`) or, if absent, from
    the `refresh_token` cookie. Every successful call rotates the refresh token;
    the presented one can never be used again.
    """
    presented = payload.refresh_token if payload and payload.refresh_token else None
    if not presented:
        presented = request.cookies.get(REFRESH_COOKIE)

    tokens = sessions.refresh(db, presented)
    set_session_cookies(response, tokens.access_token, tokens.refresh_token)

    return TokenPair(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=access_token_max_age(),
    )


@router.post("/logout", response_model=MessageResponse)
def logout_user(
    response: Response,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Log out: revoke the stored refresh token and clear session cookies

    Access tokens already issued stay valid until they expire.
    """
    sessions.logout(db, user)
    clear_session_cookies(response)
    return MessageResponse(message="Logout successful")


@router.post("/change-password", response_model=MessageResponse)
def change_current_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change the caller's password (requires the old password)"""
    sessions.change_password(db, user, body.old_password, body.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get("/current-user", response_model=UserResponse)
def get_current_user_details(user: User = Depends(get_current_user)):
    return user


@router.get("/c/{username}", response_model=ChannelProfile)
def get_channel_profile(
    username: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    Public channel profile with subscriber counts

    `is_subscribed_by_viewer` is false for anonymous callers.
    """
    return channel_profile(db, username, viewer.id if viewer else None)
