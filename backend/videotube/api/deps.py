"""API dependencies for authentication.

The access token is read from ``Authorization: Bearer <JWT>`` first and from
the ``access_token`` cookie otherwise. Verification is stateless (signature,
expiry, token type); the user row is then loaded so handlers get a ``User``.
"""
from typing import Optional

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from videotube.config import settings
from videotube.database import get_db
from videotube.errors import Unauthorized
from videotube.models.user import User
from videotube.services.session import get_user
from videotube.utils.jwt_utils import access_token_max_age, decode_access_token, refresh_token_max_age

_bearer_scheme = HTTPBearer(auto_error=False)

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


def _presented_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(ACCESS_COOKIE)


# ---------------------------------------------------------------------------
# get_current_user
# ---------------------------------------------------------------------------

def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Require an authenticated user.

    Raises Unauthorized when no token is presented, the token fails
    verification, or the account no longer exists.
    """
    token = _presented_access_token(request, credentials)
    if not token:
        raise Unauthorized("Authentication required. Provide Authorization: Bearer <token> or the access_token cookie.")

    payload = decode_access_token(token)
    return get_user(db, payload["sub"])


# ---------------------------------------------------------------------------
# get_optional_user
# ---------------------------------------------------------------------------

def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the caller if a token is presented, else None.

    A presented but invalid token is still rejected.
    """
    token = _presented_access_token(request, credentials)
    if not token:
        return None

    payload = decode_access_token(token)
    return get_user(db, payload["sub"])


# ---------------------------------------------------------------------------
# Session cookies
# ---------------------------------------------------------------------------

def set_session_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    """Attach the token pair as http-only cookies (secure in production)"""
    response.set_cookie(
        ACCESS_COOKIE,
        access_token,
        max_age=access_token_max_age(),
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
    response.set_cookie(
        REFRESH_COOKIE,
        refresh_token,
        max_age=refresh_token_max_age(),
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )


def clear_session_cookies(response: Response) -> None:
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(name, httponly=True, secure=settings.secure_cookies, samesite="lax")
