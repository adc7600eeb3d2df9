"""JWT utilities: access/refresh token signing and verification"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from videotube.config import settings
from videotube.errors import Unauthorized
from videotube.utils.logger import logger

ACCESS = "access"
REFRESH = "refresh"

# ---------------------------------------------------------------------------
# Token creation
# ---------------------------------------------------------------------------


def _secret_for(token_type: str) -> str:
    if token_type == ACCESS:
        return settings.ACCESS_TOKEN_SECRET
    return settings.REFRESH_TOKEN_SECRET


def _lifetime_seconds(token_type: str) -> int:
    if token_type == ACCESS:
        return settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    return settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 3600


def _encode(subject: str, token_type: str, extra_claims: Optional[Dict[str, Any]] = None) -> str:
    now = int(datetime.now(timezone.utc).timestamp())

    payload: Dict[str, Any] = {
        "sub": subject,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + _lifetime_seconds(token_type),
        "type": token_type,
        **(extra_claims or {}),
    }

    return jwt.encode(payload, _secret_for(token_type), algorithm=settings.JWT_ALGORITHM)


def create_access_token(subject: str, extra_claims: Optional[Dict[str, Any]] = None) -> str:
    """Sign a short-lived access token.

    Args:
        subject:      user id, stored as the 'sub' claim.
        extra_claims: display claims (username, email) for clients.

    Returns:
        Signed JWT string.
    """
    return _encode(subject, ACCESS, extra_claims)


def create_refresh_token(subject: str) -> str:
    """Sign a long-lived refresh token carrying only the user id.

    The 'jti' claim makes every refresh token unique even when two are minted
    in the same second, which rotation relies on.
    """
    return _encode(subject, REFRESH)


def access_token_max_age() -> int:
    return _lifetime_seconds(ACCESS)


def refresh_token_max_age() -> int:
    return _lifetime_seconds(REFRESH)


# ---------------------------------------------------------------------------
# Token verification
# ---------------------------------------------------------------------------


def _decode(token: str, token_type: str) -> Dict[str, Any]:
    """Verify signature, expiry and token type; raise Unauthorized on any failure"""
    try:
        payload = jwt.decode(
            token,
            _secret_for(token_type),
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError as exc:
        logger.debug(f"JWT decode failed: {exc}")
        raise Unauthorized(f"{token_type.capitalize()} token expired or invalid")

    if payload.get("type") != token_type or not payload.get("sub"):
        raise Unauthorized(f"{token_type.capitalize()} token expired or invalid")

    return payload


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify an access token. Stateless: no storage lookup happens here."""
    return _decode(token, ACCESS)


def decode_refresh_token(token: str) -> Dict[str, Any]:
    """Verify a refresh token's signature and expiry.

    The caller must still compare it with the value stored on the user row.
    """
    return _decode(token, REFRESH)
