"""Rate limiting middleware for API protection"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from videotube.config import settings
from videotube.errors import Unauthorized
from videotube.utils.jwt_utils import decode_access_token


def get_identifier(request: Request) -> str:
    """
    Get identifier for rate limiting based on authentication

    Priority:
    1. User ID (from a valid access token in the Authorization header or cookie)
    2. IP address (for unauthenticated requests)
    """
    token = None
    authorization = request.headers.get("authorization", "")
    if authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
    if not token:
        token = request.cookies.get("access_token")

    if token:
        try:
            return f"user:{decode_access_token(token)['sub']}"
        except Unauthorized:
            pass

    return get_remote_address(request)


# Create limiter instance
limiter = Limiter(
    key_func=get_identifier,
    default_limits=settings.RATE_LIMIT_DEFAULT,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)

# Credential endpoints are keyed on the client address
credential_limit = limiter.shared_limit(
    settings.RATE_LIMIT_CREDENTIALS,
    scope="credentials",
    key_func=get_remote_address,
)
