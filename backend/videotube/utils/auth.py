"""Password hashing and credential comparison utilities"""
import hmac
from typing import Optional

import bcrypt

from videotube.errors import InvalidArgument

MAX_PASSWORD_BYTES = 72  # bcrypt hashes at most 72 bytes


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt"""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidArgument(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against its bcrypt hash (constant-time)"""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long password
        return False


def tokens_match(presented: Optional[str], stored: Optional[str]) -> bool:
    """Constant-time equality for opaque token strings; an absent value never matches"""
    if not presented or not stored:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), stored.encode("utf-8"))
