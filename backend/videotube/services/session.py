"""Session manager: credential verification, token issuance, rotation and revocation.

A user holds at most one live refresh token (``User.refresh_token``).
Access tokens are stateless; refresh tokens are only honoured while they equal
the stored value, so revoking a session is a single column update.
"""
from typing import NamedTuple, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from videotube.config import settings
from videotube.errors import Conflict, InvalidArgument, NotFound, Unauthorized
from videotube.middleware.monitoring import record_login, record_refresh
from videotube.models.user import User
from videotube.schemas.user import UserCreate
from videotube.utils.auth import hash_password, tokens_match, verify_password
from videotube.utils.jwt_utils import create_access_token, create_refresh_token, decode_refresh_token
from videotube.utils.logger import logger


class IssuedTokens(NamedTuple):
    access_token: str
    refresh_token: str


class AuthenticatedSession(NamedTuple):
    user: User
    access_token: str
    refresh_token: str


def _mint_tokens(user: User) -> IssuedTokens:
    access_token = create_access_token(
        subject=user.id,
        extra_claims={"username": user.username, "email": user.email},
    )
    return IssuedTokens(access_token, create_refresh_token(user.id))


# ---------------------------------------------------------------------------
# register
# ---------------------------------------------------------------------------

def register(db: Session, data: UserCreate) -> User:
    """Create an account. Raises Conflict if the email or username is taken."""
    username = data.username.strip().lower()
    email = str(data.email).strip()

    existing = db.query(User).filter(or_(User.email == email, User.username == username)).first()
    if existing:
        raise Conflict("User with email or username already exists")

    user = User(
        username=username,
        email=email,
        full_name=data.full_name.strip(),
        password_hash=hash_password(data.password),
        avatar=data.avatar,
        cover_image=data.cover_image,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent registration claimed the email or username first
        db.rollback()
        raise Conflict("User with email or username already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.username}", extra={"user_id": user.id, "action": "register"})
    return user


# ---------------------------------------------------------------------------
# authenticate
# ---------------------------------------------------------------------------

def authenticate(db: Session, identifier: Optional[str], password: str) -> AuthenticatedSession:
    """Verify credentials and open a new session.

    ``identifier`` may be an email or a username. The new refresh token
    overwrites any previous one, revoking the prior session.

    Raises:
        InvalidArgument: identifier missing or blank.
        NotFound:        no user with that email or username.
        Unauthorized:    password does not match.
    """
    if not identifier or not identifier.strip():
        raise InvalidArgument("Email or username is required")
    identifier = identifier.strip()

    user = db.query(User).filter(
        or_(User.email == identifier, User.username == identifier.lower())
    ).first()
    if not user:
        record_login("not_found")
        raise NotFound("User not found")

    if not verify_password(password, user.password_hash):
        record_login("bad_password")
        logger.info("Rejected login: bad password", extra={"user_id": user.id, "action": "login", "result": "denied"})
        raise Unauthorized("Password is incorrect")

    tokens = _mint_tokens(user)
    user.refresh_token = tokens.refresh_token
    db.commit()
    db.refresh(user)

    record_login("success")
    logger.info(f"User {user.username} logged in", extra={"user_id": user.id, "action": "login"})
    return AuthenticatedSession(user, tokens.access_token, tokens.refresh_token)


# ---------------------------------------------------------------------------
# refresh
# ---------------------------------------------------------------------------

def refresh(db: Session, presented: Optional[str]) -> IssuedTokens:
    """Rotate a refresh token: verify it, then swap it for a fresh pair.

    The swap is a conditional update (``WHERE refresh_token = presented``), so
    of several concurrent calls with the same token exactly one wins and the
    others see zero updated rows and get Unauthorized. A token that has already
    been rotated out never matches again.
    """
    if not presented:
        record_refresh("missing")
        raise Unauthorized("Refresh token is missing")

    # Signature/expiry failures are always auth failures, never server errors
    try:
        payload = decode_refresh_token(presented)
    except Unauthorized:
        record_refresh("invalid")
        raise

    user = db.query(User).filter(User.id == payload["sub"]).first()
    if not user:
        record_refresh("unknown_user")
        raise Unauthorized("User deleted. Please login again.")

    if not tokens_match(presented, user.refresh_token):
        record_refresh("mismatch")
        logger.warning(
            "Rejected refresh: token does not match the live session",
            extra={"user_id": user.id, "action": "refresh_token", "result": "mismatch"},
        )
        raise Unauthorized("Refresh token mismatch")

    tokens = _mint_tokens(user)
    updated = db.query(User).filter(
        User.id == user.id,
        User.refresh_token == presented,
    ).update({User.refresh_token: tokens.refresh_token}, synchronize_session=False)

    if updated != 1:
        db.rollback()
        record_refresh("lost_race")
        logger.warning(
            "Rejected refresh: token rotated by a concurrent request",
            extra={"user_id": user.id, "action": "refresh_token", "result": "lost_race"},
        )
        raise Unauthorized("Refresh token mismatch")

    db.commit()

    record_refresh("success")
    logger.info("Rotated refresh token", extra={"user_id": user.id, "action": "refresh_token"})
    return tokens


# ---------------------------------------------------------------------------
# logout / change_password
# ---------------------------------------------------------------------------

def logout(db: Session, user: User) -> None:
    """Clear the stored refresh token; outstanding access tokens live until expiry"""
    db.query(User).filter(User.id == user.id).update(
        {User.refresh_token: None}, synchronize_session=False
    )
    db.commit()
    db.refresh(user)

    logger.info(f"User {user.username} logged out", extra={"user_id": user.id, "action": "logout"})


def change_password(db: Session, user: User, old_password: str, new_password: str) -> None:
    """Replace the password hash after verifying the old password.

    The live refresh token is kept unless REVOKE_SESSIONS_ON_PASSWORD_CHANGE is set.
    """
    if not verify_password(old_password, user.password_hash):
        raise Unauthorized("Old password is incorrect")

    user.password_hash = hash_password(new_password)
    if settings.REVOKE_SESSIONS_ON_PASSWORD_CHANGE:
        user.refresh_token = None
    db.commit()

    logger.info("Password changed", extra={"user_id": user.id, "action": "change_password"})


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise Unauthorized("Invalid access token")
    return user
