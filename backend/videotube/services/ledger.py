"""Engagement ledger: reaction and subscription toggles plus their read side.

Both toggles are delete-first: removing an existing row is a single atomic
DELETE whose row count says whether the row was present. Creation relies on
the table's unique constraint, so two concurrent creates leave exactly one row;
the loser reports the resulting state instead of failing.
"""
from typing import List, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from videotube.errors import InvalidArgument, NotFound, SelfReference
from videotube.middleware.monitoring import record_reaction_toggle, record_subscription_toggle
from videotube.models.like import Like, TargetKind
from videotube.models.subscription import Subscription
from videotube.models.user import User
from videotube.models.video import Video
from videotube.utils.identifiers import canonical_id
from videotube.utils.logger import logger


def _require_id(value: str, label: str) -> str:
    """Canonical form of an id; every spelling of one UUID names the same row"""
    canonical = canonical_id(value)
    if canonical is None:
        raise InvalidArgument(f"Invalid {label} ID")
    return canonical


def _insert_unique(db: Session, row: Union[Like, Subscription]) -> bool:
    """Insert a join row; False if the unique constraint says it already exists"""
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True


# ---------------------------------------------------------------------------
# Reactions
# ---------------------------------------------------------------------------

def toggle_reaction(db: Session, target_kind: Union[TargetKind, str], target_id: str, reactor_id: str) -> bool:
    """Flip the reactor's reaction on one target. Returns True if now reacted.

    The reactor id must come from the authenticated identity. The target is
    not checked for existence.
    """
    try:
        kind = TargetKind(target_kind)
    except ValueError:
        raise InvalidArgument(f"Invalid target type: {target_kind}")
    target_id = _require_id(target_id, kind.value)

    removed = db.query(Like).filter(
        Like.liked_by == reactor_id,
        Like.target_type == kind.value,
        Like.target_id == target_id,
    ).delete(synchronize_session=False)

    if removed:
        db.commit()
        record_reaction_toggle(kind.value, "removed")
        logger.info(
            f"Removed {kind.value} reaction",
            extra={"user_id": reactor_id, "action": "toggle_reaction", "target_type": kind.value, "target_id": target_id},
        )
        return False

    created = _insert_unique(db, Like(liked_by=reactor_id, target_type=kind.value, target_id=target_id))
    outcome = "added" if created else "raced"
    record_reaction_toggle(kind.value, outcome)
    logger.info(
        f"Added {kind.value} reaction" if created else f"{kind.value.capitalize()} reaction already added concurrently",
        extra={"user_id": reactor_id, "action": "toggle_reaction", "target_type": kind.value, "target_id": target_id},
    )
    return True


def liked_videos(db: Session, user_id: str) -> List[Video]:
    """Videos the user reacted to, newest reaction first; deleted videos are skipped"""
    return (
        db.query(Video)
        .join(Like, Like.target_id == Video.id)
        .filter(Like.liked_by == user_id, Like.target_type == TargetKind.VIDEO.value)
        .order_by(Like.created_at.desc())
        .all()
    )


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------

def toggle_subscription(db: Session, channel_id: str, subscriber_id: str) -> bool:
    """Subscribe to or unsubscribe from a channel. Returns True if now subscribed.

    Raises:
        InvalidArgument: malformed channel id.
        SelfReference:   channel is the subscriber.
        NotFound:        channel user does not exist.
    """
    channel_id = _require_id(channel_id, "channel")
    subscriber_id = _require_id(subscriber_id, "subscriber")
    if channel_id == subscriber_id:
        raise SelfReference("You cannot subscribe to your own channel")

    if not db.query(User.id).filter(User.id == channel_id).first():
        raise NotFound("Channel not found")

    removed = db.query(Subscription).filter(
        Subscription.subscriber_id == subscriber_id,
        Subscription.channel_id == channel_id,
    ).delete(synchronize_session=False)

    if removed:
        db.commit()
        record_subscription_toggle("removed")
        logger.info("Unsubscribed", extra={"user_id": subscriber_id, "action": "toggle_subscription", "target_id": channel_id})
        return False

    created = _insert_unique(db, Subscription(subscriber_id=subscriber_id, channel_id=channel_id))
    record_subscription_toggle("added" if created else "raced")
    logger.info("Subscribed", extra={"user_id": subscriber_id, "action": "toggle_subscription", "target_id": channel_id})
    return True


def channel_subscribers(db: Session, channel_id: str) -> List[Subscription]:
    channel_id = _require_id(channel_id, "channel")
    return (
        db.query(Subscription)
        .options(joinedload(Subscription.subscriber))
        .filter(Subscription.channel_id == channel_id)
        .order_by(Subscription.created_at.desc())
        .all()
    )


def subscribed_channels(db: Session, subscriber_id: str) -> List[Subscription]:
    subscriber_id = _require_id(subscriber_id, "subscriber")
    return (
        db.query(Subscription)
        .options(joinedload(Subscription.channel))
        .filter(Subscription.subscriber_id == subscriber_id)
        .order_by(Subscription.created_at.desc())
        .all()
    )
