"""Subscription endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.user import User
from videotube.schemas.engagement import (
    SubscribedChannelResponse,
    SubscriberResponse,
    SubscriptionToggleResponse,
)
from videotube.services.ledger import channel_subscribers, subscribed_channels, toggle_subscription

router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])


@router.post("/c/{channel_id}", response_model=SubscriptionToggleResponse)
def toggle_channel_subscription(
    channel_id: str,
    response: Response,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Subscribe to or unsubscribe from a channel

    Returns 400 (`self_reference`) when subscribing to yourself and 404 when
    the channel does not exist.
    """
    subscribed = toggle_subscription(db, channel_id, user.id)
    response.status_code = status.HTTP_201_CREATED if subscribed else status.HTTP_200_OK
    return SubscriptionToggleResponse(subscribed=subscribed)


@router.get("/c/{channel_id}", response_model=List[SubscriberResponse])
def get_channel_subscribers(
    channel_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Subscribers of a channel, newest first"""
    return channel_subscribers(db, channel_id)


@router.get("/u/{subscriber_id}", response_model=List[SubscribedChannelResponse])
def get_subscribed_channels(
    subscriber_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Channels a user is subscribed to, newest first"""
    return subscribed_channels(db, subscriber_id)
