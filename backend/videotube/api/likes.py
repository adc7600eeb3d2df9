"""Reaction (like) endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.like import TargetKind
from videotube.models.user import User
from videotube.schemas.engagement import ReactionToggleResponse
from videotube.schemas.video import VideoResponse
from videotube.services.ledger import liked_videos, toggle_reaction

router = APIRouter(prefix="/api/v1/likes", tags=["likes"])


def _toggle(response: Response, kind: TargetKind, target_id: str, user: User, db: Session) -> ReactionToggleResponse:
    reacted = toggle_reaction(db, kind, target_id, user.id)
    response.status_code = status.HTTP_201_CREATED if reacted else status.HTTP_200_OK
    return ReactionToggleResponse(reacted=reacted)


@router.post("/toggle/v/{video_id}", response_model=ReactionToggleResponse)
def toggle_video_like(
    video_id: str,
    response: Response,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Like or unlike a video

    201 with `reacted: true` when the like is created, 200 with
    `reacted: false` when it is removed.
    """
    return _toggle(response, TargetKind.VIDEO, video_id, user, db)


@router.post("/toggle/c/{comment_id}", response_model=ReactionToggleResponse)
def toggle_comment_like(
    comment_id: str,
    response: Response,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Like or unlike a comment"""
    return _toggle(response, TargetKind.COMMENT, comment_id, user, db)


@router.post("/toggle/t/{tweet_id}", response_model=ReactionToggleResponse)
def toggle_tweet_like(
    tweet_id: str,
    response: Response,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Like or unlike a tweet"""
    return _toggle(response, TargetKind.TWEET, tweet_id, user, db)


@router.get("/videos", response_model=List[VideoResponse])
def get_liked_videos(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Videos the caller has liked, most recent like first"""
    return liked_videos(db, user.id)
