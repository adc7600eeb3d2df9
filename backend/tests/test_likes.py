"""Tests for reaction toggles and liked videos"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from videotube.errors import InvalidArgument
from videotube.models.like import Like, TargetKind
from videotube.models.user import User
from videotube.services import ledger
from videotube.utils.identifiers import generate_id


def _rows(db: Session, user: User, target_id: str) -> int:
    return db.query(Like).filter(Like.liked_by == user.id, Like.target_id == target_id).count()


# ── Service level ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("kind", list(TargetKind))
def test_toggle_is_an_involution(db: Session, bob: User, kind: TargetKind):
    target_id = generate_id()

    assert ledger.toggle_reaction(db, kind, target_id, bob.id) is True
    assert _rows(db, bob, target_id) == 1

    assert ledger.toggle_reaction(db, kind, target_id, bob.id) is False
    assert _rows(db, bob, target_id) == 0


def test_toggle_accepts_kind_as_string(db: Session, bob: User):
    assert ledger.toggle_reaction(db, "tweet", generate_id(), bob.id) is True


def test_toggle_kinds_are_independent(db: Session, bob: User):
    """The same id under two kinds names two different targets"""
    target_id = generate_id()
    ledger.toggle_reaction(db, TargetKind.VIDEO, target_id, bob.id)
    ledger.toggle_reaction(db, TargetKind.COMMENT, target_id, bob.id)

    assert _rows(db, bob, target_id) == 2

    assert ledger.toggle_reaction(db, TargetKind.VIDEO, target_id, bob.id) is False
    remaining = db.query(Like).filter(Like.liked_by == bob.id).one()
    assert remaining.target_type == TargetKind.COMMENT.value


def test_toggle_only_touches_own_reaction(db: Session, alice: User, bob: User):
    target_id = generate_id()
    ledger.toggle_reaction(db, TargetKind.VIDEO, target_id, alice.id)
    ledger.toggle_reaction(db, TargetKind.VIDEO, target_id, bob.id)
    ledger.toggle_reaction(db, TargetKind.VIDEO, target_id, bob.id)

    assert _rows(db, alice, target_id) == 1
    assert _rows(db, bob, target_id) == 0


def test_toggle_rejects_malformed_target(db: Session, bob: User):
    with pytest.raises(InvalidArgument):
        ledger.toggle_reaction(db, TargetKind.VIDEO, "not-an-id", bob.id)
    assert db.query(Like).count() == 0


def test_toggle_rejects_unknown_kind(db: Session, bob: User):
    with pytest.raises(InvalidArgument):
        ledger.toggle_reaction(db, "playlist", generate_id(), bob.id)


def test_concurrent_create_keeps_exactly_one_row(db: Session, bob: User, monkeypatch):
    target_id = generate_id()
    real_insert = ledger._insert_unique

    def insert_after_concurrent_create(session, row):
        # A racing request commits the same reaction just before us
        real_insert(session, Like(liked_by=row.liked_by, target_type=row.target_type, target_id=row.target_id))
        return real_insert(session, row)

    monkeypatch.setattr(ledger, "_insert_unique", insert_after_concurrent_create)

    assert ledger.toggle_reaction(db, TargetKind.VIDEO, target_id, bob.id) is True
    assert _rows(db, bob, target_id) == 1


def test_unique_constraint_rejects_duplicate_rows(db: Session, bob: User):
    target_id = generate_id()
    db.add(Like(liked_by=bob.id, target_type="video", target_id=target_id))
    db.commit()

    db.add(Like(liked_by=bob.id, target_type="video", target_id=target_id))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_like_rejects_unknown_target_type():
    with pytest.raises(ValueError):
        Like(liked_by=generate_id(), target_type="playlist", target_id=generate_id())


def test_liked_videos_skips_deleted_videos(db: Session, alice: User, bob: User, make_video):
    kept = make_video(alice, title="kept")
    ledger.toggle_reaction(db, TargetKind.VIDEO, kept.id, bob.id)
    ledger.toggle_reaction(db, TargetKind.VIDEO, generate_id(), bob.id)  # dangling
    ledger.toggle_reaction(db, TargetKind.COMMENT, generate_id(), bob.id)

    videos = ledger.liked_videos(db, bob.id)
    assert [v.id for v in videos] == [kept.id]


# ── HTTP surface ──────────────────────────────────────────────────────────

def test_toggle_video_like_endpoint(client: TestClient, bob: User, auth_headers):
    video_id = generate_id()

    liked = client.post(f"/api/v1/likes/toggle/v/{video_id}", headers=auth_headers(bob))
    assert liked.status_code == 201
    assert liked.json() == {"reacted": True}

    unliked = client.post(f"/api/v1/likes/toggle/v/{video_id}", headers=auth_headers(bob))
    assert unliked.status_code == 200
    assert unliked.json() == {"reacted": False}


@pytest.mark.parametrize("segment", ["c", "t"])
def test_toggle_comment_and_tweet_endpoints(client: TestClient, db: Session, bob: User, auth_headers, segment: str):
    target_id = generate_id()
    response = client.post(f"/api/v1/likes/toggle/{segment}/{target_id}", headers=auth_headers(bob))
    assert response.status_code == 201

    like = db.query(Like).filter(Like.target_id == target_id).one()
    assert like.target_type == {"c": "comment", "t": "tweet"}[segment]
    assert like.liked_by == bob.id


def test_toggle_invalid_id_endpoint(client: TestClient, bob: User, auth_headers):
    response = client.post("/api/v1/likes/toggle/v/12345", headers=auth_headers(bob))
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_argument"


def test_toggle_requires_auth(client: TestClient):
    response = client.post(f"/api/v1/likes/toggle/v/{generate_id()}")
    assert response.status_code == 401


def test_liked_videos_endpoint(client: TestClient, alice: User, bob: User, auth_headers, make_video):
    video = make_video(alice, views=3, title="intro")
    client.post(f"/api/v1/likes/toggle/v/{video.id}", headers=auth_headers(bob))

    response = client.get("/api/v1/likes/videos", headers=auth_headers(bob))
    assert response.status_code == 200

    data = response.json()
    assert len(data) == 1
    assert data[0]["id"] == video.id
    assert data[0]["owner_id"] == alice.id
    assert data[0]["views"] == 3


def _spellings(target_id: str) -> list:
    return [
        target_id,
        target_id.upper(),
        target_id.replace("-", ""),
        "{" + target_id + "}",
        "urn:uuid:" + target_id,
    ]


def test_toggle_treats_id_spellings_as_one_target(db: Session, bob: User):
    target_id = generate_id()

    results = [ledger.toggle_reaction(db, TargetKind.VIDEO, spelling, bob.id) for spelling in _spellings(target_id)]

    assert results == [True, False, True, False, True]
    like = db.query(Like).filter(Like.liked_by == bob.id).one()
    assert like.target_id == target_id


def test_toggle_endpoint_with_uppercase_id(client: TestClient, db: Session, bob: User, auth_headers):
    target_id = generate_id()
    client.post(f"/api/v1/likes/toggle/v/{target_id}", headers=auth_headers(bob))

    response = client.post(f"/api/v1/likes/toggle/v/{target_id.upper()}", headers=auth_headers(bob))
    assert response.status_code == 200
    assert response.json() == {"reacted": False}
    assert db.query(Like).count() == 0
