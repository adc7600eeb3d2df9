"""Tests for subscription toggles and subscriber lists"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from videotube.errors import InvalidArgument, NotFound, SelfReference
from videotube.models.subscription import Subscription
from videotube.models.user import User
from videotube.services import ledger
from videotube.utils.identifiers import generate_id


def test_toggle_subscription_round_trip(db: Session, alice: User, bob: User):
    assert ledger.toggle_subscription(db, alice.id, bob.id) is True
    assert db.query(Subscription).count() == 1

    assert ledger.toggle_subscription(db, alice.id, bob.id) is False
    assert db.query(Subscription).count() == 0


def test_self_subscription_is_rejected(db: Session, alice: User):
    with pytest.raises(SelfReference):
        ledger.toggle_subscription(db, alice.id, alice.id)


def test_self_reference_is_an_invalid_argument(db: Session, bob: User):
    with pytest.raises(InvalidArgument):
        ledger.toggle_subscription(db, bob.id, bob.id)


def test_subscribe_to_missing_channel(db: Session, bob: User):
    with pytest.raises(NotFound):
        ledger.toggle_subscription(db, generate_id(), bob.id)


def test_subscribe_malformed_channel(db: Session, bob: User):
    with pytest.raises(InvalidArgument):
        ledger.toggle_subscription(db, "channel-1", bob.id)


def test_concurrent_subscribe_keeps_one_row(db: Session, alice: User, bob: User, monkeypatch):
    real_insert = ledger._insert_unique

    def insert_after_concurrent_create(session, row):
        real_insert(session, Subscription(subscriber_id=row.subscriber_id, channel_id=row.channel_id))
        return real_insert(session, row)

    monkeypatch.setattr(ledger, "_insert_unique", insert_after_concurrent_create)

    assert ledger.toggle_subscription(db, alice.id, bob.id) is True
    assert db.query(Subscription).count() == 1


def test_subscriber_lists(db: Session, alice: User, bob: User, make_user):
    carol = make_user("carol")
    ledger.toggle_subscription(db, alice.id, bob.id)
    ledger.toggle_subscription(db, alice.id, carol.id)
    ledger.toggle_subscription(db, carol.id, bob.id)

    subscribers = ledger.channel_subscribers(db, alice.id)
    assert {s.subscriber.username for s in subscribers} == {"bob", "carol"}

    channels = ledger.subscribed_channels(db, bob.id)
    assert {s.channel.username for s in channels} == {"alice", "carol"}


# ── HTTP surface ──────────────────────────────────────────────────────────

def test_toggle_subscription_endpoint(client: TestClient, alice: User, bob: User, auth_headers):
    subscribed = client.post(f"/api/v1/subscriptions/c/{alice.id}", headers=auth_headers(bob))
    assert subscribed.status_code == 201
    assert subscribed.json() == {"subscribed": True}

    unsubscribed = client.post(f"/api/v1/subscriptions/c/{alice.id}", headers=auth_headers(bob))
    assert unsubscribed.status_code == 200
    assert unsubscribed.json() == {"subscribed": False}


def test_self_subscription_endpoint(client: TestClient, bob: User, auth_headers):
    response = client.post(f"/api/v1/subscriptions/c/{bob.id}", headers=auth_headers(bob))
    assert response.status_code == 400
    assert response.json()["error"] == "self_reference"


def test_subscribe_missing_channel_endpoint(client: TestClient, bob: User, auth_headers):
    response = client.post(f"/api/v1/subscriptions/c/{generate_id()}", headers=auth_headers(bob))
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_channel_subscribers_endpoint(client: TestClient, alice: User, bob: User, auth_headers):
    client.post(f"/api/v1/subscriptions/c/{alice.id}", headers=auth_headers(bob))

    response = client.get(f"/api/v1/subscriptions/c/{alice.id}", headers=auth_headers(alice))
    assert response.status_code == 200

    data = response.json()
    assert len(data) == 1
    assert data[0]["subscriber"]["id"] == bob.id
    assert data[0]["subscriber"]["username"] == "bob"
    assert "email" not in data[0]["subscriber"]


def test_subscribed_channels_endpoint(client: TestClient, alice: User, bob: User, auth_headers):
    client.post(f"/api/v1/subscriptions/c/{alice.id}", headers=auth_headers(bob))

    response = client.get(f"/api/v1/subscriptions/u/{bob.id}", headers=auth_headers(bob))
    assert response.status_code == 200
    assert [row["channel"]["username"] for row in response.json()] == ["alice"]


def test_subscriber_list_invalid_id(client: TestClient, bob: User, auth_headers):
    response = client.get("/api/v1/subscriptions/u/bob", headers=auth_headers(bob))
    assert response.status_code == 400


def test_self_subscription_with_uppercase_id(db: Session, bob: User):
    with pytest.raises(SelfReference):
        ledger.toggle_subscription(db, bob.id.upper(), bob.id)


def test_self_subscription_with_braced_id(client: TestClient, bob: User, auth_headers):
    response = client.post(f"/api/v1/subscriptions/c/{{{bob.id}}}", headers=auth_headers(bob))
    assert response.status_code == 400
    assert response.json()["error"] == "self_reference"


def test_subscription_id_spellings_name_one_channel(db: Session, alice: User, bob: User):
    assert ledger.toggle_subscription(db, alice.id, bob.id) is True
    assert ledger.toggle_subscription(db, alice.id.upper(), bob.id) is False
    assert ledger.toggle_subscription(db, alice.id.replace("-", ""), bob.id) is True

    row = db.query(Subscription).one()
    assert row.channel_id == alice.id
    assert [s.subscriber_id for s in ledger.channel_subscribers(db, alice.id.upper())] == [bob.id]
