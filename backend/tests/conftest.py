"""Pytest configuration and fixtures"""
import os
from typing import Callable, Generator, Optional

# Settings are read at import time; keep the limiter and Prometheus out of tests
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("METRICS_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from videotube.database import Base, get_db
from videotube.main import app
from videotube.models.user import User
from videotube.models.video import Video
from videotube.utils.auth import hash_password
from videotube.utils.jwt_utils import create_access_token

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "correct horse battery staple"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory for users; only users given a password get a real bcrypt hash"""

    def _make(username: str, password: Optional[str] = None, full_name: Optional[str] = None) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            full_name=full_name or username.title(),
            password_hash=hash_password(password) if password else "!",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_video(db: Session) -> Callable[..., Video]:
    def _make(owner: User, views: int = 0, title: str = "clip") -> Video:
        video = Video(owner_id=owner.id, title=title, video_file=f"https://cdn.example.com/{title}.mp4", views=views)
        db.add(video)
        db.commit()
        db.refresh(video)
        return video

    return _make


@pytest.fixture
def alice(make_user) -> User:
    return make_user("alice", password=PASSWORD, full_name="Alice Liddell")


@pytest.fixture
def bob(make_user) -> User:
    return make_user("bob")


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    """Bearer headers for a user, without going through login"""

    def _headers(user: User) -> dict:
        token = create_access_token(user.id, {"username": user.username, "email": user.email})
        return {"Authorization": f"Bearer {token}"}

    return _headers
