"""Pytest configuration and fixtures."""

import os

# Must be set before sanctum reads its settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from sanctum import models  # noqa: E402, F401
from sanctum.database import Base, get_db  # noqa: E402
from sanctum.main import app  # noqa: E402
from sanctum.services.blob_storage import LocalBlobStorage, get_blob_storage  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and username."""

    def __init__(self, *args, user_id: str | None = None, username: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL") + "_test"
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def blob_storage(tmp_path):
    """Local blob storage rooted in a temporary directory."""
    return LocalBlobStorage(tmp_path / "media", "/media")


@pytest.fixture(scope="function")
def client(db, blob_storage):
    """Create a test client with database and blob storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_storage] = lambda: blob_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _register(client, username: str, password: str = "testpass123") -> AuthHeaders:
    response = client.post(
        "/api/auth?action=register", json={"username": username, "password": password}
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        username=data["user"]["username"],
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return _register(client, "testuser")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return _register(client, "otheruser")


@pytest.fixture
def make_track(client):
    """Factory that stores track metadata for the given user."""

    def _make_track(headers, **overrides):
        payload = {
            "name": "Battle Drums",
            "filename": "battle.mp3",
            "url": f"/media/tracks/{headers.user_id}/music/1-battle.mp3",
            "type": "music",
            "fileSize": 1024,
            "mimeType": "audio/mpeg",
        }
        payload.update(overrides)
        response = client.post("/api/tracks", headers=headers, json=payload)
        assert response.status_code == 200, response.text
        return response.json()["track"]

    return _make_track


@pytest.fixture
def register_user(client):
    """Factory that registers a user and returns auth headers."""

    def _register_user(username: str, password: str = "testpass123") -> AuthHeaders:
        return _register(client, username, password)

    return _register_user
