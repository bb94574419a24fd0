"""Tests for the user directory and configuration."""

import pytest
from pydantic import ValidationError as SettingsValidationError

from sanctum.config import DEVELOPMENT_JWT_SECRET, Settings
from sanctum.exceptions import AuthenticationError, ConflictError, ValidationError
from sanctum.models.environment import Environment
from sanctum.models.section_config import SectionConfigEntry
from sanctum.models.track import Track
from sanctum.services.users import (
    delete_user,
    get_user_by_username,
    login_user,
    register_user,
)


class TestUserDirectory:
    """Tests for registration and login at the service level."""

    def test_register_normalizes_username(self, db):
        result = register_user(db, "  Alice ", "secret1")
        assert result.user.username == "alice"
        assert result.token
        assert get_user_by_username(db, "ALICE").id == result.user.id

    def test_register_duplicate(self, db):
        register_user(db, "alice", "secret1")
        with pytest.raises(ConflictError):
            register_user(db, "Alice", "secret2")

    def test_register_validates_lengths(self, db):
        with pytest.raises(ValidationError):
            register_user(db, "al", "secret1")
        with pytest.raises(ValidationError):
            register_user(db, "alice", "12345")

    def test_login(self, db):
        registered = register_user(db, "alice", "secret1")
        assert login_user(db, "alice", "secret1").user.id == registered.user.id
        with pytest.raises(AuthenticationError):
            login_user(db, "alice", "wrong")


def test_deleting_user_cascades(client, db, auth_headers, other_auth_headers, make_track):
    """Removing a user removes their tracks, environments and section config."""
    track = make_track(auth_headers)
    client.post(
        "/api/environments",
        headers=auth_headers,
        json={"name": "Dungeon", "combatTrackId": track["id"]},
    )
    client.post(
        "/api/sections?section=ambient",
        headers=auth_headers,
        json={"sounds": [{"id": track["id"], "source": "uploaded"}]},
    )
    other_track = make_track(other_auth_headers)

    assert delete_user(db, auth_headers.user_id) is True

    assert db.query(Track).filter(Track.user_id == auth_headers.user_id).count() == 0
    assert db.query(Environment).count() == 0
    assert db.query(SectionConfigEntry).count() == 0
    assert db.query(Track).filter(Track.id == other_track["id"]).count() == 1

    response = client.get("/api/tracks", headers=auth_headers)
    assert response.status_code == 401


def test_delete_unknown_user(db):
    assert delete_user(db, "missing") is False


class TestSettings:
    """Tests for production configuration checks."""

    def test_production_requires_jwt_secret(self):
        with pytest.raises(SettingsValidationError):
            Settings(
                environment="production",
                jwt_secret=DEVELOPMENT_JWT_SECRET,
                database_url="postgresql://db.internal/sanctum",
            )

    def test_production_rejects_localhost_database(self):
        with pytest.raises(SettingsValidationError):
            Settings(
                environment="production",
                jwt_secret="s3cret",
                database_url="postgresql://sanctum@localhost:5432/sanctum",
            )

    def test_production_requires_blob_token(self):
        with pytest.raises(SettingsValidationError):
            Settings(
                environment="production",
                jwt_secret="s3cret",
                database_url="postgresql://db.internal/sanctum",
                blob_backend="vercel",
            )

    def test_valid_production_settings(self):
        settings = Settings(
            environment="production",
            jwt_secret="s3cret",
            database_url="postgresql://db.internal/sanctum",
            blob_backend="vercel",
            blob_read_write_token="token",
        )
        assert settings.is_production

    def test_development_allows_default_secret(self):
        settings = Settings(environment="development")
        assert settings.is_development
