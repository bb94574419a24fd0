"""Track store: uploaded audio metadata scoped to its owner."""

import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from sanctum.exceptions import NotFoundError, ValidationError
from sanctum.models.enums import EnvironmentSlot, TrackType, enum_values
from sanctum.models.environment import Environment
from sanctum.models.track import Track
from sanctum.services.blob_storage import BlobStorage

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MiB

ALLOWED_MIME_TYPES = frozenset(
    {
        "audio/mpeg",
        "audio/mp3",
        "audio/wav",
        "audio/ogg",
        "audio/m4a",
        "audio/aac",
        "audio/flac",
        "audio/x-m4a",
    }
)


def normalize_mime_type(mime_type: str | None) -> str:
    """Lowercase the media type and drop parameters such as charset."""
    return (mime_type or "").split(";", 1)[0].strip().lower()


def is_allowed_mime_type(mime_type: str | None) -> bool:
    """Check a content type against the audio allow-list."""
    return normalize_mime_type(mime_type) in ALLOWED_MIME_TYPES


def validate_track_type(track_type: str) -> str:
    """Reject anything but music, ambient or effect."""
    if track_type not in enum_values(TrackType):
        raise ValidationError("Type must be one of: music, ambient, effect")
    return track_type


class TrackService:
    """Service for track metadata operations."""

    def __init__(self, db: Session, blob_storage: BlobStorage | None = None):
        self.db = db
        self.blob_storage = blob_storage

    def _check_blob_url(self, url: str, user_id: str) -> None:
        if self.blob_storage is not None and not self.blob_storage.is_owned_by(url, user_id):
            raise ValidationError("Track URL must point to one of your uploads")

    def create(
        self,
        user_id: str,
        name: str,
        filename: str,
        url: str,
        track_type: str,
        file_size: int,
        mime_type: str,
    ) -> Track:
        """Persist metadata for a blob that has already been stored."""
        name = name.strip()
        if not name or not filename or not url:
            raise ValidationError("Missing required fields: name, filename, url, type")
        validate_track_type(track_type)
        if not is_allowed_mime_type(mime_type):
            raise ValidationError("Invalid file type. Only audio files are allowed.")
        if file_size < 0:
            raise ValidationError("File size must not be negative")
        if file_size > MAX_FILE_SIZE:
            raise ValidationError("File size too large (max 50MB)")
        self._check_blob_url(url, user_id)

        track = Track(
            user_id=user_id,
            name=name,
            filename=filename,
            url=url,
            type=track_type,
            file_size=file_size,
            mime_type=normalize_mime_type(mime_type),
        )
        self.db.add(track)
        self.db.commit()
        self.db.refresh(track)
        return track

    def list_tracks(self, user_id: str, track_type: str | None = None) -> list[Track]:
        """Tracks owned by the user, newest first."""
        query = self.db.query(Track).filter(Track.user_id == user_id)
        if track_type is not None:
            query = query.filter(Track.type == validate_track_type(track_type))
        return query.order_by(Track.created_at.desc()).all()

    def get(self, track_id: str, user_id: str) -> Track:
        """Get a track owned by the user."""
        track = self.db.query(Track).filter(Track.id == track_id, Track.user_id == user_id).first()
        if not track:
            raise NotFoundError("Track not found")
        return track

    def get_owned_ids(self, track_ids: list[str], user_id: str) -> set[str]:
        """Subset of track_ids owned by the user, in one query."""
        if not track_ids:
            return set()
        rows = (
            self.db.query(Track.id)
            .filter(Track.id.in_(track_ids), Track.user_id == user_id)
            .all()
        )
        return {track_id for (track_id,) in rows}

    def delete_record(self, track_id: str, user_id: str) -> tuple[Track, str | None]:
        """Delete the metadata row.

        Returns the deleted track and the blob URL that is now unreferenced, or
        None when another track row still points at the same blob.
        """
        track = self.get(track_id, user_id)

        # Clear environment slots pointing at this track
        for slot in EnvironmentSlot:
            column = getattr(Environment, slot.column)
            self.db.query(Environment).filter(column == track_id).update(
                {column: None}, synchronize_session=False
            )

        blob_url = track.url
        self.db.delete(track)
        self.db.commit()

        still_referenced = self.db.query(Track.id).filter(Track.url == blob_url).first()
        return track, None if still_referenced else blob_url

    async def delete_blob(self, track_id: str, blob_url: str) -> None:
        """Best-effort removal of a blob whose metadata is already gone."""
        if self.blob_storage is None:
            return
        try:
            await self.blob_storage.delete(blob_url)
        except Exception as e:
            # Metadata is already gone; an unreferenced blob is harmless
            logger.warning(f"Failed to delete blob for track {track_id}: {e}")

    async def delete(self, track_id: str, user_id: str) -> Track:
        """Delete the metadata row in the threadpool, then the backing blob."""
        track, orphaned_url = await run_in_threadpool(self.delete_record, track_id, user_id)
        if orphaned_url is not None:
            await self.delete_blob(track_id, orphaned_url)
        else:
            logger.info(f"Blob for track {track_id} is still referenced, keeping it")
        return track
