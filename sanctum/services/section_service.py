"""Section configuration store: per-user ordered ambient and effect lists."""

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from sanctum.exceptions import ValidationError
from sanctum.models.enums import SectionType, SoundSource, enum_values
from sanctum.models.section_config import SectionConfigEntry
from sanctum.models.track import Track
from sanctum.services.catalog import UPLOADED_ICONS, find_builtin_sound, get_default_sounds
from sanctum.services.track_service import TrackService

logger = logging.getLogger(__name__)


@dataclass
class SectionSounds:
    """Resolved sounds for one section."""

    section: str
    sounds: list[dict] = field(default_factory=list)
    is_default: bool = True


@dataclass
class SoundRef:
    """A sound chosen for a section: a catalog key or a track id."""

    id: str
    source: str


def validate_section(section: str | None) -> str:
    """Only ambient and effect sections exist."""
    if section not in enum_values(SectionType):
        raise ValidationError("Invalid section type")
    return section


def uploaded_sound(track: Track, section: str) -> dict:
    """Render an uploaded track as a section sound."""
    return {
        "id": str(track.id),
        "name": track.name,
        "icon": UPLOADED_ICONS[section],
        "url": track.url,
        "source": SoundSource.UPLOADED.value,
    }


class SectionConfigService:
    """Service for section configuration operations."""

    def __init__(self, db: Session):
        self.db = db
        self.tracks = TrackService(db)

    def _entries(self, user_id: str, section: str) -> list[SectionConfigEntry]:
        return (
            self.db.query(SectionConfigEntry)
            .filter(
                SectionConfigEntry.user_id == user_id,
                SectionConfigEntry.section_type == section,
            )
            .order_by(SectionConfigEntry.display_order)
            .all()
        )

    def get(self, user_id: str, section: str) -> SectionSounds:
        """Configured sounds for a section, or the built-in list when none are saved."""
        section = validate_section(section)
        entries = self._entries(user_id, section)
        if not entries:
            return SectionSounds(section=section, sounds=get_default_sounds(section))

        uploaded_ids = [
            entry.sound_id for entry in entries if entry.sound_source == SoundSource.UPLOADED.value
        ]
        tracks_by_id = {}
        if uploaded_ids:
            tracks = (
                self.db.query(Track)
                .filter(Track.id.in_(uploaded_ids), Track.user_id == user_id)
                .all()
            )
            tracks_by_id = {track.id: track for track in tracks}

        sounds = []
        for entry in entries:
            if entry.sound_source == SoundSource.BUILTIN.value:
                sound = find_builtin_sound(section, entry.sound_id)
                if sound:
                    sounds.append(sound)
            elif entry.sound_id in tracks_by_id:
                sounds.append(uploaded_sound(tracks_by_id[entry.sound_id], section))

        return SectionSounds(section=section, sounds=sounds, is_default=False)

    def _validate_sounds(self, user_id: str, section: str, sounds: list[SoundRef]) -> None:
        uploaded_ids = []
        for sound in sounds:
            if sound.source not in enum_values(SoundSource):
                raise ValidationError("Sound source must be one of: builtin, uploaded")
            if sound.source == SoundSource.BUILTIN.value:
                if find_builtin_sound(section, sound.id) is None:
                    raise ValidationError(f"Unknown built-in sound: {sound.id}")
            else:
                uploaded_ids.append(sound.id)

        owned = self.tracks.get_owned_ids(uploaded_ids, user_id)
        if any(track_id not in owned for track_id in uploaded_ids):
            raise ValidationError("Some track IDs are invalid or do not belong to you")

    def save(self, user_id: str, section: str, sounds: list[SoundRef]) -> int:
        """Replace the whole section list in one transaction.

        Returns the number of sounds stored.
        """
        section = validate_section(section)
        self._validate_sounds(user_id, section, sounds)

        try:
            self.db.query(SectionConfigEntry).filter(
                SectionConfigEntry.user_id == user_id,
                SectionConfigEntry.section_type == section,
            ).delete(synchronize_session=False)
            self.db.add_all(
                [
                    SectionConfigEntry(
                        user_id=user_id,
                        section_type=section,
                        sound_id=sound.id,
                        sound_source=sound.source,
                        display_order=position,
                    )
                    for position, sound in enumerate(sounds)
                ]
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Saved {len(sounds)} {section} sounds for user {user_id}")
        return len(sounds)

    def reset(self, user_id: str, section: str) -> None:
        """Delete the saved list so the section falls back to the built-in sounds."""
        section = validate_section(section)
        self.db.query(SectionConfigEntry).filter(
            SectionConfigEntry.user_id == user_id,
            SectionConfigEntry.section_type == section,
        ).delete(synchronize_session=False)
        self.db.commit()

    def summary(self, user_id: str) -> dict[str, str]:
        """Whether each section is configured or uses the defaults."""
        return {
            section: "configured" if self._entries(user_id, section) else "default"
            for section in enum_values(SectionType)
        }
