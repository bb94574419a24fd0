"""Enums for model fields."""

from enum import Enum


class TrackType(str, Enum):
    """What an uploaded track is used for."""

    MUSIC = "music"
    AMBIENT = "ambient"
    EFFECT = "effect"


class SectionType(str, Enum):
    """Customisable sound sections."""

    AMBIENT = "ambient"
    EFFECT = "effect"


class SoundSource(str, Enum):
    """Where a configured section sound comes from."""

    BUILTIN = "builtin"
    UPLOADED = "uploaded"


class EnvironmentSlot(str, Enum):
    """Situational slots of an environment."""

    COMBAT = "combat"
    EXPLORATION = "exploration"
    TENSION = "tension"

    @property
    def column(self) -> str:
        """Name of the track reference column for this slot."""
        return f"{self.value}_track_id"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Return the string values of an enum, in declaration order."""
    return [member.value for member in enum_cls]
