"""SQLAlchemy models."""

from sanctum.models.environment import Environment
from sanctum.models.section_config import SectionConfigEntry
from sanctum.models.track import Track
from sanctum.models.user import User

__all__ = [
    "User",
    "Track",
    "Environment",
    "SectionConfigEntry",
]
