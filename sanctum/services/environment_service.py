"""Environment store: named bundles of combat, exploration and tension tracks."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from sanctum.exceptions import NotFoundError, ValidationError
from sanctum.models.enums import EnvironmentSlot
from sanctum.models.environment import Environment
from sanctum.services.track_service import TrackService


@dataclass
class TrackRefs:
    """Track ids for the three slots; None leaves a slot empty."""

    combat_track_id: str | None = None
    exploration_track_id: str | None = None
    tension_track_id: str | None = None

    def columns(self) -> dict[str, str | None]:
        """Slot column name to track id, for every slot."""
        return {slot.column: getattr(self, slot.column) for slot in EnvironmentSlot}

    def ids(self) -> list[str]:
        """Distinct non-empty ids."""
        return list(dict.fromkeys(ref for ref in self.columns().values() if ref))


class EnvironmentService:
    """Service for environment operations."""

    def __init__(self, db: Session):
        self.db = db
        self.tracks = TrackService(db)

    @staticmethod
    def _clean_name(name: str | None) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Environment name is required")
        return name

    def _validate_track_refs(self, user_id: str, refs: TrackRefs) -> None:
        """Every referenced track must exist and belong to the same user."""
        track_ids = refs.ids()
        owned = self.tracks.get_owned_ids(track_ids, user_id)
        if any(track_id not in owned for track_id in track_ids):
            raise ValidationError("Some track IDs are invalid or do not belong to you")

    def create(self, user_id: str, name: str, refs: TrackRefs) -> Environment:
        """Create an environment after validating name and track ownership."""
        name = self._clean_name(name)
        self._validate_track_refs(user_id, refs)

        environment = Environment(
            user_id=user_id,
            name=name,
            **refs.columns(),
        )
        self.db.add(environment)
        self.db.commit()
        self.db.refresh(environment)
        return environment

    def list_environments(self, user_id: str) -> list[Environment]:
        """Environments owned by the user with their tracks joined, newest first."""
        return (
            self.db.query(Environment)
            .filter(Environment.user_id == user_id)
            .order_by(Environment.created_at.desc())
            .all()
        )

    def get(self, environment_id: str, user_id: str) -> Environment:
        """Get an environment owned by the user."""
        environment = (
            self.db.query(Environment)
            .filter(Environment.id == environment_id, Environment.user_id == user_id)
            .first()
        )
        if not environment:
            raise NotFoundError("Environment not found")
        return environment

    def update(self, environment_id: str, user_id: str, name: str, refs: TrackRefs) -> Environment:
        """Replace name and all three track slots; omitted slots become empty."""
        environment = self.get(environment_id, user_id)
        name = self._clean_name(name)
        self._validate_track_refs(user_id, refs)

        environment.name = name
        for column, track_id in refs.columns().items():
            setattr(environment, column, track_id)

        self.db.commit()
        self.db.refresh(environment)
        return environment

    def delete(self, environment_id: str, user_id: str) -> None:
        """Hard delete an environment; its tracks are kept."""
        environment = self.get(environment_id, user_id)
        self.db.delete(environment)
        self.db.commit()
