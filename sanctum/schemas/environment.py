"""Environment schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field

from sanctum.schemas.common import MessageResponse


class EnvironmentWrite(BaseModel):
    """Create or fully replace an environment.

    Omitted track ids clear their slot.
    """

    name: str | None = Field(None, max_length=255)
    combat_track_id: str | None = Field(
        None, validation_alias=AliasChoices("combatTrackId", "combat_track_id")
    )
    exploration_track_id: str | None = Field(
        None, validation_alias=AliasChoices("explorationTrackId", "exploration_track_id")
    )
    tension_track_id: str | None = Field(
        None,
        validation_alias=AliasChoices("tensionTrackId", "tension_track_id", "sneakTrackId"),
    )


class TrackSummary(BaseModel):
    """Display data for a track linked to an environment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    url: str


class EnvironmentTracks(BaseModel):
    """Tracks keyed by slot."""

    combat: TrackSummary | None
    exploration: TrackSummary | None
    tension: TrackSummary | None


class EnvironmentResponse(BaseModel):
    """Environment response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    combat_track_id: str | None
    exploration_track_id: str | None
    tension_track_id: str | None
    combat_track: TrackSummary | None
    exploration_track: TrackSummary | None
    tension_track: TrackSummary | None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def tracks(self) -> EnvironmentTracks:
        return EnvironmentTracks(
            combat=self.combat_track,
            exploration=self.exploration_track,
            tension=self.tension_track,
        )


class EnvironmentEnvelope(MessageResponse):
    """Single environment."""

    environment: EnvironmentResponse


class EnvironmentListResponse(MessageResponse):
    """Environments of the current user."""

    environments: list[EnvironmentResponse]
