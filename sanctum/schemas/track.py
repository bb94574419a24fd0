"""Track schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from sanctum.schemas.common import MessageResponse


class TrackCreate(BaseModel):
    """Metadata for a file already stored in the blob store."""

    name: str = Field(..., max_length=255)
    filename: str = Field(..., max_length=255)
    url: str
    type: str
    file_size: int = Field(..., validation_alias=AliasChoices("fileSize", "file_size"))
    mime_type: str = Field(
        ..., max_length=100, validation_alias=AliasChoices("mimeType", "mime_type")
    )


class TrackResponse(BaseModel):
    """Track response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    filename: str
    url: str
    type: str
    file_size: int
    mime_type: str
    created_at: datetime
    updated_at: datetime


class TrackEnvelope(MessageResponse):
    """Single track."""

    track: TrackResponse


class TrackListResponse(MessageResponse):
    """Tracks of the current user."""

    tracks: list[TrackResponse]
