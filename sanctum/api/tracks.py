"""Track API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sanctum.api.dependencies import get_current_user, get_track_service
from sanctum.models.user import User
from sanctum.schemas.track import TrackCreate, TrackEnvelope, TrackListResponse, TrackResponse
from sanctum.services.track_service import TrackService

router = APIRouter(prefix="/api/tracks", tags=["tracks"])


@router.get("")
def get_tracks(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TrackService, Depends(get_track_service)],
    track_id: Annotated[str | None, Query(alias="id")] = None,
    track_type: Annotated[str | None, Query(alias="type")] = None,
):
    """List the user's tracks (optionally by ?type=), or fetch one with ?id=."""
    if track_id:
        track = service.get(track_id, current_user.id)
        return TrackEnvelope(track=TrackResponse.model_validate(track))

    tracks = service.list_tracks(current_user.id, track_type or None)
    return TrackListResponse(tracks=[TrackResponse.model_validate(t) for t in tracks])


@router.post("", response_model=TrackEnvelope)
def create_track(
    track_data: TrackCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TrackService, Depends(get_track_service)],
    track_id: Annotated[str | None, Query(alias="id")] = None,
):
    """Save metadata for an uploaded file."""
    if track_id:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail="Method not allowed"
        )

    track = service.create(
        user_id=current_user.id,
        name=track_data.name,
        filename=track_data.filename,
        url=track_data.url,
        track_type=track_data.type,
        file_size=track_data.file_size,
        mime_type=track_data.mime_type,
    )
    return TrackEnvelope(
        message="Track uploaded successfully",
        track=TrackResponse.model_validate(track),
    )


@router.delete("", response_model=TrackEnvelope)
async def delete_track(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[TrackService, Depends(get_track_service)],
    track_id: Annotated[str | None, Query(alias="id")] = None,
):
    """Delete a track and its stored file."""
    if not track_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Track ID is required"
        )

    track = await service.delete(track_id, current_user.id)
    return TrackEnvelope(
        message="Track deleted successfully",
        track=TrackResponse.model_validate(track),
    )
