"""Environment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sanctum.api.dependencies import get_current_user, get_environment_service
from sanctum.models.user import User
from sanctum.schemas.common import MessageResponse
from sanctum.schemas.environment import (
    EnvironmentEnvelope,
    EnvironmentListResponse,
    EnvironmentResponse,
    EnvironmentWrite,
)
from sanctum.services.environment_service import EnvironmentService, TrackRefs

router = APIRouter(prefix="/api/environments", tags=["environments"])


def _require_id(environment_id: str | None) -> str:
    if not environment_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Environment ID is required",
        )
    return environment_id


def _track_refs(data: EnvironmentWrite) -> TrackRefs:
    # Empty strings from form inputs mean "no track"
    return TrackRefs(
        combat_track_id=data.combat_track_id or None,
        exploration_track_id=data.exploration_track_id or None,
        tension_track_id=data.tension_track_id or None,
    )


@router.get("")
def get_environments(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EnvironmentService, Depends(get_environment_service)],
    environment_id: Annotated[str | None, Query(alias="id")] = None,
):
    """List the user's environments, or fetch one with ?id=."""
    if environment_id:
        environment = service.get(environment_id, current_user.id)
        return EnvironmentEnvelope(environment=EnvironmentResponse.model_validate(environment))

    environments = service.list_environments(current_user.id)
    return EnvironmentListResponse(
        environments=[EnvironmentResponse.model_validate(env) for env in environments]
    )


@router.post("", response_model=EnvironmentEnvelope)
def create_environment(
    environment_data: EnvironmentWrite,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EnvironmentService, Depends(get_environment_service)],
):
    """Create a new environment."""
    environment = service.create(
        current_user.id, environment_data.name, _track_refs(environment_data)
    )
    return EnvironmentEnvelope(
        message="Environment created successfully",
        environment=EnvironmentResponse.model_validate(environment),
    )


@router.put("", response_model=EnvironmentEnvelope)
def update_environment(
    environment_data: EnvironmentWrite,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EnvironmentService, Depends(get_environment_service)],
    environment_id: Annotated[str | None, Query(alias="id")] = None,
):
    """Replace an environment's name and all three track slots."""
    environment = service.update(
        _require_id(environment_id),
        current_user.id,
        environment_data.name,
        _track_refs(environment_data),
    )
    return EnvironmentEnvelope(
        message="Environment updated successfully",
        environment=EnvironmentResponse.model_validate(environment),
    )


@router.delete("", response_model=MessageResponse)
def delete_environment(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[EnvironmentService, Depends(get_environment_service)],
    environment_id: Annotated[str | None, Query(alias="id")] = None,
):
    """Delete an environment. Its tracks are kept."""
    service.delete(_require_id(environment_id), current_user.id)
    return MessageResponse(message="Environment deleted successfully")
