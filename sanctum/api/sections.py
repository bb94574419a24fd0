"""Section configuration API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from sanctum.api.dependencies import get_current_user, get_section_service
from sanctum.models.user import User
from sanctum.schemas.section import (
    SectionResetResponse,
    SectionResponse,
    SectionSave,
    SectionSaveResponse,
    SectionSummaryResponse,
)
from sanctum.services.catalog import DEFAULT_SOUNDS, get_default_sounds
from sanctum.services.section_service import SectionConfigService, SoundRef, validate_section

router = APIRouter(prefix="/api/sections", tags=["sections"])


@router.get("")
def get_sections(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SectionConfigService, Depends(get_section_service)],
    section: str | None = None,
):
    """Sounds for ?section=, or which sections are customised when it is omitted."""
    if section is None:
        return SectionSummaryResponse(
            sections=service.summary(current_user.id), defaults=DEFAULT_SOUNDS
        )

    result = service.get(current_user.id, section)
    return SectionResponse(
        section=result.section, sounds=result.sounds, is_default=result.is_default
    )


@router.post("", response_model=SectionSaveResponse)
def save_section(
    section_data: SectionSave,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SectionConfigService, Depends(get_section_service)],
    section: str | None = None,
):
    """Replace a section's ordered sound list."""
    section_type = validate_section(section or section_data.section_type)
    sounds = [SoundRef(id=sound.id, source=sound.source) for sound in section_data.sounds]
    count = service.save(current_user.id, section_type, sounds)
    return SectionSaveResponse(
        message=f"{section_type} section configuration saved",
        section=section_type,
        sound_count=count,
    )


@router.delete("", response_model=SectionResetResponse)
def reset_section(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SectionConfigService, Depends(get_section_service)],
    section: str | None = None,
):
    """Drop a section's customisation so it shows the built-in sounds again."""
    section_type = validate_section(section)
    service.reset(current_user.id, section_type)
    return SectionResetResponse(
        message=f"{section_type} section reset to default",
        section=section_type,
        default_sounds=get_default_sounds(section_type),
    )
