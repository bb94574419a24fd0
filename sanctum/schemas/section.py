"""Section configuration schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from sanctum.schemas.common import MessageResponse


class SoundResponse(BaseModel):
    """A built-in or uploaded sound as shown in a section."""

    id: str
    name: str
    icon: str
    source: str
    url: str | None = None
    file: str | None = None


class SoundRefIn(BaseModel):
    """One entry of a saved section list."""

    id: str = Field(..., min_length=1, max_length=255)
    source: str


class SectionSave(BaseModel):
    """Ordered replacement list for a section."""

    section_type: str | None = Field(
        None, validation_alias=AliasChoices("sectionType", "section_type", "section")
    )
    sounds: list[SoundRefIn]


class SectionResponse(MessageResponse):
    """Resolved sounds for one section."""

    model_config = ConfigDict(populate_by_name=True)

    section: str
    sounds: list[SoundResponse]
    is_default: bool = Field(..., alias="isDefault")


class SectionSaveResponse(MessageResponse):
    """Result of saving a section."""

    model_config = ConfigDict(populate_by_name=True)

    section: str
    sound_count: int = Field(..., alias="soundCount")


class SectionResetResponse(MessageResponse):
    """Result of resetting a section."""

    model_config = ConfigDict(populate_by_name=True)

    section: str
    default_sounds: list[SoundResponse] = Field(..., alias="defaultSounds")


class SectionSummaryResponse(MessageResponse):
    """Which sections are customised, plus the built-in catalog."""

    sections: dict[str, str]
    defaults: dict[str, list[SoundResponse]]
