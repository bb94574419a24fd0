"""Blob upload schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Location of a freshly stored file."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    url: str
    filename: str
    pathname: str
    file_size: int = Field(..., alias="fileSize")
    mime_type: str = Field(..., alias="mimeType")
