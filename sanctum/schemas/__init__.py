"""Pydantic schemas for API requests and responses."""

from sanctum.schemas.auth import AuthResponse, UserCredentials, UserResponse, VerifyResponse
from sanctum.schemas.blob import UploadResponse
from sanctum.schemas.common import ErrorResponse, MessageResponse
from sanctum.schemas.environment import (
    EnvironmentEnvelope,
    EnvironmentListResponse,
    EnvironmentResponse,
    EnvironmentWrite,
)
from sanctum.schemas.section import (
    SectionResetResponse,
    SectionResponse,
    SectionSave,
    SectionSaveResponse,
    SectionSummaryResponse,
)
from sanctum.schemas.track import TrackCreate, TrackEnvelope, TrackListResponse, TrackResponse

__all__ = [
    "UserCredentials",
    "UserResponse",
    "AuthResponse",
    "VerifyResponse",
    "MessageResponse",
    "ErrorResponse",
    "TrackCreate",
    "TrackResponse",
    "TrackEnvelope",
    "TrackListResponse",
    "EnvironmentWrite",
    "EnvironmentResponse",
    "EnvironmentEnvelope",
    "EnvironmentListResponse",
    "SectionSave",
    "SectionResponse",
    "SectionSaveResponse",
    "SectionResetResponse",
    "SectionSummaryResponse",
    "UploadResponse",
]
