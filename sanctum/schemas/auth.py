"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sanctum.schemas.common import MessageResponse


class UserCredentials(BaseModel):
    """Register or login request. Presence and length are checked by the handler."""

    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    created_at: datetime


class AuthResponse(MessageResponse):
    """Authentication response with token and user info."""

    token: str
    user: UserResponse


class VerifyResponse(MessageResponse):
    """Current user for a valid token."""

    user: UserResponse
