"""Response envelope shared by every endpoint."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Success or failure with a human-readable message."""

    success: bool = True
    message: str | None = None


class ErrorResponse(BaseModel):
    """Failure envelope; error carries exception text outside production."""

    success: bool = False
    message: str
    error: str | None = None
