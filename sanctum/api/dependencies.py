"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sanctum.database import get_db
from sanctum.models.user import User
from sanctum.services.auth import decode_access_token
from sanctum.services.blob_storage import BlobStorage, get_blob_storage
from sanctum.services.environment_service import EnvironmentService
from sanctum.services.section_service import SectionConfigService
from sanctum.services.track_service import TrackService
from sanctum.services.users import get_user_by_id

# Missing headers are reported by resolve_user so the message stays consistent
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_user(credentials: HTTPAuthorizationCredentials | None, db: Session) -> User:
    """Turn a bearer token into the user it was issued for."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Authorization token required")

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise _unauthorized("Invalid or expired token")

    user = get_user_by_id(db, claims.user_id)
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    return resolve_user(credentials, db)


def get_track_service(
    db: Annotated[Session, Depends(get_db)],
    blob_storage: Annotated[BlobStorage, Depends(get_blob_storage)],
) -> TrackService:
    """Get track service with dependencies."""
    return TrackService(db, blob_storage)


def get_environment_service(
    db: Annotated[Session, Depends(get_db)],
) -> EnvironmentService:
    """Get environment service with dependencies."""
    return EnvironmentService(db)


def get_section_service(
    db: Annotated[Session, Depends(get_db)],
) -> SectionConfigService:
    """Get section configuration service with dependencies."""
    return SectionConfigService(db)
