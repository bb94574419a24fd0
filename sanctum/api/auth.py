"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from sanctum.api.dependencies import get_current_user, resolve_user, security
from sanctum.database import get_db
from sanctum.exceptions import ValidationError
from sanctum.models.user import User
from sanctum.schemas.auth import AuthResponse, UserCredentials, UserResponse, VerifyResponse
from sanctum.services.users import login_user, register_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _require_credentials(credentials: UserCredentials | None) -> tuple[str, str]:
    if credentials is None or not credentials.username or not credentials.password:
        raise ValidationError("Username and password are required")
    return credentials.username, credentials.password


def _register(credentials: UserCredentials | None, db: Session) -> AuthResponse:
    username, password = _require_credentials(credentials)
    result = register_user(db, username, password)
    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


def _login(credentials: UserCredentials | None, db: Session) -> AuthResponse:
    username, password = _require_credentials(credentials)
    result = login_user(db, username, password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("")
def auth_action(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    credentials: Annotated[UserCredentials | None, Body()] = None,
    action: str | None = None,
):
    """Dispatch on ?action=register|login|verify."""
    if action == "register":
        response.status_code = status.HTTP_201_CREATED
        return _register(credentials, db)
    if action == "login":
        return _login(credentials, db)
    if action == "verify":
        user = resolve_user(bearer, db)
        return VerifyResponse(user=UserResponse.model_validate(user))

    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed or invalid action",
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    db: Annotated[Session, Depends(get_db)],
    credentials: Annotated[UserCredentials | None, Body()] = None,
):
    """Register a new user."""
    return _register(credentials, db)


@router.post("/login", response_model=AuthResponse)
def login(
    db: Annotated[Session, Depends(get_db)],
    credentials: Annotated[UserCredentials | None, Body()] = None,
):
    """Login with username and password."""
    return _login(credentials, db)


@router.post("/verify", response_model=VerifyResponse)
def verify(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return VerifyResponse(user=UserResponse.model_validate(current_user))
