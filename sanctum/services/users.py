"""User directory: registration, login and lookup."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sanctum.exceptions import AuthenticationError, ConflictError, ValidationError
from sanctum.models.user import User
from sanctum.services.auth import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


@dataclass
class AuthResult:
    """A user together with a freshly issued session token."""

    user: User
    token: str


def normalize_username(username: str) -> str:
    """Usernames are unique case-insensitively."""
    return username.strip().lower()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username (case-insensitive)."""
    return db.query(User).filter(User.username == normalize_username(username)).first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, username: str, password: str) -> User:
    """Create a new user."""
    user = User(username=normalize_username(username), password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race against a concurrent registration of the same name
        db.rollback()
        raise ConflictError("Username already exists") from e
    db.refresh(user)
    return user


def register_user(db: Session, username: str, password: str) -> AuthResult:
    """Register a new user and issue a token."""
    normalized = normalize_username(username)
    if len(normalized) < MIN_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters long")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if get_user_by_username(db, normalized):
        raise ConflictError("Username already exists")

    user = create_user(db, normalized, password)
    logger.info(f"Registered user {user.id}")
    return AuthResult(user=user, token=create_access_token(user.id, user.username))


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Authenticate a user by username and password."""
    user = get_user_by_username(db, username)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def login_user(db: Session, username: str, password: str) -> AuthResult:
    """Verify credentials and issue a token.

    Unknown usernames and wrong passwords fail with the same message.
    """
    user = authenticate_user(db, username, password)
    if not user:
        logger.info("Failed login attempt")
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    return AuthResult(user=user, token=create_access_token(user.id, user.username))


def delete_user(db: Session, user_id: str) -> bool:
    """Delete a user; tracks, environments and section config cascade in the database."""
    deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info(f"Deleted user {user_id}")
    return bool(deleted)
