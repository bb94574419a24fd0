"""Authentication service for JWT and password handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from sanctum.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_pwd_context() -> CryptContext:
    """Password hashing context (bcrypt, work factor from settings)."""
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=get_settings().bcrypt_rounds,
    )


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a session token."""

    user_id: str
    username: str
    issued_at: datetime
    expires_at: datetime


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    try:
        return get_pwd_context().verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Password hash could not be identified")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return get_pwd_context().hash(password)


def create_access_token(user_id: str, username: str) -> str:
    """Create a JWT access token."""
    settings = get_settings()
    issued_at = datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims | None:
    """Decode and validate a JWT token.

    Returns None for any malformed, tampered or expired token.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    user_id = payload.get("sub")
    issued_at = payload.get("iat")
    expires_at = payload.get("exp")
    if not user_id or issued_at is None or expires_at is None:
        return None

    return TokenClaims(
        user_id=user_id,
        username=payload.get("username", ""),
        issued_at=datetime.fromtimestamp(issued_at, UTC),
        expires_at=datetime.fromtimestamp(expires_at, UTC),
    )
