"""User model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from sanctum.database import Base
from sanctum.models.mixins import TimestampMixin, new_uuid


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    username = Column(String(255), unique=True, nullable=False, index=True)  # lowercased
    password_hash = Column(String(255), nullable=False)

    # Unloaded children are removed by ON DELETE CASCADE
    tracks = relationship(
        "Track", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
    environments = relationship(
        "Environment", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
