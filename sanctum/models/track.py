"""Uploaded track model."""

from sqlalchemy import BigInteger, CheckConstraint, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from sanctum.database import Base
from sanctum.models.mixins import TimestampMixin, new_uuid


class Track(Base, TimestampMixin):
    """Metadata for one audio file stored in the blob store."""

    __tablename__ = "user_tracks"
    __table_args__ = (
        CheckConstraint("type IN ('music', 'ambient', 'effect')", name="ck_user_tracks_type"),
    )

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    filename = Column(String(255), nullable=False)
    url = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, index=True)
    file_size = Column(BigInteger, nullable=False)  # bytes
    mime_type = Column(String(100), nullable=False)

    owner = relationship("User", back_populates="tracks")
