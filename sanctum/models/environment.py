"""Environment model."""

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from sanctum.database import Base
from sanctum.models.mixins import TimestampMixin, new_uuid


class Environment(Base, TimestampMixin):
    """Named scenario bundling up to three situational tracks."""

    __tablename__ = "user_environments"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    combat_track_id = Column(
        String(36), ForeignKey("user_tracks.id", ondelete="SET NULL"), nullable=True
    )
    exploration_track_id = Column(
        String(36), ForeignKey("user_tracks.id", ondelete="SET NULL"), nullable=True
    )
    tension_track_id = Column(
        String(36), ForeignKey("user_tracks.id", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    owner = relationship("User", back_populates="environments")
    combat_track = relationship("Track", foreign_keys=[combat_track_id], lazy="joined")
    exploration_track = relationship("Track", foreign_keys=[exploration_track_id], lazy="joined")
    tension_track = relationship("Track", foreign_keys=[tension_track_id], lazy="joined")
