"""Per-user section configuration model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, UniqueConstraint

from sanctum.database import Base
from sanctum.models.mixins import TimestampMixin


class SectionConfigEntry(Base, TimestampMixin):
    """One position in a user's customised ambient or effect list."""

    __tablename__ = "user_section_config"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "section_type", "display_order", name="uq_user_section_config_order"
        ),
        CheckConstraint(
            "section_type IN ('ambient', 'effect')", name="ck_user_section_config_section_type"
        ),
        CheckConstraint(
            "sound_source IN ('builtin', 'uploaded')", name="ck_user_section_config_sound_source"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    section_type = Column(String(20), nullable=False)
    sound_id = Column(String(255), nullable=False)  # catalog key or track id
    sound_source = Column(String(20), nullable=False)
    display_order = Column(Integer, nullable=False)
