# =============================================================================
# app/models/channel_config.py
# =============================================================================
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel, utcnow

DEFAULT_SOURCE_LANGUAGE = "auto"
DEFAULT_TARGET_LANGUAGE = "en"

class ChannelConfig(BaseModel):
    __tablename__ = "channel_configs"
    __table_args__ = (
        UniqueConstraint("team_id", "channel_id", name="uq_channel_configs_team_channel"),
    )

    team_id = Column(
        String(255),
        ForeignKey("slack_installations.team_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    channel_id = Column(String(255), nullable=False)
    channel_name = Column(String(255), nullable=False)
    translate_on_reaction = Column(Boolean, default=False, nullable=False)
    translate_on_new_message = Column(Boolean, default=False, nullable=False)
    translate_on_mention = Column(Boolean, default=False, nullable=False)
    source_language = Column(String(10), default=DEFAULT_SOURCE_LANGUAGE, nullable=False)
    target_language = Column(String(10), default=DEFAULT_TARGET_LANGUAGE, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationship
    installation = relationship("SlackInstallation", back_populates="channel_configs")

    def __repr__(self):
        return f"<ChannelConfig {self.team_id}/{self.channel_id}>"
