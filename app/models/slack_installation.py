# =============================================================================
# app/models/slack_installation.py
# =============================================================================
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from app.db.base import BaseModel, utcnow

class SlackInstallation(BaseModel):
    __tablename__ = "slack_installations"

    team_id = Column(String(255), unique=True, nullable=False, index=True)
    team_name = Column(String(255), nullable=False)
    access_token = Column(Text, nullable=False)
    bot_user_id = Column(String(255), nullable=True)
    scope = Column(Text, nullable=True)
    installed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationship
    channel_configs = relationship(
        "ChannelConfig",
        back_populates="installation",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<SlackInstallation {self.team_id} ({self.team_name})>"
