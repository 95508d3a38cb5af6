# =============================================================================
# app/db/init_db.py
# =============================================================================
from app.db.base import Base
from app.db.session import Database
from app.models.slack_installation import SlackInstallation
from app.models.channel_config import ChannelConfig

def init_db(database: Database):
    """Initialize database tables"""
    Base.metadata.create_all(bind=database.engine)
