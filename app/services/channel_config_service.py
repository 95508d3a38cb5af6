# =============================================================================
# app/services/channel_config_service.py
# =============================================================================
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import PersistenceError
from app.core.logger import get_module_logger
from app.db.base import utcnow
from app.db.upsert import dialect_insert
from app.models.channel_config import ChannelConfig, DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE
from app.schemas.slack import ChannelConfigResponse, TriggerConfig

logger = get_module_logger(__name__, "logs/channel_config_service.log")

TRIGGER_LABELS = {
    "translate_on_reaction": "🌐 Translate on reaction",
    "translate_on_new_message": "📝 Translate new messages",
    "translate_on_mention": "🔔 Translate when mentioned",
}

class ChannelConfigService:
    """Store for per-channel translation settings"""

    @staticmethod
    def get_channel_config(db: Session, team_id: str, channel_id: str) -> Optional[ChannelConfig]:
        """Persisted config for a channel, or None if it was never saved"""
        try:
            return db.query(ChannelConfig).filter(
                ChannelConfig.team_id == team_id,
                ChannelConfig.channel_id == channel_id
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching channel config {team_id}/{channel_id}: {str(e)}")
            raise PersistenceError("Error fetching channel configuration")

    @staticmethod
    def default_channel_config() -> TriggerConfig:
        """Settings in effect for a channel nobody has configured yet (never persisted)"""
        return TriggerConfig(
            translate_on_reaction=True,
            translate_on_new_message=False,
            translate_on_mention=False,
            source_language=DEFAULT_SOURCE_LANGUAGE,
            target_language=DEFAULT_TARGET_LANGUAGE,
        )

    @staticmethod
    def get_effective_config(db: Session, team_id: str, channel_id: str) -> ChannelConfigResponse:
        """Persisted config, or the default one with no name and no timestamps"""
        config = ChannelConfigService.get_channel_config(db, team_id, channel_id)
        if config:
            return ChannelConfigResponse.model_validate(config)
        return ChannelConfigResponse(
            channel_id=channel_id,
            **ChannelConfigService.default_channel_config().model_dump()
        )

    @staticmethod
    def resolve_triggers(
        translate_on_reaction: bool,
        translate_on_new_message: bool,
        translate_on_mention: bool
    ) -> Tuple[bool, bool, bool]:
        """A channel is never saved with every trigger off; reaction is forced back on"""
        if not (translate_on_reaction or translate_on_new_message or translate_on_mention):
            return True, False, False
        return translate_on_reaction, translate_on_new_message, translate_on_mention

    @staticmethod
    def upsert_channel_config(
        db: Session,
        team_id: str,
        channel_id: str,
        channel_name: str,
        translate_on_reaction: bool = False,
        translate_on_new_message: bool = False,
        translate_on_mention: bool = False,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        target_language: str = DEFAULT_TARGET_LANGUAGE
    ) -> ChannelConfig:
        """Create or update the config row for (team, channel)"""
        reaction, new_message, mention = ChannelConfigService.resolve_triggers(
            translate_on_reaction, translate_on_new_message, translate_on_mention
        )
        now = utcnow()
        values = {
            "channel_name": channel_name,
            "translate_on_reaction": reaction,
            "translate_on_new_message": new_message,
            "translate_on_mention": mention,
            "source_language": source_language,
            "target_language": target_language,
            "updated_at": now,
        }

        try:
            insert = dialect_insert(db)
            if insert is not None:
                stmt = insert(ChannelConfig).values(
                    team_id=team_id, channel_id=channel_id, created_at=now, **values
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[ChannelConfig.team_id, ChannelConfig.channel_id],
                    set_=values,
                )
                db.execute(stmt)
            else:
                existing = ChannelConfigService.get_channel_config(db, team_id, channel_id)
                if existing:
                    for field, value in values.items():
                        setattr(existing, field, value)
                else:
                    db.add(ChannelConfig(team_id=team_id, channel_id=channel_id, created_at=now, **values))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error saving channel config {team_id}/{channel_id}: {str(e)}")
            raise PersistenceError("Error saving channel configuration")

        config = ChannelConfigService.get_channel_config(db, team_id, channel_id)
        logger.info(
            f"Saved channel config {team_id}/{channel_id}: reaction={reaction}, "
            f"new_message={new_message}, mention={mention}, {source_language} → {target_language}"
        )
        return config

    @staticmethod
    def enabled_trigger_labels(config) -> List[str]:
        """Human-readable names of the triggers switched on in a config"""
        return [label for field, label in TRIGGER_LABELS.items() if getattr(config, field, False)]
