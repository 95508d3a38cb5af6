# =============================================================================
# app/services/event_dispatcher.py
# =============================================================================
import re
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from app.core.logger import get_module_logger
from app.db.session import Database
from app.services.channel_config_service import ChannelConfigService
from app.services.installation_service import InstallationService
from app.services.modal_service import build_translation_blocks
from app.services.slack_service import SlackService
from app.services.translation_service import Translator, safe_translate

logger = get_module_logger(__name__, "logs/event_dispatcher.log")

TRANSLATE_REACTION = "globe_with_meridians"
IGNORED_MESSAGE_SUBTYPES = {"message_changed", "message_deleted", "bot_message"}
MENTION_PATTERN = re.compile(r"<@[^>]+>")

class EventDispatcher:
    """
    Routes Slack event callbacks to translation

    Every event is handled on its own, with no memory of earlier ones.
    Translation only fires for channels whose config was explicitly saved;
    the default config used elsewhere never applies here. Failures are
    logged and swallowed because Slack has already been acknowledged.
    """

    def __init__(self, database: Database, translator: Translator):
        self.database = database
        self.translator = translator
        self.handlers = {
            "message": self.handle_message,
            "reaction_added": self.handle_reaction,
            "app_mention": self.handle_mention,
        }

    def dispatch(self, team_id: Optional[str], event: Dict[str, Any]) -> None:
        event_type = event.get("type")
        handler = self.handlers.get(event_type)
        if handler is None:
            logger.info(f"Ignoring event type {event_type} in team {team_id}")
            return

        logger.info(f"Received event: {event_type} in team: {team_id}")
        try:
            with self.database.session() as db:
                handler(db, team_id, event)
        except Exception as e:
            logger.error(f"Error handling {event_type} event: {str(e)}", exc_info=True)

    def handle_message(self, db: Session, team_id: str, event: Dict[str, Any]) -> None:
        if event.get("bot_id") or event.get("subtype") in IGNORED_MESSAGE_SUBTYPES:
            return

        channel = event.get("channel")
        config = ChannelConfigService.get_channel_config(db, team_id, channel)
        if not config or not config.translate_on_new_message:
            return

        text = event.get("text") or ""
        translated = self._translate(text, config)
        if translated:
            self.post_translation(
                db, team_id, channel, translated,
                f"Auto-translated ({config.source_language} → {config.target_language})"
            )

    def handle_reaction(self, db: Session, team_id: str, event: Dict[str, Any]) -> None:
        if event.get("reaction") != TRANSLATE_REACTION:
            return

        item = event.get("item") or {}
        channel = item.get("channel")
        ts = item.get("ts")
        config = ChannelConfigService.get_channel_config(db, team_id, channel)
        if not config or not config.translate_on_reaction:
            return

        access_token = InstallationService.get_access_token(db, team_id)
        if not access_token:
            return

        original = SlackService.fetch_message(access_token, channel, ts)
        if not original:
            return

        text = original.get("text") or ""
        translated = self._translate(text, config)
        if translated:
            self.post_translation(
                db, team_id, channel, translated,
                f"Translated ({config.source_language} → {config.target_language})",
                thread_ts=ts
            )

    def handle_mention(self, db: Session, team_id: str, event: Dict[str, Any]) -> None:
        channel = event.get("channel")
        config = ChannelConfigService.get_channel_config(db, team_id, channel)
        if not config or not config.translate_on_mention:
            return

        text = MENTION_PATTERN.sub("", event.get("text") or "").strip()
        if not text:
            return

        translated = self._translate(text, config)
        if translated:
            self.post_translation(
                db, team_id, channel, translated,
                f"Translated ({config.source_language} → {config.target_language})"
            )

    def post_translation(
        self,
        db: Session,
        team_id: str,
        channel: str,
        translated_text: str,
        note: str,
        thread_ts: Optional[str] = None
    ) -> None:
        access_token = InstallationService.get_access_token(db, team_id)
        if not access_token:
            return

        SlackService.send_slack_message(
            access_token=access_token,
            channel=channel,
            text=f"🌐 {translated_text}",
            blocks=build_translation_blocks(translated_text, note),
            thread_ts=thread_ts
        )

    def _translate(self, text: str, config) -> Optional[str]:
        """Translation worth posting, or None"""
        if not text.strip():
            return None
        if config.source_language == config.target_language:
            return None
        translated = safe_translate(self.translator, text, config.source_language, config.target_language)
        if not translated or translated == text:
            return None
        return translated
