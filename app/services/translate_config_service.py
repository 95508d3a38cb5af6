# =============================================================================
# app/services/translate_config_service.py
# =============================================================================
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from app.core.exceptions import PersistenceError, ValidationError
from app.core.logger import get_module_logger
from app.models.channel_config import DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE
from app.schemas.slack import ModalContext, TriggerConfig
from app.services.channel_config_service import ChannelConfigService
from app.services.installation_service import InstallationService
from app.services.modal_service import (
    CONFIG_MODAL_CALLBACK_ID,
    build_config_modal,
    build_confirmation_message,
    parse_selected_triggers,
)
from app.services.slack_service import SlackService

logger = get_module_logger(__name__, "logs/translate_config_service.log")

NOT_INSTALLED_TEXT = "❌ App not properly installed. Please reinstall the app."
MODAL_FAILED_TEXT = "❌ Error opening configuration modal. Please try again."
COMMAND_FAILED_TEXT = "❌ Error processing command. Please try again."

def ephemeral(text: str) -> Dict[str, str]:
    return {"response_type": "ephemeral", "text": text}

class TranslateConfigService:
    """The /translate-config slash command and its modal submission"""

    @staticmethod
    def open_config_modal(
        db: Session,
        team_id: str,
        channel_id: str,
        channel_name: str,
        trigger_id: str
    ) -> Optional[Dict[str, str]]:
        """
        Open the configuration modal for a channel

        Returns None once the modal is open, otherwise the ephemeral message
        to answer the slash command with.
        """
        installation = InstallationService.get_installation(db, team_id)
        if not installation:
            logger.warning(f"Slash command from team without installation: {team_id}")
            return ephemeral(NOT_INSTALLED_TEXT)

        config = ChannelConfigService.get_channel_config(db, team_id, channel_id)
        if config:
            logger.info(f"Using existing config for {team_id}/{channel_id}")
        else:
            config = ChannelConfigService.default_channel_config()
            logger.info(f"Using default config for new channel {team_id}/{channel_id}")

        context = ModalContext(team_id=team_id, channel_id=channel_id, channel_name=channel_name)
        view = build_config_modal(context, config)

        result = SlackService.open_view(installation.access_token, trigger_id, view)
        if not result["success"]:
            return ephemeral(MODAL_FAILED_TEXT)

        logger.info(f"Opened config modal for {team_id}/{channel_id}")
        return None

    @staticmethod
    def is_config_submission(payload: Dict[str, Any]) -> bool:
        return (
            payload.get("type") == "view_submission"
            and (payload.get("view") or {}).get("callback_id") == CONFIG_MODAL_CALLBACK_ID
        )

    @staticmethod
    def handle_config_submission(db: Session, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Save the channel settings chosen in the modal

        Returns the keyword arguments for the confirmation post in the channel,
        or None when there is nothing to announce. Saving is best-effort: a
        failed save is only logged and the modal still closes.
        """
        view = payload.get("view") or {}
        try:
            context = ModalContext.from_private_metadata(view.get("private_metadata"))
        except ValidationError as e:
            logger.error(f"Dropping config submission: {e.message}")
            return None

        triggers = parse_selected_triggers(view.get("state"))
        reaction, new_message, mention = ChannelConfigService.resolve_triggers(
            triggers["translate_on_reaction"],
            triggers["translate_on_new_message"],
            triggers["translate_on_mention"],
        )
        logger.info(
            f"Config submission for {context.team_id}/{context.channel_id}: "
            f"reaction={reaction}, new_message={new_message}, mention={mention}"
        )

        try:
            ChannelConfigService.upsert_channel_config(
                db,
                team_id=context.team_id,
                channel_id=context.channel_id,
                channel_name=context.channel_name,
                translate_on_reaction=reaction,
                translate_on_new_message=new_message,
                translate_on_mention=mention,
                source_language=DEFAULT_SOURCE_LANGUAGE,
                target_language=DEFAULT_TARGET_LANGUAGE,
            )
        except PersistenceError as e:
            logger.error(f"Channel config not saved for {context.team_id}/{context.channel_id}: {e.message}")

        access_token = InstallationService.get_access_token(db, context.team_id)
        if not access_token:
            return None

        enabled = ChannelConfigService.enabled_trigger_labels(TriggerConfig(
            translate_on_reaction=reaction,
            translate_on_new_message=new_message,
            translate_on_mention=mention,
        ))
        message = build_confirmation_message(context.channel_name, enabled)
        return {
            "access_token": access_token,
            "channel": context.channel_id,
            "text": message["text"],
            "blocks": message["blocks"],
        }
