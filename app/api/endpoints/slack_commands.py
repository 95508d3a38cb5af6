# =============================================================================
# app/api/endpoints/slack_commands.py
# =============================================================================
from fastapi import APIRouter, Depends, Form, Response, status
from sqlalchemy.orm import Session
from app.core.logger import get_module_logger
from app.db.session import get_db
from app.services.translate_config_service import (
    COMMAND_FAILED_TEXT,
    TranslateConfigService,
    ephemeral,
)

logger = get_module_logger(__name__, "logs/slack_commands.log")

router = APIRouter()

@router.post("/translate-config")
def translate_config_command(
    team_id: str = Form(""),
    channel_id: str = Form(""),
    channel_name: str = Form(""),
    user_id: str = Form(""),
    trigger_id: str = Form(""),
    db: Session = Depends(get_db)
):
    """
    /translate-config slash command

    Opens the configuration modal and answers with an empty 200, or with an
    ephemeral message when the modal cannot be opened.
    """
    logger.info(f"Translate config command received: team={team_id} channel={channel_id} ({channel_name}) user={user_id}")

    try:
        reply = TranslateConfigService.open_config_modal(
            db,
            team_id=team_id,
            channel_id=channel_id,
            channel_name=channel_name,
            trigger_id=trigger_id
        )
    except Exception as e:
        logger.error(f"Error in translate-config command: {str(e)}", exc_info=True)
        return ephemeral(COMMAND_FAILED_TEXT)

    if reply is not None:
        return reply
    return Response(status_code=status.HTTP_200_OK)
