# =============================================================================
# app/api/endpoints/slack_interactive.py
# =============================================================================
import json
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Form
from sqlalchemy.orm import Session
from app.core.logger import get_module_logger
from app.db.session import get_db
from app.services.slack_service import SlackService
from app.services.translate_config_service import TranslateConfigService

logger = get_module_logger(__name__, "logs/slack_interactive.log")

router = APIRouter()

@router.post("/interactive")
def slack_interactive(
    background_tasks: BackgroundTasks,
    payload: Optional[str] = Form(None),
    db: Session = Depends(get_db)
):
    """Interactive components receiver; the answer is always an empty object so the modal closes"""
    try:
        data = json.loads(payload or "{}")
        logger.info(f"Interactive payload received: {data.get('type')}")

        if TranslateConfigService.is_config_submission(data):
            confirmation = TranslateConfigService.handle_config_submission(db, data)
            if confirmation:
                # Slack closes the modal only if the answer comes back within 3s
                background_tasks.add_task(SlackService.send_slack_message, **confirmation)
    except Exception as e:
        logger.error(f"Error handling interactive component: {str(e)}", exc_info=True)

    return {}
