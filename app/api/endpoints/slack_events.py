# =============================================================================
# app/api/endpoints/slack_events.py
# =============================================================================
from fastapi import APIRouter, BackgroundTasks, Depends, Request
from app.core.dependencies import get_event_dispatcher
from app.core.logger import get_module_logger
from app.schemas.slack import SlackEventEnvelope
from app.services.event_dispatcher import EventDispatcher

logger = get_module_logger(__name__, "logs/slack_events.log")

router = APIRouter()

@router.post("/events")
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    dispatcher: EventDispatcher = Depends(get_event_dispatcher)
):
    """
    Slack Events API receiver

    Event callbacks are acknowledged with {"ok": true} before any work is
    done; translation runs afterwards as a background task so a slow or
    failing downstream never makes Slack retry.
    """
    try:
        envelope = SlackEventEnvelope.model_validate(await request.json())
    except Exception as e:
        logger.error(f"Unreadable Slack event body: {str(e)}")
        return {"ok": True}

    if envelope.type == "url_verification":
        logger.info("Answering Slack URL verification challenge")
        return {"challenge": envelope.challenge}

    if envelope.type == "event_callback" and envelope.event:
        team_id = envelope.team_id or envelope.event.get("team")
        background_tasks.add_task(dispatcher.dispatch, team_id, envelope.event)

    return {"ok": True}
