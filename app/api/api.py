# =============================================================================
# app/api/api.py
# =============================================================================
from fastapi import APIRouter
from app.api.endpoints import health, installations, pages, slack_commands, slack_events, slack_interactive, slack_oauth

api_router = APIRouter()

api_router.include_router(pages.router, tags=["Pages"])
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(slack_oauth.router, prefix="/slack/oauth", tags=["Slack OAuth"])
api_router.include_router(slack_commands.router, prefix="/slack/commands", tags=["Slack Commands"])
api_router.include_router(slack_interactive.router, prefix="/slack", tags=["Slack Interactivity"])
api_router.include_router(slack_events.router, prefix="/slack", tags=["Slack Events"])
api_router.include_router(installations.router, prefix="/api/installations", tags=["Installations"])
