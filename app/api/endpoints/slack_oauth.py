# =============================================================================
# app/api/endpoints/slack_oauth.py
# =============================================================================
from typing import Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.exceptions import PersistenceError, UpstreamApiError
from app.core.logger import get_module_logger
from app.db.session import get_db
from app.schemas.slack import InstallationCreate
from app.services.installation_service import InstallationService
from app.services.slack_service import SlackService
from app.utils.oauth import build_slack_authorize_url

logger = get_module_logger(__name__, "logs/slack_oauth.log")

router = APIRouter()

OAUTH_STATE_SESSION_KEY = "slack_oauth_state"

# =============================================================================
# AUTHORIZATION REDIRECT
# =============================================================================

@router.get("/authorize", status_code=status.HTTP_302_FOUND)
async def slack_oauth_authorize(request: Request):
    """Send the installing user to Slack's consent screen"""
    logger.info("OAuth authorization requested")

    auth_url, state = build_slack_authorize_url()
    if settings.SLACK_VERIFY_OAUTH_STATE:
        request.session[OAUTH_STATE_SESSION_KEY] = state

    logger.info("Redirecting to Slack OAuth URL")
    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)

# =============================================================================
# OAUTH CALLBACK HANDLER
# =============================================================================

@router.get("/callback", status_code=status.HTTP_302_FOUND)
async def slack_oauth_callback(
    request: Request,
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Handle Slack OAuth2 callback

    This endpoint:
    1. Receives the OAuth callback from Slack
    2. Exchanges authorization code for access token
    3. Stores the installation (a failed save still counts as installed)
    4. Redirects to the success or error page
    """
    logger.info("Processing Slack OAuth callback")

    # Check for error parameters from Slack
    if error:
        logger.error(f"Slack OAuth error: {error}")
        return _redirect_with_error(error)

    if not code:
        logger.error("No authorization code received from Slack")
        return _redirect_with_error("no_code")

    if settings.SLACK_VERIFY_OAUTH_STATE:
        expected_state = request.session.pop(OAUTH_STATE_SESSION_KEY, None)
        if not state or state != expected_state:
            logger.error("OAuth state does not match the one issued on authorize")
            return _redirect_with_error("invalid_state")
    else:
        # TODO: turn SLACK_VERIFY_OAUTH_STATE on by default once installs are confirmed to keep the session cookie
        logger.warning("OAuth state not verified (SLACK_VERIFY_OAUTH_STATE is off)")

    # Exchange authorization code for access token
    try:
        token_data = await SlackService.exchange_code_for_token(code)
    except UpstreamApiError as e:
        return _redirect_with_error(e.error_code)

    if not token_data.get("ok"):
        error_msg = token_data.get("error") or "oauth_failed"
        logger.error(f"Slack OAuth error: {error_msg}")
        return _redirect_with_error(error_msg)

    team = token_data.get("team") or {}
    access_token = token_data.get("access_token")
    if not team.get("id") or not access_token:
        logger.error("Missing team or access token in Slack token response")
        return _redirect_with_error("oauth_failed")

    installation = InstallationCreate(
        team_id=team["id"],
        team_name=team.get("name") or team["id"],
        access_token=access_token,
        bot_user_id=token_data.get("bot_user_id"),
        scope=token_data.get("scope")
    )

    try:
        InstallationService.upsert_installation(db, installation)
        logger.info("✅ Installation data saved to database successfully")
    except PersistenceError as e:
        # The grant itself succeeded; losing the stored token is degraded, not fatal
        logger.error(f"❌ Error saving installation data to database: {e.message}")

    logger.info(f"Slack app installed successfully: {installation.team_name} ({installation.team_id})")
    logger.info(f"   Scopes: {installation.scope}")

    return _redirect_with_success(installation.team_name)

def _redirect_with_success(team_name: str) -> RedirectResponse:
    redirect_url = f"{settings.redirect_urls['success']}?{urlencode({'team': team_name})}"
    logger.info(f"🎯 Redirecting to success page: {redirect_url}")
    return RedirectResponse(url=redirect_url, status_code=status.HTTP_302_FOUND)

def _redirect_with_error(error_code: str) -> RedirectResponse:
    redirect_url = f"{settings.redirect_urls['error']}?{urlencode({'error': error_code})}"
    logger.warning(f"⚠️  Redirecting to error page: {error_code}")
    return RedirectResponse(url=redirect_url, status_code=status.HTTP_302_FOUND)
