# =============================================================================
# app/utils/oauth.py
# =============================================================================
from typing import Tuple
from authlib.common.security import generate_token
from authlib.common.urls import add_params_to_uri
from app.core.config import settings
from app.core.exceptions import ConfigurationError
from app.core.logger import get_module_logger, mask_secret

logger = get_module_logger(__name__, "logs/oauth.log")

SLACK_AUTHORIZE_URL = "https://slack.com/oauth/v2/authorize"

SLACK_SCOPES = [
    "channels:read",
    "chat:write",
    "commands",
    "incoming-webhook",
    "users:read",
]

def generate_state() -> str:
    """Opaque OAuth state token"""
    return generate_token(26)

def build_slack_authorize_url() -> Tuple[str, str]:
    """Slack authorization URL and the state embedded in it"""
    if not settings.SLACK_CLIENT_ID:
        logger.error("Slack Client ID not configured")
        raise ConfigurationError(
            "Slack Client ID not configured. Please set SLACK_CLIENT_ID environment variable."
        )

    state = generate_state()
    auth_url = add_params_to_uri(SLACK_AUTHORIZE_URL, [
        ("client_id", settings.SLACK_CLIENT_ID),
        ("scope", ",".join(SLACK_SCOPES)),
        ("redirect_uri", settings.redirect_urls["oauth_callback"]),
        ("state", state),
    ])

    logger.info("OAuth parameters:")
    logger.info(f"  - client_id: {mask_secret(settings.SLACK_CLIENT_ID)}")
    logger.info(f"  - redirect_uri: {settings.redirect_urls['oauth_callback']}")
    logger.info(f"  - scope: {','.join(SLACK_SCOPES)}")
    return auth_url, state
