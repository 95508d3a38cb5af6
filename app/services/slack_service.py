# =============================================================================
# app/services/slack_service.py
# =============================================================================
from typing import Optional, Dict, Any, List
import httpx
import requests
from app.core.config import settings
from app.core.exceptions import UpstreamApiError
from app.core.logger import get_module_logger

logger = get_module_logger(__name__, "logs/slack_service.log")

class SlackService:
    """Calls into the Slack Web API"""

    SLACK_API_BASE = "https://slack.com/api"

    @staticmethod
    async def exchange_code_for_token(code: str) -> Dict[str, Any]:
        """
        Exchange an OAuth authorization code for a workspace token

        Returns Slack's payload as-is, including ``ok: false`` answers; the
        caller decides what a non-OK grant means. Transport failures raise
        UpstreamApiError whose error_code is the redirect error code.
        """
        url = f"{SlackService.SLACK_API_BASE}/oauth.v2.access"
        data = {
            "client_id": settings.SLACK_CLIENT_ID,
            "client_secret": settings.SLACK_CLIENT_SECRET,
            "code": code,
            "redirect_uri": settings.redirect_urls["oauth_callback"]
        }

        try:
            async with httpx.AsyncClient(timeout=settings.SLACK_OAUTH_TIMEOUT_SECONDS) as client:
                response = await client.post(url, data=data)
                response.raise_for_status()
                return response.json()

        except httpx.TimeoutException as e:
            logger.error(f"Slack API timeout during token exchange: {str(e)}")
            raise UpstreamApiError("Slack API timed out", "slack_api_timeout")
        except httpx.HTTPStatusError as e:
            logger.error(f"Slack API error response during token exchange: {e.response.status_code}")
            raise UpstreamApiError("Slack API returned an error response", "slack_api_error")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"HTTP error during token exchange: {str(e)}")
            raise UpstreamApiError(f"Token exchange failed: {str(e)}", "oauth_failed")

    @staticmethod
    def send_slack_message(
        access_token: str,
        channel: str,
        text: str,
        blocks: Optional[List[Dict]] = None,
        thread_ts: Optional[str] = None
    ) -> Dict[str, Any]:
        """Send message to Slack channel, optionally as a thread reply"""
        payload = {
            "channel": channel,
            "text": text
        }
        if blocks:
            payload["blocks"] = blocks
        if thread_ts:
            payload["thread_ts"] = thread_ts

        result = SlackService._call(access_token, "chat.postMessage", json=payload)
        if result["success"]:
            logger.info(f"Successfully sent Slack message to channel: {channel}")
        else:
            logger.error(f"Failed to send Slack message to {channel}: {result['error']}")
        return result

    @staticmethod
    def open_view(access_token: str, trigger_id: str, view: Dict[str, Any]) -> Dict[str, Any]:
        """Open a modal in response to a slash command trigger"""
        result = SlackService._call(
            access_token,
            "views.open",
            json={"trigger_id": trigger_id, "view": view}
        )
        if not result["success"]:
            logger.error(f"Error opening modal: {result['error']}")
        return result

    @staticmethod
    def fetch_message(access_token: str, channel: str, ts: str) -> Optional[Dict[str, Any]]:
        """The single message posted in a channel at timestamp ``ts``"""
        result = SlackService._call(
            access_token,
            "conversations.history",
            method="GET",
            params={"channel": channel, "latest": ts, "limit": 1, "inclusive": "true"}
        )
        if not result["success"]:
            logger.error(f"Failed to fetch message {channel}/{ts}: {result['error']}")
            return None

        messages = result["data"].get("messages") or []
        if not messages:
            logger.info(f"No message found at {channel}/{ts}")
            return None
        return messages[0]

    @staticmethod
    def _call(
        access_token: str,
        api_method: str,
        method: str = "POST",
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        url = f"{SlackService.SLACK_API_BASE}/{api_method}"
        headers = {
            "Authorization": f"Bearer {access_token}"
        }
        if json is not None:
            headers["Content-Type"] = "application/json; charset=utf-8"

        try:
            response = requests.request(
                method,
                url,
                headers=headers,
                json=json,
                params=params,
                timeout=settings.SLACK_API_TIMEOUT_SECONDS
            )
            response_data = response.json()

            if response_data.get("ok"):
                return {"success": True, "data": response_data}
            return {"success": False, "error": response_data.get("error", "Unknown Slack API error")}

        except requests.exceptions.Timeout:
            return {"success": False, "error": "Slack API timeout"}
        except requests.exceptions.RequestException as e:
            return {"success": False, "error": f"Request failed: {str(e)}"}
        except ValueError as e:
            return {"success": False, "error": f"Invalid response from Slack: {str(e)}"}
