# =============================================================================
# app/api/endpoints/health.py
# =============================================================================
import time
from datetime import datetime, timezone
from fastapi import APIRouter, Request
from app.core.config import settings

router = APIRouter()

@router.get("/health")
async def health_check(request: Request):
    """Fast liveness probe"""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": time.monotonic() - request.app.state.started_at
    }

@router.get("/status")
async def status_check():
    """Which pieces of configuration are present"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "config": {
            "client_id_configured": bool(settings.SLACK_CLIENT_ID),
            "client_secret_configured": bool(settings.SLACK_CLIENT_SECRET),
            "base_url": settings.BASE_URL,
            "redirect_urls": settings.redirect_urls
        }
    }
