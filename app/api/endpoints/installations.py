# =============================================================================
# app/api/endpoints/installations.py
# =============================================================================
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import get_module_logger
from app.db.session import get_db
from app.schemas.slack import InstallationListResponse, InstallationResponse
from app.services.channel_config_service import ChannelConfigService
from app.services.installation_service import InstallationService

logger = get_module_logger(__name__, "logs/installations.log")

router = APIRouter()

@router.get("", response_model=InstallationListResponse, status_code=status.HTTP_200_OK)
def list_installations(db: Session = Depends(get_db)):
    """All installations, most recently installed first"""
    installations = InstallationService.list_installations(db)
    return InstallationListResponse(
        count=len(installations),
        data=[InstallationResponse.model_validate(i) for i in installations]
    )

@router.get("/{team_id}", status_code=status.HTTP_200_OK)
def get_installation(
    team_id: str,
    channel: Optional[str] = Query(None, description="Channel whose translation config to include"),
    db: Session = Depends(get_db)
):
    """
    Installation for a team, with the channel's config when ``channel`` is given

    A channel that was never configured reports the default config. Without
    ``channel`` the default config is returned as ``default_config``.
    """
    if not team_id.strip():
        raise ValidationError("Please provide a team_id parameter", "team_id is required")

    installation = InstallationService.get_installation(db, team_id)
    if not installation:
        raise NotFoundError(f"No installation found for team_id: {team_id}", "installation_not_found")

    data = InstallationResponse.model_validate(installation).model_dump(mode="json")
    if channel:
        config = ChannelConfigService.get_effective_config(db, team_id, channel)
        data["channel_config"] = config.model_dump(mode="json")
    else:
        data["default_config"] = ChannelConfigService.default_channel_config().model_dump(mode="json")

    logger.info(f"Fetched installation for team {team_id} (channel: {channel})")
    return {"success": True, "data": data}
