# =============================================================================
# app/schemas/slack.py
# =============================================================================
import json
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError, field_validator
from app.core.exceptions import ValidationError
from app.models.channel_config import DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE

# =============================================================================
# Installations
# =============================================================================

class InstallationCreate(BaseModel):
    team_id: str
    team_name: str
    access_token: str
    bot_user_id: Optional[str] = None
    scope: Optional[str] = None

class InstallationResponse(BaseModel):
    team_id: str
    team_name: str
    access_token: str
    bot_user_id: Optional[str] = None
    scope: Optional[str] = None
    installed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class InstallationListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[InstallationResponse]

# =============================================================================
# Channel configuration
# =============================================================================

class TriggerConfig(BaseModel):
    """Which events translate a channel's messages, and between which languages"""
    translate_on_reaction: bool = True
    translate_on_new_message: bool = False
    translate_on_mention: bool = False
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_language: str = DEFAULT_TARGET_LANGUAGE

    model_config = ConfigDict(from_attributes=True)

class ChannelConfigResponse(TriggerConfig):
    channel_id: str
    channel_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# =============================================================================
# Slack payloads
# =============================================================================

class ModalContext(BaseModel):
    """
    Context carried through the configuration modal's private_metadata.

    Nothing is kept server-side between opening and submitting the modal, so
    this is the only way the submission learns which channel it configures.
    It selects the row to write; it does not authorize the write.
    """
    team_id: str
    channel_id: str
    channel_name: str

    @field_validator("team_id", "channel_id")
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    def to_private_metadata(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_private_metadata(cls, raw: Optional[str]) -> "ModalContext":
        if not raw:
            raise ValidationError("Modal private_metadata is empty", "invalid_modal_context")
        try:
            return cls.model_validate(json.loads(raw))
        except (json.JSONDecodeError, TypeError) as e:
            raise ValidationError(f"Modal private_metadata is not JSON: {e}", "invalid_modal_context")
        except PydanticValidationError as e:
            raise ValidationError(f"Modal private_metadata is invalid: {e}", "invalid_modal_context")

class SlackEventEnvelope(BaseModel):
    """Outer body of a Slack Events API request"""
    type: str
    challenge: Optional[str] = None
    team_id: Optional[str] = None
    event: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="allow")
