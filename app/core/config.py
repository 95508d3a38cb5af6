# =============================================================================
# app/core/config.py
# =============================================================================
from typing import Dict, Optional
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # Project Info
    PROJECT_NAME: str = "Slack Translate Config"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Slack app backend for per-channel message translation settings"

    # Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key-here")

    # Slack OAuth2
    SLACK_CLIENT_ID: Optional[str] = os.getenv("SLACK_CLIENT_ID")
    SLACK_CLIENT_SECRET: Optional[str] = os.getenv("SLACK_CLIENT_SECRET")
    # The state is generated on authorize but only checked when this is on
    SLACK_VERIFY_OAUTH_STATE: bool = os.getenv("SLACK_VERIFY_OAUTH_STATE", "false").lower() == "true"

    # Timeouts (seconds)
    SLACK_OAUTH_TIMEOUT_SECONDS: float = float(os.getenv("SLACK_OAUTH_TIMEOUT_SECONDS", "15"))
    SLACK_API_TIMEOUT_SECONDS: float = float(os.getenv("SLACK_API_TIMEOUT_SECONDS", "10"))
    REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "25"))

    # Server
    PORT: int = int(os.getenv("PORT", "3000"))
    BASE_URL: str = os.getenv("BASE_URL", "")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./app.db")
    DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", "10"))
    DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", "20"))

    # Logging
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = ENVIRONMENT == "development"

    @field_validator("SLACK_CLIENT_ID")
    @classmethod
    def validate_slack_client_id(cls, v):
        if not v:
            print("⚠️  WARNING: SLACK_CLIENT_ID is not set")
        return v

    @field_validator("SLACK_CLIENT_SECRET")
    @classmethod
    def validate_slack_client_secret(cls, v):
        if not v:
            print("⚠️  WARNING: SLACK_CLIENT_SECRET is not set")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_database_url(cls, v):
        # Hosted Postgres hands out postgres:// but SQLAlchemy requires postgresql://
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @model_validator(mode="after")
    def default_base_url(self):
        if not self.BASE_URL:
            self.BASE_URL = f"http://localhost:{self.PORT}"
        self.BASE_URL = self.BASE_URL.rstrip("/")
        return self

    @property
    def redirect_urls(self) -> Dict[str, str]:
        """URLs that must be registered in the Slack app settings"""
        return {
            "oauth_callback": f"{self.BASE_URL}/slack/oauth/callback",
            "success": f"{self.BASE_URL}/success",
            "error": f"{self.BASE_URL}/error",
        }

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
