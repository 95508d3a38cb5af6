# =============================================================================
# app/services/installation_service.py
# =============================================================================
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import PersistenceError
from app.core.logger import get_module_logger, mask_secret
from app.db.base import utcnow
from app.db.upsert import dialect_insert
from app.models.slack_installation import SlackInstallation
from app.schemas.slack import InstallationCreate

logger = get_module_logger(__name__, "logs/installation_service.log")

class InstallationService:
    """Store for workspace installations, keyed by Slack team id"""

    @staticmethod
    def get_installation(db: Session, team_id: str) -> Optional[SlackInstallation]:
        """Get installation by team ID"""
        try:
            return db.query(SlackInstallation).filter(SlackInstallation.team_id == team_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching installation for team {team_id}: {str(e)}")
            raise PersistenceError("Error fetching installation data")

    @staticmethod
    def get_access_token(db: Session, team_id: str) -> Optional[str]:
        """Bearer token for a team, or None when unknown or unreadable"""
        try:
            installation = InstallationService.get_installation(db, team_id)
        except PersistenceError:
            return None
        if not installation:
            logger.error(f"No access token found for team: {team_id}")
            return None
        return installation.access_token

    @staticmethod
    def list_installations(db: Session) -> List[SlackInstallation]:
        """All installations, most recently installed first"""
        try:
            return db.query(SlackInstallation).order_by(
                SlackInstallation.installed_at.desc(),
                SlackInstallation.id.desc()
            ).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching installations: {str(e)}")
            raise PersistenceError("Error fetching installations data")

    @staticmethod
    def upsert_installation(db: Session, data: InstallationCreate) -> SlackInstallation:
        """
        Create or replace the installation for a team

        Re-installing the app replaces name, token, bot id and scope for the
        same team; installed_at keeps its first value.
        """
        now = utcnow()
        values = data.model_dump()
        try:
            insert = dialect_insert(db)
            if insert is not None:
                stmt = insert(SlackInstallation).values(installed_at=now, updated_at=now, **values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[SlackInstallation.team_id],
                    set_={
                        "team_name": stmt.excluded.team_name,
                        "access_token": stmt.excluded.access_token,
                        "bot_user_id": stmt.excluded.bot_user_id,
                        "scope": stmt.excluded.scope,
                        "updated_at": now,
                    },
                )
                db.execute(stmt)
                db.commit()
            else:
                existing = db.query(SlackInstallation).filter(
                    SlackInstallation.team_id == data.team_id
                ).first()
                if existing:
                    for field, value in values.items():
                        setattr(existing, field, value)
                    existing.updated_at = now
                else:
                    db.add(SlackInstallation(installed_at=now, updated_at=now, **values))
                db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error saving installation for team {data.team_id}: {str(e)}")
            raise PersistenceError("Error saving installation data")

        installation = InstallationService.get_installation(db, data.team_id)
        db.refresh(installation)
        logger.info(
            f"Saved installation for team {data.team_id} ({data.team_name}), "
            f"token {mask_secret(data.access_token)}"
        )
        return installation
