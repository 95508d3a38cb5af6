# =============================================================================
# app/db/upsert.py
# =============================================================================
from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

def dialect_insert(db: Session):
    """
    INSERT construct supporting on_conflict_do_update for the session's dialect,
    or None when the backend has no native upsert.
    """
    return _INSERTS.get(db.get_bind().dialect.name)
