# =============================================================================
# app/db/session.py
# =============================================================================
from contextlib import contextmanager
from typing import Iterator, Optional
from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.config import settings
from app.core.logger import get_module_logger

logger = get_module_logger(__name__, "logs/database.log")


class Database:
    """
    Process-scoped handle on the connection pool.

    Built once at startup and passed to whatever needs persistence. The
    engine owns connection lifetime; dispose() releases the pool on shutdown.
    """

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None):
        self.url = url or settings.DATABASE_URL
        self.engine = engine or _create_engine(self.url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connection pool closed")


def _create_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url == "sqlite://":
            # A single shared connection, otherwise every session gets its own empty database
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency yielding a session from the application's Database"""
    database: Database = request.app.state.database
    with database.session() as db:
        yield db
