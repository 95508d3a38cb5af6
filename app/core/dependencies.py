# =============================================================================
# app/core/dependencies.py
# =============================================================================
from fastapi import Depends, Request
from app.db.session import Database
from app.services.event_dispatcher import EventDispatcher
from app.services.translation_service import Translator

def get_database(request: Request) -> Database:
    return request.app.state.database

def get_translator(request: Request) -> Translator:
    return request.app.state.translator

def get_event_dispatcher(
    database: Database = Depends(get_database),
    translator: Translator = Depends(get_translator)
) -> EventDispatcher:
    """Dispatcher bound to the application's Database and Translator"""
    return EventDispatcher(database=database, translator=translator)
