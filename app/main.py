# =============================================================================
# app/main.py
# =============================================================================
import asyncio
import time
from contextlib import asynccontextmanager
from typing import Optional
from html import escape
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from starlette.middleware.sessions import SessionMiddleware
from app.core.config import settings
from app.core.exceptions import AppError, ConfigurationError
from app.core.logger import get_module_logger
from app.api.api import api_router
from app.api.endpoints.pages import render_page
from app.db.init_db import init_db
from app.db.session import Database
from app.services.translation_service import StubTranslator, Translator

logger = get_module_logger(__name__, "logs/main.log")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables on startup; release the connection pool on shutdown
    """
    # =============================================================================
    # STARTUP SEQUENCE
    # =============================================================================
    logger.info("🚀 Starting Slack translation service...")

    try:
        logger.info("📦 Initializing database...")
        init_db(app.state.database)
        logger.info("✅ Database tables initialized successfully")
    except Exception as e:
        logger.error(f"❌ Error initializing database: {str(e)}")
        raise

    logger.info(f"📱 Main URL: {settings.BASE_URL}")
    logger.info(f"🔗 OAuth Callback URL: {settings.redirect_urls['oauth_callback']}")
    logger.info(f"✅ Success URL: {settings.redirect_urls['success']}")
    logger.info(f"❌ Error URL: {settings.redirect_urls['error']}")
    if not settings.SLACK_CLIENT_ID or not settings.SLACK_CLIENT_SECRET:
        logger.warning("⚠️  Slack credentials not configured! Set SLACK_CLIENT_ID and SLACK_CLIENT_SECRET.")
    logger.info("✅ Server ready for connections")

    yield

    # =============================================================================
    # SHUTDOWN SEQUENCE
    # =============================================================================
    logger.info("🛑 Shutting down...")
    try:
        app.state.database.dispose()
    except Exception as e:
        logger.error(f"❌ Error closing database connection: {str(e)}")

def create_application(
    database: Optional[Database] = None,
    translator: Optional[Translator] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application

    ``database`` and ``translator`` default to the configured store and the
    stub translation provider; they live on ``app.state`` for the whole process.
    """
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan,
    )
    application.debug = settings.DEBUG

    application.state.database = database or Database()
    application.state.translator = translator or StubTranslator()
    application.state.started_at = time.monotonic()

    # =============================================================================
    # MIDDLEWARE CONFIGURATION
    # =============================================================================

    # Session middleware, holds the OAuth state when SLACK_VERIFY_OAUTH_STATE is on
    application.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie="session_cookie",
        max_age=600,
        same_site="lax",
        https_only=not settings.DEBUG
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def request_timeout(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=settings.REQUEST_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.error(f"Request timeout: {request.method} {request.url.path}")
            return PlainTextResponse("Request timeout", status_code=status.HTTP_408_REQUEST_TIMEOUT)

    register_exception_handlers(application)
    application.include_router(api_router)

    return application

# =============================================================================
# ERROR HANDLERS
# =============================================================================

def register_exception_handlers(application: FastAPI) -> None:

    @application.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error: {exc.message}")
        body = f"""
        <h1>Configuration Error</h1>
        <p>{escape(exc.message)}</p>
        <a href="/" class="back-link">← Back to Home</a>"""
        return HTMLResponse(render_page("Configuration Error", body), status_code=exc.status_code)

    @application.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.error(f"{exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error_code, "message": exc.message}
        )

    @application.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error: {str(exc)}", exc_info=exc)
        return PlainTextResponse("Something went wrong!", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

# Create the application instance
app = create_application()
