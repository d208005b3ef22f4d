"""FastAPI application setup"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stumblelele import config
from stumblelele.api.middleware import setup_middleware
from stumblelele.api.routes import router
from stumblelele.db.connection import db
from stumblelele.exceptions import (
    DatabaseError,
    StumbleLeleError,
    UnknownGameTypeError,
    ValidationError,
)
from stumblelele.services.game_progress_service import GameProgressService, create_game_store

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application"""
    # Startup
    logger.info("Starting API server...")
    if config.STORE_BACKEND == "postgres":
        from stumblelele.db.schema import init_schema
        await db.init_pool()
        await init_schema()
        logger.info("Database pool initialized")

    yield

    # Shutdown
    logger.info("Shutting down API server...")
    await db.close_pool()


def _status_for(exc: StumbleLeleError) -> int:
    if isinstance(exc, UnknownGameTypeError):
        return 404
    if isinstance(exc, ValidationError):
        return 422
    if isinstance(exc, DatabaseError):
        return 503
    return 500


def create_api_application(store=None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        store: Game store to serve from (defaults to the configured backend)
    """
    config.validate_config()

    app = FastAPI(
        title="StumbleLele Games API",
        description="Game progression and achievements for StumbleLele",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.game_progress_service = GameProgressService(store or create_game_store())

    setup_middleware(app)

    # Include routes
    app.include_router(router)

    @app.exception_handler(StumbleLeleError)
    async def stumblelele_exception_handler(request: Request, exc: StumbleLeleError):
        return JSONResponse(status_code=_status_for(exc), content=exc.to_dict())

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)}
        )

    logger.info("FastAPI application created")

    return app
