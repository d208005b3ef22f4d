"""API routes for game progression"""
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, Request

from stumblelele.api.auth import verify_api_key
from stumblelele.api.middleware import HEALTH_LIMIT, READ_LIMIT, RECORD_LIMIT, limiter
from stumblelele.api.models import (
    AchievementResponse,
    GameRecordRequest,
    GameRecordResponse,
    HealthCheckResponse,
    ProgressionReportResponse,
    ProgressionsResponse,
)
from stumblelele.db.connection import db
from stumblelele.services.game_progress_service import GameProgressService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_game_progress_service(request: Request) -> GameProgressService:
    """Service instance attached to the app in create_api_application()"""
    return request.app.state.game_progress_service


@router.post("/api/v1/users/{user_id}/games/{game_type}/records", response_model=GameRecordResponse)
@limiter.limit(RECORD_LIMIT)
async def record_game(
    request: Request,
    user_id: str,
    game_type: str,
    body: GameRecordRequest,
    service: GameProgressService = Depends(get_game_progress_service),
    api_key: str = Depends(verify_api_key)
):
    """Save a finished game session"""
    result = await service.record_game(user_id, game_type, body.level, body.score)

    return GameRecordResponse(
        user_id=user_id,
        record=result['record'],
        progression=result['progression'],
        previous_level=result['previous_level'],
        leveled_up=result['leveled_up'],
        achievements_unlocked=result['achievements_unlocked'],
        achievement_messages=result['achievement_messages'],
        progress=result['progress'],
        message=result['message'],
        recommendation=result['recommendation'],
    )


@router.get("/api/v1/users/{user_id}/games/progressions", response_model=ProgressionsResponse)
@limiter.limit(READ_LIMIT)
async def get_progressions(
    request: Request,
    user_id: str,
    service: GameProgressService = Depends(get_game_progress_service),
    api_key: str = Depends(verify_api_key)
):
    """Get progression for every game"""
    progressions = await service.get_all_progressions(user_id)
    return ProgressionsResponse(user_id=user_id, progressions=progressions)


@router.get("/api/v1/users/{user_id}/games/{game_type}/progression", response_model=ProgressionReportResponse)
@limiter.limit(READ_LIMIT)
async def get_progression(
    request: Request,
    user_id: str,
    game_type: str,
    service: GameProgressService = Depends(get_game_progress_service),
    api_key: str = Depends(verify_api_key)
):
    """Get progression report for one game"""
    report = await service.get_progression_report(user_id, game_type)
    return ProgressionReportResponse(user_id=user_id, **report)


@router.get("/api/v1/users/{user_id}/achievements", response_model=AchievementResponse)
@limiter.limit(READ_LIMIT)
async def get_achievements(
    request: Request,
    user_id: str,
    service: GameProgressService = Depends(get_game_progress_service),
    api_key: str = Depends(verify_api_key)
):
    """Get user achievements"""
    achievements = await service.get_user_achievements(user_id)
    return AchievementResponse(user_id=user_id, **achievements)


@router.get("/api/health", response_model=HealthCheckResponse)
@limiter.limit(HEALTH_LIMIT)
async def health_check(request: Request):
    """Health check endpoint"""
    if not db.is_initialized:
        store_status = "memory"
    else:
        try:
            async with db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute("SELECT 1")
                    await cur.fetchone()
            store_status = "connected"
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            store_status = "disconnected"

    return HealthCheckResponse(
        status="degraded" if store_status == "disconnected" else "healthy",
        store=store_status,
        timestamp=datetime.now()
    )
