"""API request/response models"""
from datetime import datetime
from typing import Any, Dict, List
from pydantic import BaseModel, Field

from stumblelele.models.achievement import UnlockedAchievement
from stumblelele.models.game import (
    DifficultyRecommendation,
    GameProgression,
    GameRecord,
    RequirementProgress,
)


class GameRecordRequest(BaseModel):
    """Finished game session"""
    level: int = Field(..., description="Level the session was played at")
    score: int = Field(..., description="Points earned in the session")


class ProgressionReportResponse(BaseModel):
    """Progression with progress bars and suggestions"""
    user_id: str
    progression: GameProgression
    progress: List[RequirementProgress]
    message: str
    recommendation: DifficultyRecommendation
    is_max_level: bool


class GameRecordResponse(BaseModel):
    """Result of saving a game session"""
    user_id: str
    record: GameRecord
    progression: GameProgression
    previous_level: int
    leveled_up: bool
    achievements_unlocked: List[UnlockedAchievement]
    achievement_messages: List[str] = Field(
        default_factory=list, description="Celebration text per unlocked achievement, same order"
    )
    progress: List[RequirementProgress]
    message: str
    recommendation: DifficultyRecommendation


class ProgressionsResponse(BaseModel):
    """Progression for every game"""
    user_id: str
    progressions: Dict[str, GameProgression]


class AchievementResponse(BaseModel):
    """Response with achievement info"""
    user_id: str
    unlocked: List[Dict[str, Any]]
    locked: List[Dict[str, Any]]
    total_unlocked: int
    total_achievements: int


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    store: str = Field(..., description="Store backend status")
    timestamp: datetime = Field(..., description="Check timestamp")
