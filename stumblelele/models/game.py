"""Game record and progression models"""
from enum import Enum
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from stumblelele.exceptions import UnknownGameTypeError


class GameType(str, Enum):
    """Mini-games available in the app"""
    MEMORY = "memory"
    WORDS = "words"
    MATH = "math"
    EMOTIONS = "emotions"

    @classmethod
    def parse(cls, value: Union[str, "GameType"]) -> "GameType":
        """Return the matching game type or raise UnknownGameTypeError"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownGameTypeError(value) from None


class GameRecord(BaseModel):
    """One completed play session. Never modified after creation."""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    user_id: Optional[str] = None
    game_type: str
    level: int = Field(1, ge=1)
    score: int = Field(0, ge=0)
    completed_at: Optional[datetime] = None


class LevelRequirement(BaseModel):
    """Thresholds a player must meet to reach `level`"""
    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1)
    min_score: int = Field(..., ge=0, description="Minimum average score over all sessions")
    games_played: int = Field(..., ge=0)
    accuracy: float = Field(..., ge=0, le=100)
    streak_required: int = Field(..., ge=0)


class GameProgression(BaseModel):
    """Progression summary computed from a player's history for one game"""
    game_type: str
    current_level: int = 1
    total_score: int = 0
    games_played: int = 0
    average_score: float = 0.0
    best_score: int = 0
    accuracy: float = Field(0.0, description="Estimated from score and level, not measured")
    best_streak: int = 0
    unlocked_features: list[str] = Field(default_factory=list)
    next_level_requirements: LevelRequirement

    @property
    def is_max_level(self) -> bool:
        """True when there is no level above the current one"""
        return self.next_level_requirements.level <= self.current_level


class RequirementProgress(BaseModel):
    """One progress bar toward the next level"""
    requirement: str
    current: float
    target: float
    percentage: float


class DifficultyRecommendation(BaseModel):
    """Suggested level to play next"""
    suggested: int
    reason: str
