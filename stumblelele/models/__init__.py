"""Domain models for game progression"""
from stumblelele.models.game import (
    GameType,
    GameRecord,
    LevelRequirement,
    GameProgression,
    RequirementProgress,
    DifficultyRecommendation,
)
from stumblelele.models.achievement import Achievement, UnlockedAchievement

__all__ = [
    "GameType",
    "GameRecord",
    "LevelRequirement",
    "GameProgression",
    "RequirementProgress",
    "DifficultyRecommendation",
    "Achievement",
    "UnlockedAchievement",
]
