"""
Gamification system for StumbleLele mini-games

This module implements game progression with:
- Per-game level requirement tables and feature unlocks
- Progression calculation from session history
- Per-user achievements
- Progress bars, encouragement and difficulty suggestions
"""

from stumblelele.gamification.progression import calculate_progression
from stumblelele.gamification.level_requirements import get_level_requirements, get_unlocked_features
from stumblelele.gamification.achievement_system import check_achievements, check_and_award_achievements
from stumblelele.gamification.reporting import (
    get_progress_to_next_level,
    get_motivational_message,
    get_difficulty_recommendation,
)

__all__ = [
    "calculate_progression",
    "get_level_requirements",
    "get_unlocked_features",
    "check_achievements",
    "check_and_award_achievements",
    "get_progress_to_next_level",
    "get_motivational_message",
    "get_difficulty_recommendation",
]
