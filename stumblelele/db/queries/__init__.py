"""
Database queries - Re-export all functions.

Module organization:
- games.py: Game session records
- achievements.py: Per-user achievement unlocks
"""

from stumblelele.db.queries.games import (
    add_game_record,
    get_game_records,
    get_all_game_records,
)
from stumblelele.db.queries.achievements import (
    get_user_achievement_ids,
    get_user_achievements,
    unlock_achievement,
)

__all__ = [
    "add_game_record",
    "get_game_records",
    "get_all_game_records",
    "get_user_achievement_ids",
    "get_user_achievements",
    "unlock_achievement",
]
