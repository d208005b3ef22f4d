"""
Service Layer Package

Business logic between the HTTP layer and the game store.

- GameProgressService: game sessions, progression, achievements, reports
"""

from stumblelele.services.game_progress_service import GameProgressService, create_game_store

__all__ = [
    "GameProgressService",
    "create_game_store",
]
