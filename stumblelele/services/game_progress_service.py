"""
GameProgressService - Game Progression Business Logic

Records finished mini-game sessions and turns the stored history into
levels, achievements and UI feedback.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Dict, Optional, Union

from stumblelele import config
from stumblelele.exceptions import ValidationError
from stumblelele.gamification.achievement_system import (
    check_and_award_achievements,
    format_achievement_unlock_message,
    get_achievement_catalog,
)
from stumblelele.gamification.level_requirements import MAX_LEVEL
from stumblelele.gamification.progression import calculate_progression
from stumblelele.gamification.reporting import (
    get_difficulty_recommendation,
    get_motivational_message,
    get_progress_to_next_level,
)
from stumblelele.models.game import GameProgression, GameType

logger = logging.getLogger(__name__)


def create_game_store(backend: Optional[str] = None):
    """
    Build the game store for the configured backend

    Args:
        backend: 'memory' or 'postgres' (defaults to STORE_BACKEND)
    """
    backend = (backend or config.STORE_BACKEND).lower()
    if backend == "postgres":
        from stumblelele.db.store import PostgresGameStore
        return PostgresGameStore()
    if backend == "memory":
        from stumblelele.gamification.mock_store import InMemoryGameStore
        return InMemoryGameStore()
    raise ValidationError(f"Unsupported store backend: {backend}", field="backend", value=backend)


class GameProgressService:
    """
    Service for mini-game progression.

    Responsibilities:
    - Validating and saving game sessions
    - Computing progression per game
    - Awarding achievements once per user
    - Building progress reports for the UI
    """

    def __init__(self, store):
        """
        Initialize GameProgressService.

        Args:
            store: Game store (InMemoryGameStore or PostgresGameStore)
        """
        self.store = store
        # Serializes read-append-recompute per user within this process
        self._user_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        logger.debug("GameProgressService initialized")

    async def record_game(
        self,
        user_id: str,
        game_type: Union[str, GameType],
        level: int,
        score: int
    ) -> Dict[str, Any]:
        """
        Save a finished session and update progression.

        Args:
            user_id: User identifier
            game_type: One of the GameType values
            level: Level the session was played at (1..MAX_LEVEL)
            score: Points earned (>= 0)

        Returns:
            {
                'record': GameRecord,
                'progression': GameProgression,
                'previous_level': int,
                'leveled_up': bool,
                'achievements_unlocked': list[UnlockedAchievement],
                'achievement_messages': list[str],
                'progress': list[RequirementProgress],
                'message': str,
                'recommendation': DifficultyRecommendation
            }

        Raises:
            UnknownGameTypeError: game_type is not a known game
            ValidationError: level or score out of range

        Concurrency:
            Calls for the same user are serialized by a per-user lock, so
            two quick submits can't both report the same level-up. The lock
            is process-local. With several API workers over Postgres a
            double report is still possible, though achievements stay
            unique through the store's insert-if-absent.
        """
        game = GameType.parse(game_type)
        self._validate_session(user_id, level, score)

        async with self._user_locks[user_id]:
            history = await self.store.list_records(user_id, game.value)
            previous = calculate_progression(game, history)

            record = await self.store.append_record(user_id, game.value, level, score)
            history.append(record)
            progression = calculate_progression(game, history)

        leveled_up = progression.current_level > previous.current_level
        if leveled_up:
            logger.info(
                f"User {user_id} leveled up in {game.value} "
                f"from {previous.current_level} to {progression.current_level}!"
            )

        achievements = []
        try:
            all_progressions = await self.get_all_progressions(user_id)
            achievements = await check_and_award_achievements(
                self.store, user_id, progression, all_progressions
            )
        except Exception as e:
            # Evaluation is repeated on the next game, so unlocks are delayed, not lost
            logger.error(f"Error checking achievements for user {user_id}: {e}", exc_info=True)

        logger.info(
            f"Game recorded: user={user_id}, game={game.value}, level={level}, score={score}, "
            f"current_level={progression.current_level}, achievements={len(achievements)}"
        )

        return {
            'record': record,
            'progression': progression,
            'previous_level': previous.current_level,
            'leveled_up': leveled_up,
            'achievements_unlocked': achievements,
            'achievement_messages': [format_achievement_unlock_message(a) for a in achievements],
            'progress': get_progress_to_next_level(progression),
            'message': get_motivational_message(progression),
            'recommendation': get_difficulty_recommendation(progression),
        }

    async def get_progression(self, user_id: str, game_type: Union[str, GameType]) -> GameProgression:
        """Compute current progression for one game."""
        game = GameType.parse(game_type)
        history = await self.store.list_records(user_id, game.value)
        return calculate_progression(game, history)

    async def get_all_progressions(self, user_id: str) -> Dict[str, GameProgression]:
        """
        Compute progression for every game, including unplayed ones.

        Returns:
            {game_type value: GameProgression}
        """
        records = await self.store.list_all_records(user_id)

        by_game: Dict[str, list] = {game.value: [] for game in GameType}
        for record in records:
            if record.game_type in by_game:
                by_game[record.game_type].append(record)
            else:
                logger.warning(f"Ignoring record {record.id} with unknown game type '{record.game_type}'")

        return {
            game_type: calculate_progression(game_type, history)
            for game_type, history in by_game.items()
        }

    async def get_progression_report(self, user_id: str, game_type: Union[str, GameType]) -> Dict[str, Any]:
        """
        Progression plus everything the progress screen shows.

        Returns:
            {
                'progression': GameProgression,
                'progress': list[RequirementProgress],
                'message': str,
                'recommendation': DifficultyRecommendation,
                'is_max_level': bool
            }
        """
        progression = await self.get_progression(user_id, game_type)
        return {
            'progression': progression,
            'progress': get_progress_to_next_level(progression),
            'message': get_motivational_message(progression),
            'recommendation': get_difficulty_recommendation(progression),
            'is_max_level': progression.is_max_level,
        }

    async def get_user_achievements(self, user_id: str) -> Dict[str, Any]:
        """Unlocked and locked achievements for a user."""
        unlocks = await self.store.list_user_achievements(user_id)
        return get_achievement_catalog(unlocks)

    def _validate_session(self, user_id: str, level: int, score: int) -> None:
        if not user_id:
            raise ValidationError("User id is required", field="user_id", value=user_id)
        if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= MAX_LEVEL:
            raise ValidationError(
                f"Level must be between 1 and {MAX_LEVEL}",
                field="level",
                value=level,
                user_id=user_id,
            )
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise ValidationError("Score must be a non-negative integer", field="score", value=score, user_id=user_id)
