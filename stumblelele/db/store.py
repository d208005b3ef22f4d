"""PostgreSQL-backed game store"""
import logging
from datetime import datetime
from typing import List, Optional, Set

import psycopg

from stumblelele.db import queries
from stumblelele.exceptions import QueryError
from stumblelele.models.game import GameRecord

logger = logging.getLogger(__name__)


class PostgresGameStore:
    """
    Game store over the shared psycopg pool

    Same interface as InMemoryGameStore. psycopg errors are re-raised as
    QueryError with the failing operation attached.
    """

    async def append_record(self, user_id: str, game_type: str, level: int, score: int) -> GameRecord:
        try:
            row = await queries.add_game_record(user_id, game_type, level, score)
        except psycopg.Error as e:
            raise QueryError(
                f"Failed to save {game_type} record",
                query="add_game_record",
                user_id=user_id,
                operation="append_record",
                cause=e,
            ) from e
        if row is None:
            raise QueryError(
                f"Insert of {game_type} record returned no row",
                query="add_game_record",
                user_id=user_id,
                operation="append_record",
            )
        return GameRecord(**row)

    async def list_records(self, user_id: str, game_type: str) -> List[GameRecord]:
        try:
            rows = await queries.get_game_records(user_id, game_type)
        except psycopg.Error as e:
            raise QueryError(
                f"Failed to load {game_type} records",
                query="get_game_records",
                user_id=user_id,
                operation="list_records",
                cause=e,
            ) from e
        return [GameRecord(**row) for row in rows]

    async def list_all_records(self, user_id: str) -> List[GameRecord]:
        try:
            rows = await queries.get_all_game_records(user_id)
        except psycopg.Error as e:
            raise QueryError(
                "Failed to load game records",
                query="get_all_game_records",
                user_id=user_id,
                operation="list_all_records",
                cause=e,
            ) from e
        return [GameRecord(**row) for row in rows]

    async def get_unlocked_achievement_ids(self, user_id: str) -> Set[str]:
        try:
            return await queries.get_user_achievement_ids(user_id)
        except psycopg.Error as e:
            raise QueryError(
                "Failed to load achievements",
                query="get_user_achievement_ids",
                user_id=user_id,
                operation="get_unlocked_achievement_ids",
                cause=e,
            ) from e

    async def unlock_achievement(
        self,
        user_id: str,
        achievement_id: str,
        game_type: Optional[str] = None,
        unlocked_at: Optional[datetime] = None,
    ) -> bool:
        try:
            return await queries.unlock_achievement(user_id, achievement_id, game_type, unlocked_at)
        except psycopg.Error as e:
            raise QueryError(
                f"Failed to unlock achievement {achievement_id}",
                query="unlock_achievement",
                user_id=user_id,
                operation="unlock_achievement",
                cause=e,
            ) from e

    async def list_user_achievements(self, user_id: str) -> List[dict]:
        try:
            return await queries.get_user_achievements(user_id)
        except psycopg.Error as e:
            raise QueryError(
                "Failed to load achievements",
                query="get_user_achievements",
                user_id=user_id,
                operation="list_user_achievements",
                cause=e,
            ) from e
