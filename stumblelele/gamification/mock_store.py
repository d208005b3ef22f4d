"""
In-Memory Game Store

Process-local implementation of the game store used by tests and local
development (STORE_BACKEND=memory). Same interface as
stumblelele.db.store.PostgresGameStore.

Nothing here survives a restart.
"""

import asyncio
import itertools
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set, Tuple

from stumblelele.models.game import GameRecord

logger = logging.getLogger(__name__)


class InMemoryGameStore:
    """In-memory store for game records and achievement unlocks"""

    def __init__(self):
        self._records: List[GameRecord] = []
        self._achievements: Dict[Tuple[str, str], dict] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()
        logger.warning(
            "InMemoryGameStore initialized - game progress is NOT persisted! "
            "Set STORE_BACKEND=postgres for durable storage."
        )

    async def append_record(self, user_id: str, game_type: str, level: int, score: int) -> GameRecord:
        """Store a completed session"""
        async with self._lock:
            record = GameRecord(
                id=next(self._ids),
                user_id=user_id,
                game_type=game_type,
                level=level,
                score=score,
                completed_at=datetime.now(timezone.utc),
            )
            self._records.append(record)
        logger.debug(f"Saved {game_type} record {record.id} for user {user_id} (NOT PERSISTED)")
        return record

    async def list_records(self, user_id: str, game_type: str) -> List[GameRecord]:
        """Sessions for one game, oldest first"""
        return [
            r for r in self._records
            if r.user_id == user_id and r.game_type == game_type
        ]

    async def list_all_records(self, user_id: str) -> List[GameRecord]:
        """Sessions for every game, oldest first"""
        return [r for r in self._records if r.user_id == user_id]

    async def get_unlocked_achievement_ids(self, user_id: str) -> Set[str]:
        return {aid for (uid, aid) in self._achievements if uid == user_id}

    async def unlock_achievement(
        self,
        user_id: str,
        achievement_id: str,
        game_type: Optional[str] = None,
        unlocked_at: Optional[datetime] = None,
    ) -> bool:
        """
        Record an unlock

        Returns:
            True if newly unlocked, False if the user already had it
        """
        key = (user_id, achievement_id)
        async with self._lock:
            if key in self._achievements:
                return False
            self._achievements[key] = {
                "achievement_id": achievement_id,
                "unlocked_at": unlocked_at or datetime.now(timezone.utc),
                "game_type": game_type,
            }
        return True

    async def list_user_achievements(self, user_id: str) -> List[dict]:
        """User's unlocks, most recent first"""
        unlocks = [dict(v) for (uid, _), v in self._achievements.items() if uid == user_id]
        unlocks.sort(key=lambda u: u["unlocked_at"], reverse=True)
        return unlocks
