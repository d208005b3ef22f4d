"""Achievement unlock database queries"""
import logging
from datetime import datetime
from typing import Optional

from stumblelele.db.connection import db

logger = logging.getLogger(__name__)


async def get_user_achievement_ids(user_id: str) -> set[str]:
    """Get ids of achievements the user has unlocked"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT achievement_id
                FROM user_achievements
                WHERE user_id = %s
                """,
                (user_id,)
            )
            rows = await cur.fetchall()
            return {row["achievement_id"] for row in rows}


async def get_user_achievements(user_id: str) -> list[dict]:
    """
    Get user's unlocked achievements, most recent first

    Returns:
        List of {'achievement_id', 'unlocked_at', 'game_type'}
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT achievement_id, unlocked_at, game_type
                FROM user_achievements
                WHERE user_id = %s
                ORDER BY unlocked_at DESC
                """,
                (user_id,)
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def unlock_achievement(
    user_id: str,
    achievement_id: str,
    game_type: Optional[str] = None,
    unlocked_at: Optional[datetime] = None,
) -> bool:
    """
    Unlock an achievement for a user

    Returns True if unlocked (new), False if already unlocked
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                INSERT INTO user_achievements (user_id, achievement_id, game_type, unlocked_at)
                VALUES (%s, %s, %s, COALESCE(%s::timestamptz, CURRENT_TIMESTAMP))
                ON CONFLICT (user_id, achievement_id) DO NOTHING
                RETURNING id
                """,
                (user_id, achievement_id, game_type, unlocked_at)
            )

            result = await cur.fetchone()
            await conn.commit()

            return result is not None  # True if inserted, False if already existed
