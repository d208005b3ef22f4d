"""Game record database queries"""
import logging

from stumblelele.db.connection import db

logger = logging.getLogger(__name__)


async def add_game_record(user_id: str, game_type: str, level: int, score: int) -> dict:
    """
    Insert a completed session

    Returns:
        {
            'id': int,
            'user_id': str,
            'game_type': str,
            'level': int,
            'score': int,
            'completed_at': datetime
        }
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                INSERT INTO game_records (user_id, game_type, level, score)
                VALUES (%s, %s, %s, %s)
                RETURNING id, user_id, game_type, level, score, completed_at
                """,
                (user_id, game_type, level, score)
            )
            row = await cur.fetchone()
            await conn.commit()
            logger.info(f"Saved {game_type} record for user {user_id}: level {level}, score {score}")
            return dict(row) if row else None


async def get_game_records(user_id: str, game_type: str) -> list[dict]:
    """Get sessions for one game, oldest first"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id, user_id, game_type, level, score, completed_at
                FROM game_records
                WHERE user_id = %s AND game_type = %s
                ORDER BY completed_at, id
                """,
                (user_id, game_type)
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def get_all_game_records(user_id: str) -> list[dict]:
    """Get sessions for every game, oldest first"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id, user_id, game_type, level, score, completed_at
                FROM game_records
                WHERE user_id = %s
                ORDER BY completed_at, id
                """,
                (user_id,)
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]
