"""
Achievement System

Awards one-time achievements from a player's game progression.

The registry below is static and holds no unlock state. Which achievements a
user already has lives in the game store, keyed by user, so a restart or a
second worker can't award the same achievement twice.

Categories:
- Getting started (first game, first level up)
- Skill (accuracy, high score, streaks)
- Dedication (games played, all games at level 2)
- Game mastery (level 4 in a specific game)
"""

from typing import Dict, Iterable, List, Mapping, Optional
from datetime import datetime, timezone
import logging

from stumblelele.models.achievement import Achievement, UnlockedAchievement
from stumblelele.models.game import GameProgression, GameType

logger = logging.getLogger(__name__)


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first_game",
        title="Primeira Jogada",
        description="Completou seu primeiro jogo!",
        icon="🎮",
        condition=lambda p: p.games_played >= 1,
        reward="Desbloqueou a funcionalidade de estatísticas",
    ),
    Achievement(
        id="level_up",
        title="Subiu de Nível",
        description="Alcançou o nível 2 em qualquer jogo!",
        icon="⭐",
        condition=lambda p: p.current_level >= 2,
        reward="Desbloqueou novos desafios",
    ),
    Achievement(
        id="perfectionist",
        title="Perfeccionista",
        description="Conseguiu 100% de precisão em um jogo!",
        icon="💯",
        condition=lambda p: p.accuracy >= 100,
        reward="Desbloqueou modo expert",
    ),
    Achievement(
        id="high_scorer",
        title="Pontuação Alta",
        description="Conseguiu mais de 300 pontos em um jogo!",
        icon="🏆",
        condition=lambda p: p.best_score >= 300,
        reward="Desbloqueou ranking global",
    ),
    Achievement(
        id="streak_master",
        title="Mestre da Sequência",
        description="Conseguiu uma sequência de 5 acertos!",
        icon="🔥",
        condition=lambda p: p.best_streak >= 5,
        reward="Desbloqueou modo turbo",
    ),
    Achievement(
        id="all_games_level_2",
        title="Jogador Completo",
        description="Alcançou nível 2 em todos os jogos!",
        icon="🌟",
        condition=lambda p: p.current_level >= 2,
        reward="Desbloqueou jogos especiais",
        requires_all_game_types=True,
    ),
    Achievement(
        id="experienced_player",
        title="Jogador Experiente",
        description="Jogou mais de 50 partidas!",
        icon="🎯",
        condition=lambda p: p.games_played >= 50,
        reward="Desbloqueou modo competitivo",
    ),
    Achievement(
        id="emotion_expert",
        title="Expert em Emoções",
        description="Dominou o jogo das emoções!",
        icon="💝",
        condition=lambda p: p.game_type == GameType.EMOTIONS.value and p.current_level >= 4,
        reward="Desbloqueou coaching emocional",
    ),
    Achievement(
        id="math_genius",
        title="Gênio da Matemática",
        description="Dominou os jogos de matemática!",
        icon="🧮",
        condition=lambda p: p.game_type == GameType.MATH.value and p.current_level >= 4,
        reward="Desbloqueou problemas avançados",
    ),
    Achievement(
        id="word_master",
        title="Mestre das Palavras",
        description="Dominou os jogos de palavras!",
        icon="📚",
        condition=lambda p: p.game_type == GameType.WORDS.value and p.current_level >= 4,
        reward="Desbloqueou dicionário interativo",
    ),
)

_ACHIEVEMENTS_BY_ID: Dict[str, Achievement] = {a.id: a for a in ACHIEVEMENTS}


def get_achievement(achievement_id: str) -> Optional[Achievement]:
    return _ACHIEVEMENTS_BY_ID.get(achievement_id)


def _is_met(
    achievement: Achievement,
    progression: GameProgression,
    all_progressions: Optional[Mapping[str, GameProgression]],
) -> bool:
    if not achievement.requires_all_game_types:
        return achievement.condition(progression)

    # Needs every game's progression; the single one passed in isn't enough
    if not all_progressions:
        return False
    return all(
        game_type.value in all_progressions
        and achievement.condition(all_progressions[game_type.value])
        for game_type in GameType
    )


def check_achievements(
    progression: GameProgression,
    already_unlocked_ids: Iterable[str] = (),
    all_progressions: Optional[Mapping[str, GameProgression]] = None,
    now: Optional[datetime] = None,
) -> List[UnlockedAchievement]:
    """
    Find achievements newly earned by this progression

    Args:
        progression: Progression for the game that was just played
        already_unlocked_ids: Achievement ids the user already has
        all_progressions: Progression per game type, needed for achievements
            spanning every game
        now: Unlock timestamp (defaults to current UTC time)

    Returns:
        Achievements whose condition holds and which are not in
        already_unlocked_ids, in registry order
    """
    unlocked_ids = set(already_unlocked_ids)
    unlocked_at = now or datetime.now(timezone.utc)
    newly_unlocked = []

    for achievement in ACHIEVEMENTS:
        if achievement.id in unlocked_ids:
            continue
        if not _is_met(achievement, progression, all_progressions):
            continue

        newly_unlocked.append(UnlockedAchievement(
            achievement_id=achievement.id,
            title=achievement.title,
            description=achievement.description,
            icon=achievement.icon,
            reward=achievement.reward,
            unlocked_at=unlocked_at,
            game_type=progression.game_type,
        ))

    return newly_unlocked


async def check_and_award_achievements(
    store,
    user_id: str,
    progression: GameProgression,
    all_progressions: Optional[Mapping[str, GameProgression]] = None,
) -> List[UnlockedAchievement]:
    """
    Evaluate achievements for a user and persist new unlocks

    Only achievements the store reports as newly inserted are returned, so
    two concurrent requests can't both announce the same unlock.

    Args:
        store: Game store (InMemoryGameStore or PostgresGameStore)
        user_id: User identifier
        progression: Progression for the game that was just played
        all_progressions: Progression per game type

    Returns:
        List of newly unlocked achievements
    """
    already_unlocked = await store.get_unlocked_achievement_ids(user_id)
    candidates = check_achievements(progression, already_unlocked, all_progressions)

    awarded = []
    for unlocked in candidates:
        inserted = await store.unlock_achievement(
            user_id,
            unlocked.achievement_id,
            game_type=unlocked.game_type,
            unlocked_at=unlocked.unlocked_at,
        )
        if not inserted:
            logger.debug(f"User {user_id} already had achievement {unlocked.achievement_id}")
            continue

        awarded.append(unlocked)
        logger.info(
            f"User {user_id} unlocked achievement: {unlocked.achievement_id} "
            f"({unlocked.title}) in {unlocked.game_type}"
        )

    return awarded


def get_achievement_catalog(user_unlocks: Iterable[Mapping]) -> Dict[str, object]:
    """
    Split the registry into unlocked and locked achievements for a user

    Args:
        user_unlocks: Rows from store.list_user_achievements()

    Returns:
        {
            'unlocked': [...],  # most recent first
            'locked': [...],
            'total_unlocked': int,
            'total_achievements': int
        }
    """
    unlocks_by_id = {u["achievement_id"]: u for u in user_unlocks}

    unlocked = []
    locked = []
    for achievement in ACHIEVEMENTS:
        entry = {
            "achievement_id": achievement.id,
            "title": achievement.title,
            "description": achievement.description,
            "icon": achievement.icon,
            "reward": achievement.reward,
        }
        unlock = unlocks_by_id.get(achievement.id)
        if unlock:
            entry["unlocked_at"] = unlock["unlocked_at"]
            entry["game_type"] = unlock.get("game_type")
            unlocked.append(entry)
        else:
            locked.append(entry)

    unlocked.sort(key=lambda x: x["unlocked_at"], reverse=True)

    return {
        "unlocked": unlocked,
        "locked": locked,
        "total_unlocked": len(unlocked),
        "total_achievements": len(ACHIEVEMENTS),
    }


def format_achievement_unlock_message(achievement: UnlockedAchievement) -> str:
    """
    Format achievement unlock message for celebration

    Args:
        achievement: Achievement from check_and_award_achievements()

    Returns:
        Formatted celebration message
    """
    return f"""🎉 CONQUISTA DESBLOQUEADA! 🎉

{achievement.icon} {achievement.title}

{achievement.description}

🎁 {achievement.reward}"""
