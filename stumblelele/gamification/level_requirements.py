"""
Level Requirement Tables

Per-game thresholds for levels 1-5 and the features each level unlocks.

A player reaches a level when ALL of these hold across their history:
- games played >= games_played
- average score >= min_score
- estimated accuracy >= accuracy
- best streak of good sessions >= streak_required

Feature Tiers (cumulative):
- Level 2: Advanced Mode, Statistics Dashboard
- Level 3: Custom Challenges, Progress Tracking (+ game bonus)
- Level 4: Expert Mode, Leaderboards
- Level 5: Master Mode, Creative Tools (+ game bonus)
"""

from typing import Dict, List, Sequence, Tuple, Union
import logging

from stumblelele.exceptions import ConfigurationError
from stumblelele.models.game import GameType, LevelRequirement

logger = logging.getLogger(__name__)

MAX_LEVEL = 5

# Fallback table for game types without their own requirements
DEFAULT_GAME_TYPE = GameType.MEMORY


def _table(rows: Sequence[Tuple[int, int, int, float, int]]) -> Tuple[LevelRequirement, ...]:
    return tuple(
        LevelRequirement(
            level=level,
            min_score=min_score,
            games_played=games_played,
            accuracy=accuracy,
            streak_required=streak_required,
        )
        for level, min_score, games_played, accuracy, streak_required in rows
    )


# (level, min_score, games_played, accuracy, streak_required)
LEVEL_REQUIREMENTS: Dict[GameType, Tuple[LevelRequirement, ...]] = {
    GameType.MEMORY: _table([
        (1, 100, 3, 60, 2),
        (2, 150, 8, 70, 3),
        (3, 200, 15, 80, 4),
        (4, 250, 25, 85, 5),
        (5, 300, 40, 90, 6),
    ]),
    GameType.WORDS: _table([
        (1, 120, 3, 65, 2),
        (2, 180, 8, 75, 3),
        (3, 240, 15, 80, 4),
        (4, 300, 25, 85, 5),
        (5, 360, 40, 90, 6),
    ]),
    GameType.MATH: _table([
        (1, 150, 3, 70, 3),
        (2, 220, 8, 75, 4),
        (3, 300, 15, 80, 5),
        (4, 380, 25, 85, 6),
        (5, 460, 40, 90, 7),
    ]),
    GameType.EMOTIONS: _table([
        (1, 130, 3, 65, 2),
        (2, 200, 8, 75, 3),
        (3, 270, 15, 80, 4),
        (4, 340, 25, 85, 5),
        (5, 410, 40, 90, 6),
    ]),
}

BASE_FEATURES: Dict[int, List[str]] = {
    2: ["Advanced Mode", "Statistics Dashboard"],
    3: ["Custom Challenges", "Progress Tracking"],
    4: ["Expert Mode", "Leaderboards"],
    5: ["Master Mode", "Creative Tools"],
}

GAME_FEATURES: Dict[GameType, Dict[int, str]] = {
    GameType.MEMORY: {3: "Memory Palace Mode", 5: "Speed Memory"},
    GameType.WORDS: {3: "Word Builder", 5: "Poetry Mode"},
    GameType.MATH: {3: "Formula Helper", 5: "Advanced Operations"},
    GameType.EMOTIONS: {3: "Emotion Diary", 5: "Empathy Training"},
}


def validate_requirement_table(game_type: GameType, requirements: Sequence[LevelRequirement]) -> None:
    """
    Check that a table only ever gets harder

    Raises:
        ConfigurationError: if levels are not strictly increasing or any
            threshold decreases from one level to the next
    """
    if not requirements:
        raise ConfigurationError(f"No level requirements for {game_type.value}", config_key=game_type.value)

    for previous, current in zip(requirements, requirements[1:]):
        if current.level <= previous.level:
            raise ConfigurationError(
                f"{game_type.value}: level {current.level} does not follow level {previous.level}",
                config_key=game_type.value,
            )
        for threshold in ("min_score", "games_played", "accuracy", "streak_required"):
            if getattr(current, threshold) < getattr(previous, threshold):
                raise ConfigurationError(
                    f"{game_type.value}: {threshold} decreases from level {previous.level} to {current.level}",
                    config_key=game_type.value,
                )


def _validate_all_tables() -> None:
    missing = [gt.value for gt in GameType if gt not in LEVEL_REQUIREMENTS]
    if missing:
        raise ConfigurationError(f"Missing level requirements for: {', '.join(missing)}")
    for game_type, requirements in LEVEL_REQUIREMENTS.items():
        validate_requirement_table(game_type, requirements)


_validate_all_tables()


def resolve_game_type(game_type: Union[str, GameType]) -> Union[GameType, None]:
    """
    Map an identifier to a GameType, or None if it is not a known game

    Matching is exact: "MATH" or " math " are not known games here. Input
    from users is normalized by GameType.parse() before it reaches the engine.
    """
    if isinstance(game_type, GameType):
        return game_type
    try:
        return GameType(game_type)
    except ValueError:
        return None


def get_level_requirements(game_type: Union[str, GameType]) -> Tuple[LevelRequirement, ...]:
    """
    Get the ordered requirement table for a game

    Unknown game types use the memory table. Callers that need to reject
    unknown games should go through GameType.parse() first.
    """
    resolved = resolve_game_type(game_type)
    if resolved is None:
        logger.warning(
            f"No level requirements for game type '{game_type}', "
            f"using '{DEFAULT_GAME_TYPE.value}' table"
        )
        resolved = DEFAULT_GAME_TYPE
    return LEVEL_REQUIREMENTS[resolved]


def get_unlocked_features(game_type: Union[str, GameType], level: int) -> List[str]:
    """
    Features available at `level`, including every lower tier

    Returns:
        Base tier features in ascending tier order, followed by the
        game's bonus features
    """
    features: List[str] = []
    for tier_level in sorted(BASE_FEATURES):
        if level >= tier_level:
            features.extend(BASE_FEATURES[tier_level])

    resolved = resolve_game_type(game_type)
    bonus = GAME_FEATURES.get(resolved, {}) if resolved else {}
    for tier_level in sorted(bonus):
        if level >= tier_level:
            features.append(bonus[tier_level])

    return features
