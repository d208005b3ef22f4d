"""
Progression Engine

Computes a player's level, stats and unlocked features for one game from
their session history. Pure computation: no I/O, never raises for empty
history or unknown game types.

Accuracy is an ESTIMATE. Sessions don't record right/wrong answers, so each
session is assumed to have 10 questions and correct answers are guessed from
the score: floor(score / (10 + level * 5)).
"""

from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union
import logging

from stumblelele.gamification.level_requirements import (
    get_level_requirements,
    get_unlocked_features,
)
from stumblelele.models.game import GameProgression, GameRecord, GameType, LevelRequirement

logger = logging.getLogger(__name__)

QUESTIONS_PER_GAME = 10
GOOD_SCORE_THRESHOLD = 80

HistoryEntry = Union[GameRecord, Mapping[str, Any]]


def _as_records(game_history: Iterable[HistoryEntry]) -> List[GameRecord]:
    records = []
    for entry in game_history or []:
        if isinstance(entry, GameRecord):
            records.append(entry)
            continue
        # Rows from the store may carry NULL level/score
        records.append(GameRecord(
            game_type=str(entry.get("game_type", "")),
            level=max(1, int(entry.get("level") or 1)),
            score=max(0, int(entry.get("score") or 0)),
        ))
    return records


def calculate_accuracy(records: Sequence[GameRecord]) -> float:
    """Estimated percentage of correct answers, clamped to [0, 100]"""
    if not records:
        return 0.0

    total_correct = sum(record.score // (10 + record.level * 5) for record in records)
    total_questions = len(records) * QUESTIONS_PER_GAME
    accuracy = total_correct / total_questions * 100

    return max(0.0, min(100.0, accuracy))


def calculate_best_streak(records: Sequence[GameRecord]) -> int:
    """Longest run of consecutive sessions scoring at least GOOD_SCORE_THRESHOLD"""
    best_streak = 0
    current_streak = 0

    for record in records:
        if record.score >= GOOD_SCORE_THRESHOLD:
            current_streak += 1
            best_streak = max(best_streak, current_streak)
        else:
            current_streak = 0

    return best_streak


def meets_requirements(requirement: LevelRequirement, stats: Dict[str, float]) -> bool:
    """Check aggregate stats against every threshold of one level"""
    return (
        stats["games_played"] >= requirement.games_played
        and stats["average_score"] >= requirement.min_score
        and stats["accuracy"] >= requirement.accuracy
        and stats["best_streak"] >= requirement.streak_required
    )


def calculate_progression(
    game_type: Union[str, GameType],
    game_history: Iterable[HistoryEntry],
) -> GameProgression:
    """
    Calculate progression for one game from its history

    Args:
        game_type: Game identifier. Unknown identifiers are scored against
            the memory table.
        game_history: Sessions in chronological order, oldest first. Either
            GameRecord objects or mappings with 'level' and 'score' keys.

    Returns:
        GameProgression. Levels are walked in ascending order and the walk
        stops at the first unmet level, so a level can't be skipped.
    """
    requirements = get_level_requirements(game_type)
    records = _as_records(game_history)

    games_played = len(records)
    total_score = sum(record.score for record in records)
    average_score = total_score / games_played if games_played > 0 else 0.0
    best_score = max((record.score for record in records), default=0)
    accuracy = calculate_accuracy(records)
    best_streak = calculate_best_streak(records)

    stats = {
        "games_played": games_played,
        "average_score": average_score,
        "accuracy": accuracy,
        "best_streak": best_streak,
    }

    current_level = 1
    unlocked_features: List[str] = []

    for requirement in requirements:
        if not meets_requirements(requirement, stats):
            break
        current_level = requirement.level
        unlocked_features = get_unlocked_features(game_type, current_level)

    next_level_requirements = next(
        (req for req in requirements if req.level > current_level),
        requirements[-1],
    )

    game_type_value = game_type.value if isinstance(game_type, GameType) else str(game_type)

    logger.debug(
        f"Progression for {game_type_value}: level {current_level}, "
        f"{games_played} games, avg {average_score:.1f}, accuracy {accuracy:.1f}%, streak {best_streak}"
    )

    return GameProgression(
        game_type=game_type_value,
        current_level=current_level,
        total_score=total_score,
        games_played=games_played,
        average_score=average_score,
        best_score=best_score,
        accuracy=accuracy,
        best_streak=best_streak,
        unlocked_features=unlocked_features,
        next_level_requirements=next_level_requirements,
    )
