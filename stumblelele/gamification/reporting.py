"""
Progress Reporting

Turns a GameProgression into what the UI shows: progress bars toward the
next level, an encouragement message and a suggested difficulty.
"""

from typing import List

from stumblelele.gamification.level_requirements import MAX_LEVEL
from stumblelele.models.game import DifficultyRecommendation, GameProgression, RequirementProgress


def _percentage(current: float, target: float) -> float:
    """
    Share of `target` reached, capped at 100

    A target of 0 counts as fully met (100). Dividing by it instead would give
    an infinite or NaN row, and a NaN average falls through every band of
    get_motivational_message(). None of the shipped tables has a zero
    target, so this only matters for custom tables.
    """
    if target <= 0:
        return 100.0
    return min(100.0, current / target * 100)


def get_progress_to_next_level(progression: GameProgression) -> List[RequirementProgress]:
    """
    Progress toward each threshold of the next level

    Returns:
        Four rows, always in this order: games played, average score,
        accuracy, best streak
    """
    req = progression.next_level_requirements

    return [
        RequirementProgress(
            requirement="Jogos Completados",
            current=progression.games_played,
            target=req.games_played,
            percentage=_percentage(progression.games_played, req.games_played),
        ),
        RequirementProgress(
            requirement="Pontuação Média",
            current=round(progression.average_score),
            target=req.min_score,
            percentage=_percentage(progression.average_score, req.min_score),
        ),
        RequirementProgress(
            requirement="Precisão",
            current=round(progression.accuracy),
            target=req.accuracy,
            percentage=_percentage(progression.accuracy, req.accuracy),
        ),
        RequirementProgress(
            requirement="Melhor Sequência",
            current=progression.best_streak,
            target=req.streak_required,
            percentage=_percentage(progression.best_streak, req.streak_required),
        ),
    ]


def get_motivational_message(progression: GameProgression) -> str:
    """Encouragement picked from the average progress toward the next level"""
    progress = get_progress_to_next_level(progression)
    total_progress = sum(p.percentage for p in progress) / len(progress)

    if total_progress >= 90:
        return (
            f"Você está quase lá! Só mais um pouquinho para o nível "
            f"{progression.next_level_requirements.level}! 🌟"
        )
    elif total_progress >= 70:
        return "Excelente progresso! Continue assim para subir de nível! 🚀"
    elif total_progress >= 50:
        return "Você está indo muito bem! Metade do caminho já foi percorrido! 💪"
    elif total_progress >= 30:
        return "Bom trabalho! Continue praticando para melhorar ainda mais! 🎯"
    else:
        return "Cada jogo é uma oportunidade de aprender algo novo! Vamos continuar! 🌱"


def get_difficulty_recommendation(progression: GameProgression) -> DifficultyRecommendation:
    """
    Suggest which level to play next

    Rules, first match wins:
    - accuracy >= 90 with 5+ games: one level up (max MAX_LEVEL)
    - accuracy >= 75 with 3+ games: stay
    - accuracy < 60 above level 1: one level down
    - otherwise: stay
    """
    accuracy = progression.accuracy
    current_level = progression.current_level

    if accuracy >= 90 and progression.games_played >= 5:
        return DifficultyRecommendation(
            suggested=min(MAX_LEVEL, current_level + 1),
            reason="Sua precisão é excelente! Hora de um novo desafio!",
        )
    elif accuracy >= 75 and progression.games_played >= 3:
        return DifficultyRecommendation(
            suggested=current_level,
            reason="Continue praticando este nível para dominar completamente!",
        )
    elif accuracy < 60 and current_level > 1:
        return DifficultyRecommendation(
            suggested=max(1, current_level - 1),
            reason="Que tal praticar um nível mais fácil para construir confiança?",
        )
    else:
        return DifficultyRecommendation(
            suggested=current_level,
            reason="Este nível é perfeito para você continuar aprendendo!",
        )
