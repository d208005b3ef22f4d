"""Unit tests for progress reporting (stumblelele/gamification/reporting.py)"""
import pytest

from stumblelele.gamification.progression import calculate_progression
from stumblelele.gamification.reporting import (
    get_difficulty_recommendation,
    get_motivational_message,
    get_progress_to_next_level,
)
from stumblelele.models.game import GameProgression, LevelRequirement
from tests.conftest import make_history


def _progression(current_level=1, games_played=0, average_score=0.0, accuracy=0.0, best_streak=0,
                 next_req=None):
    return GameProgression(
        game_type="memory",
        current_level=current_level,
        games_played=games_played,
        average_score=average_score,
        accuracy=accuracy,
        best_streak=best_streak,
        next_level_requirements=next_req or LevelRequirement(
            level=current_level + 1, min_score=100, games_played=10, accuracy=80, streak_required=4
        ),
    )


# ============================================================================
# Progress Rows
# ============================================================================

def test_progress_rows_for_math_scenario():
    progression = calculate_progression("math", make_history("math", [150, 160, 170, 180, 190]))

    rows = get_progress_to_next_level(progression)

    assert [r.requirement for r in rows] == [
        "Jogos Completados",
        "Pontuação Média",
        "Precisão",
        "Melhor Sequência",
    ]
    games, average, accuracy, streak = rows
    assert (games.current, games.target) == (5, 8)
    assert games.percentage == pytest.approx(62.5)
    assert (average.current, average.target) == (170, 220)
    assert average.percentage == pytest.approx(170 / 220 * 100)
    assert accuracy.percentage == 100
    assert streak.percentage == 100


def test_progress_rows_round_current_values():
    rows = get_progress_to_next_level(_progression(average_score=66.6, accuracy=42.4))

    assert rows[1].current == 67
    assert rows[2].current == 42


def test_progress_percentage_capped_at_100():
    rows = get_progress_to_next_level(
        _progression(games_played=50, average_score=999, accuracy=100, best_streak=20)
    )

    assert all(r.percentage == 100 for r in rows)


def test_progress_zero_target_counts_as_complete():
    req = LevelRequirement(level=2, min_score=0, games_played=0, accuracy=0, streak_required=0)

    rows = get_progress_to_next_level(_progression(next_req=req))

    assert all(r.percentage == 100 for r in rows)
    assert get_motivational_message(_progression(next_req=req)).startswith("Você está quase lá!")


# ============================================================================
# Motivational Message
# ============================================================================

def test_message_almost_there_names_next_level():
    progression = _progression(games_played=10, average_score=100, accuracy=80, best_streak=3)

    message = get_motivational_message(progression)

    # (100 + 100 + 100 + 75) / 4 = 93.75
    assert message.startswith("Você está quase lá!")
    assert "nível 2" in message


@pytest.mark.parametrize("games_played,expected_start", [
    (9, "Excelente progresso!"),        # (90 + 100 + 100 + 0) / 4 = 72.5
    (2, "Você está indo muito bem!"),   # (20 + 100 + 100 + 0) / 4 = 55
])
def test_message_bands(games_played, expected_start):
    progression = _progression(games_played=games_played, average_score=100, accuracy=80)

    assert get_motivational_message(progression).startswith(expected_start)


def test_message_good_job_band():
    # (0 + 80 + 80 + 0) / 4 = 40
    progression = _progression(average_score=80, accuracy=64)

    assert get_motivational_message(progression).startswith("Bom trabalho!")


def test_message_for_new_player():
    progression = calculate_progression("memory", [])

    assert get_motivational_message(progression).startswith("Cada jogo é uma oportunidade")


# ============================================================================
# Difficulty Recommendation
# ============================================================================

def test_recommend_level_up_for_high_accuracy():
    result = get_difficulty_recommendation(_progression(current_level=2, games_played=5, accuracy=95))

    assert result.suggested == 3
    assert "novo desafio" in result.reason


def test_recommend_level_up_capped_at_max():
    result = get_difficulty_recommendation(_progression(current_level=5, games_played=40, accuracy=100))

    assert result.suggested == 5


def test_recommend_stay_with_good_accuracy():
    result = get_difficulty_recommendation(_progression(current_level=3, games_played=3, accuracy=80))

    assert result.suggested == 3
    assert result.reason.startswith("Continue praticando")


def test_high_accuracy_needs_five_games_to_level_up():
    result = get_difficulty_recommendation(_progression(current_level=2, games_played=4, accuracy=95))

    assert result.suggested == 2


def test_recommend_level_down_for_low_accuracy():
    result = get_difficulty_recommendation(_progression(current_level=3, games_played=10, accuracy=40))

    assert result.suggested == 2
    assert "mais fácil" in result.reason


def test_never_recommend_below_level_one():
    result = get_difficulty_recommendation(_progression(current_level=1, games_played=10, accuracy=10))

    assert result.suggested == 1
    assert result.reason.startswith("Este nível é perfeito")


def test_math_scenario_recommends_next_level():
    progression = calculate_progression("math", make_history("math", [150, 160, 170, 180, 190]))

    assert get_difficulty_recommendation(progression).suggested == 2
    assert get_motivational_message(progression).startswith("Excelente progresso!")
