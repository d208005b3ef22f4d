"""Achievement models for gamification"""
from datetime import datetime
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from stumblelele.models.game import GameProgression


class Achievement(BaseModel):
    """Achievement definition. Holds no per-user state."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    icon: str
    reward: str
    condition: Callable[[GameProgression], bool]
    # Condition must hold for every game type's progression, not just one
    requires_all_game_types: bool = False


class UnlockedAchievement(BaseModel):
    """An achievement a user has earned"""
    achievement_id: str
    title: str
    description: str
    icon: str
    reward: str
    unlocked_at: datetime
    game_type: Optional[str] = None
