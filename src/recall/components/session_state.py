"""Session-wide score, round counter and difficulty tier."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from recall.constants import DIFFICULTY_EASY, DIFFICULTY_HARD


class Tier(Enum):
    EASY = DIFFICULTY_EASY
    HARD = DIFFICULTY_HARD

    @classmethod
    def from_preference(cls, value: str | None) -> "Tier":
        """Parse a stored difficulty string, defaulting to EASY."""
        if not value:
            return cls.EASY
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.EASY


@dataclass(slots=True)
class SessionState:
    """Singleton component owned by the session controller."""
    current_round: int = 1
    score: int = 0
    tier: Tier = Tier.EASY
    correct_selections_this_round: int = 0
    player_name: str | None = None
    active: bool = False
