"""Round state resource describing the active phase of the current round."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Optional


class RoundPhase(Enum):
    IDLE = auto()
    MEMORIZING = auto()
    AWAITING_SELECTION = auto()
    EVALUATING = auto()
    ROUND_COMPLETE = auto()
    GAME_OVER = auto()


class RoundEndReason(Enum):
    SUCCESS = auto()
    WRONG_TILE = auto()
    TIMEOUT = auto()


@dataclass(slots=True)
class RoundState:
    """Singleton component mutated only by the round engine."""
    phase: RoundPhase = RoundPhase.IDLE
    targets: FrozenSet[int] = field(default_factory=frozenset)
    tiles_to_remember: int = 0
    correct_selections: int = 0
    reason: Optional[RoundEndReason] = None
    evaluating: bool = False
