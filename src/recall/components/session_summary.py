from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from recall.components.round_state import RoundEndReason
from recall.components.score_entry import ScoreEntry
from recall.components.session_state import Tier


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Terminal summary exposed once a session reaches game over."""
    final_score: int
    reason: RoundEndReason
    rounds_reached: int
    tier: Tier
    player_name: str | None = None
    score_recorded: bool = False
    high_scores: Tuple[ScoreEntry, ...] = field(default_factory=tuple)
