from __future__ import annotations

from typing import Mapping, Tuple

from recall.components.round_config import ROUND_CONFIGS, RoundConfig
from recall.components.session_state import Tier


class ScoreTracker:
    """Session score accumulation and tier progression.

    Progression is pure: the next (round, tier) depends only on the current
    round and tier. Easy escalates to Hard after its configured number of
    successful rounds, restarting the round counter at 1. Hard never changes.
    """

    def __init__(self, configs: Mapping[Tier, RoundConfig] | None = None) -> None:
        self._configs = configs if configs is not None else ROUND_CONFIGS
        self._score = 0

    @property
    def score(self) -> int:
        return self._score

    def config_for(self, tier: Tier) -> RoundConfig:
        return self._configs[tier]

    def reset(self) -> None:
        self._score = 0

    def record_success(self, tier: Tier) -> int:
        self._score += self.config_for(tier).score_increment
        return self._score

    def advance(self, current_round: int, tier: Tier) -> Tuple[int, Tier]:
        if tier is Tier.EASY:
            limit = self.config_for(Tier.EASY).rounds_per_tier_before_escalation
            if current_round >= limit:
                return 1, Tier.HARD
        return current_round + 1, tier
