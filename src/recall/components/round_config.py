"""Immutable round parameters for each difficulty tier."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from recall.components.session_state import Tier
from recall.constants import (
    EASY_SCORE_INCREMENT,
    EASY_TILES,
    HARD_SCORE_INCREMENT,
    HARD_TILES,
    MEMORIZE_DURATION_MS,
    ROUNDS_PER_TIER,
    SELECTION_DURATION_MS,
    TICK_INTERVAL_MS,
)


@dataclass(frozen=True, slots=True)
class RoundConfig:
    tiles_to_remember: int
    memorize_duration_ms: int = MEMORIZE_DURATION_MS
    selection_duration_ms: int = SELECTION_DURATION_MS
    rounds_per_tier_before_escalation: int = ROUNDS_PER_TIER
    tick_interval_ms: int = TICK_INTERVAL_MS
    score_increment: int = EASY_SCORE_INCREMENT


ROUND_CONFIGS: Mapping[Tier, RoundConfig] = MappingProxyType({
    Tier.EASY: RoundConfig(tiles_to_remember=EASY_TILES, score_increment=EASY_SCORE_INCREMENT),
    Tier.HARD: RoundConfig(tiles_to_remember=HARD_TILES, score_increment=HARD_SCORE_INCREMENT),
})
