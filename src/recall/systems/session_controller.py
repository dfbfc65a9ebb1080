"""High-level coordinator for a play session."""
from __future__ import annotations

import logging
import random
from typing import Mapping, Optional

from esper import World

from recall.components.round_config import RoundConfig
from recall.components.round_state import RoundEndReason
from recall.components.session_state import SessionState, Tier
from recall.components.session_summary import SessionSummary
from recall.constants import (
    GRID_COLS,
    GRID_SIZE,
    PREF_DIFFICULTY,
    PREF_PLAYER_NAME,
    ROUND_DELAY_MS,
)
from recall.errors import ConfigError
from recall.events.bus import (
    EVENT_EXIT_SELECTED,
    EVENT_PLAY_AGAIN_SELECTED,
    EVENT_ROUND_ENDED,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_EVALUATED,
    EVENT_SESSION_OVER,
    EVENT_SESSION_STARTED,
    EVENT_TIER_CHANGED,
    EventBus,
)
from recall.systems.clock_system import ClockSystem
from recall.systems.high_score_ledger import HighScoreLedger
from recall.systems.round_engine import RoundEngine
from recall.systems.score_tracker import ScoreTracker
from recall.systems.tile_board import TileBoardSystem
from recall.utils.clock import Clock
from recall.utils.game_state import get_session_state
from recall.utils.preferences import PreferencesStore

logger = logging.getLogger(__name__)


class SessionController:
    """Wires the round engine, score tracker and ledger together.

    The presentation layer talks to this class (or emits
    ``EVENT_PLAY_AGAIN_SELECTED`` / ``EVENT_EXIT_SELECTED``) and renders the
    events it publishes.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        preferences: PreferencesStore,
        *,
        board_size: int = GRID_SIZE,
        board_cols: int = GRID_COLS,
        round_delay_ms: int = ROUND_DELAY_MS,
        configs: Mapping[Tier, RoundConfig] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.preferences = preferences
        self._round_delay_ms = round_delay_ms

        self.clocks = ClockSystem(event_bus)
        self.board = TileBoardSystem(world, event_bus, size=board_size, cols=board_cols)
        self.engine = RoundEngine(world, event_bus, self.board, self.clocks, rng=rng)
        self.scores = ScoreTracker(configs)
        self.ledger = HighScoreLedger(preferences, event_bus=event_bus)

        self._pending_round: Optional[Clock] = None
        self._summary: Optional[SessionSummary] = None

        self.event_bus.subscribe(EVENT_ROUND_ENDED, self._on_round_ended)
        self.event_bus.subscribe(EVENT_SELECTION_EVALUATED, self._on_selection_evaluated)
        self.event_bus.subscribe(EVENT_PLAY_AGAIN_SELECTED, self._on_play_again)
        self.event_bus.subscribe(EVENT_EXIT_SELECTED, self._on_exit)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return get_session_state(self.world)

    @property
    def summary(self) -> Optional[SessionSummary]:
        return self._summary

    @property
    def next_round_pending(self) -> bool:
        return self._pending_round is not None and self._pending_round.active

    def start_session(self, difficulty: str | Tier | None = None) -> None:
        """Start a brand-new session, optionally storing a new difficulty first."""
        if difficulty is not None:
            tier = difficulty if isinstance(difficulty, Tier) else Tier.from_preference(difficulty)
            self.preferences.set(PREF_DIFFICULTY, tier.value)
        self.ledger.load()
        self._begin(reason="new_session")

    def restart(self) -> None:
        """Play again: score and round reset, difficulty re-read from preferences."""
        self._begin(reason="restart")

    def exit_session(self) -> None:
        """Leave the session; pending clocks are dropped, the ledger is untouched."""
        self.engine.cancel()
        self.clocks.cancel_all()
        self._pending_round = None
        state = self.state
        if state.active:
            logger.info("Session abandoned at round %d with score %d", state.current_round, state.score)
        state.active = False

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_round_ended(self, sender, **payload) -> None:
        reason = payload.get("reason")
        if not isinstance(reason, RoundEndReason):
            return
        state = self.state
        if not state.active:
            return
        if reason is RoundEndReason.SUCCESS:
            self._on_round_success(state)
        else:
            self._finish(state, reason)

    def _on_selection_evaluated(self, sender, **payload) -> None:
        correct = payload.get("correct_selections")
        if isinstance(correct, int):
            self.state.correct_selections_this_round = correct

    def _on_play_again(self, sender, **payload) -> None:
        self.restart()

    def _on_exit(self, sender, **payload) -> None:
        self.exit_session()

    # ------------------------------------------------------------------
    # Flow helpers
    # ------------------------------------------------------------------

    def _begin(self, *, reason: str) -> None:
        self._cancel_pending_round()
        self.engine.cancel()
        self.scores.reset()
        self._summary = None

        tier = Tier.from_preference(self.preferences.get(PREF_DIFFICULTY))
        name = (self.preferences.get(PREF_PLAYER_NAME) or "").strip() or None

        state = self.state
        state.current_round = 1
        state.score = 0
        state.tier = tier
        state.correct_selections_this_round = 0
        state.player_name = name
        state.active = True

        logger.info("Session %s: tier=%s player=%s", reason, tier.value, name or "<anonymous>")
        self.event_bus.emit(EVENT_SESSION_STARTED, tier=tier, player_name=name)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score)
        try:
            self.engine.begin_round(self.scores.config_for(tier))
        except ConfigError:
            state.active = False
            raise

    def _on_round_success(self, state: SessionState) -> None:
        state.score = self.scores.record_success(state.tier)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score)

        next_round, next_tier = self.scores.advance(state.current_round, state.tier)
        if next_tier is not state.tier:
            logger.info("Escalating from %s to %s", state.tier.value, next_tier.value)
            self.event_bus.emit(EVENT_TIER_CHANGED, previous_tier=state.tier, new_tier=next_tier)
        state.current_round = next_round
        state.tier = next_tier

        self._cancel_pending_round()
        self._pending_round = self.clocks.defer(self._round_delay_ms, self._start_next_round)

    def _start_next_round(self) -> None:
        self._pending_round = None
        state = self.state
        if not state.active:
            return
        state.correct_selections_this_round = 0
        self.engine.begin_round(self.scores.config_for(state.tier))

    def _finish(self, state: SessionState, reason: RoundEndReason) -> None:
        state.active = False
        recorded = state.player_name is not None
        entries = self.ledger.record(state.player_name, state.score)
        self._summary = SessionSummary(
            final_score=state.score,
            reason=reason,
            rounds_reached=state.current_round,
            tier=state.tier,
            player_name=state.player_name,
            score_recorded=recorded,
            high_scores=tuple(entries),
        )
        logger.info("Game over (%s): final score %d", reason.name, state.score)
        self.event_bus.emit(EVENT_SESSION_OVER, summary=self._summary)

    def _cancel_pending_round(self) -> None:
        if self._pending_round is not None:
            self._pending_round.cancel()
            self._pending_round = None
