"""Per-round state machine: memorize, select, evaluate."""
from __future__ import annotations

import logging
import random
from typing import Callable, FrozenSet, Optional

from esper import World

from recall.components.round_config import RoundConfig
from recall.components.round_state import RoundEndReason, RoundPhase, RoundState
from recall.components.tile_slot import SelectionOutcome
from recall.errors import ConfigError, InvalidSelection
from recall.events.bus import (
    EVENT_PHASE_CHANGED,
    EVENT_ROUND_ENDED,
    EVENT_SELECTION_EVALUATED,
    EVENT_TILE_CLICK,
    EventBus,
)
from recall.systems.clock_system import ClockSystem
from recall.systems.tile_board import TileBoardSystem
from recall.utils.clock import Clock
from recall.utils.game_state import get_round_state

logger = logging.getLogger(__name__)


class RoundEngine:
    """Drives a single round from target selection to its end reason.

    Transitions::

        IDLE -> MEMORIZING -> AWAITING_SELECTION <-> EVALUATING
                                  |                     |
                                  +-> GAME_OVER <-------+-> ROUND_COMPLETE

    ``begin_round`` after ROUND_COMPLETE passes through IDLE before
    MEMORIZING. Only one phase clock exists at a time; it is cancelled before any
    transition out of MEMORIZING or AWAITING_SELECTION.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        board: TileBoardSystem,
        clocks: ClockSystem,
        *,
        rng: random.Random | None = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.board = board
        self.clocks = clocks
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self._config: Optional[RoundConfig] = None
        self._clock: Optional[Clock] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self._on_tile_click)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> RoundState:
        return get_round_state(self.world)

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    @property
    def reason(self) -> Optional[RoundEndReason]:
        return self.state.reason

    @property
    def targets(self) -> FrozenSet[int]:
        return self.state.targets

    @property
    def config(self) -> Optional[RoundConfig]:
        return self._config

    @property
    def active_clock(self) -> Optional[Clock]:
        return self._clock

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def validate(self, config: RoundConfig) -> None:
        size = self.board.size
        if config.tiles_to_remember < 1:
            raise ConfigError(f"tiles_to_remember must be at least 1, got {config.tiles_to_remember}")
        if config.tiles_to_remember >= size:
            raise ConfigError(
                f"tiles_to_remember ({config.tiles_to_remember}) must be smaller than the board ({size})"
            )
        if config.memorize_duration_ms < 0 or config.selection_duration_ms < 0:
            raise ConfigError("phase durations must be non-negative")
        if config.tick_interval_ms <= 0:
            raise ConfigError("tick_interval_ms must be positive")

    def draw_targets(self, count: int) -> FrozenSet[int]:
        """Uniformly sample ``count`` distinct tile indices."""
        return frozenset(self._rng.sample(range(self.board.size), count))

    def begin_round(self, config: RoundConfig) -> FrozenSet[int]:
        self.validate(config)
        self._cancel_clock()
        self._config = config

        state = self.state
        if state.phase is RoundPhase.ROUND_COMPLETE:
            state.phase = RoundPhase.IDLE
            self._publish_phase(None)
        state.correct_selections = 0
        state.reason = None
        state.evaluating = False
        state.tiles_to_remember = config.tiles_to_remember
        self.board.clear_round()
        state.targets = self.draw_targets(config.tiles_to_remember)
        logger.debug("Round targets: %s", sorted(state.targets))

        self.board.highlight(sorted(state.targets))
        self._enter_timed_phase(
            RoundPhase.MEMORIZING,
            config.memorize_duration_ms,
            self._on_memorize_finished,
        )
        return state.targets

    def on_tile_selected(self, index: int) -> Optional[SelectionOutcome]:
        """Judge a selection. Returns None when the input was ignored."""
        state = self.state
        if state.evaluating:
            return SelectionOutcome.ALREADY_SELECTED
        if state.phase is not RoundPhase.AWAITING_SELECTION:
            return None

        state.evaluating = True
        state.phase = RoundPhase.EVALUATING
        try:
            outcome = self.board.select(index, state.targets)
        except InvalidSelection as exc:
            logger.debug("Ignoring selection: %s", exc)
            state.phase = RoundPhase.AWAITING_SELECTION
            state.evaluating = False
            return None

        if outcome is SelectionOutcome.MARKED_CORRECT:
            state.correct_selections += 1
        self.event_bus.emit(
            EVENT_SELECTION_EVALUATED,
            index=index,
            outcome=outcome,
            correct_selections=state.correct_selections,
        )

        if outcome is SelectionOutcome.MARKED_WRONG:
            self._end_round(RoundPhase.GAME_OVER, RoundEndReason.WRONG_TILE)
        elif state.correct_selections >= state.tiles_to_remember:
            self._end_round(RoundPhase.ROUND_COMPLETE, RoundEndReason.SUCCESS)
        else:
            state.phase = RoundPhase.AWAITING_SELECTION
            state.evaluating = False
        return outcome

    def cancel(self) -> None:
        """Abandon the current round without emitting an end reason."""
        self._cancel_clock()
        state = self.state
        state.evaluating = False
        self.board.set_enabled(False)
        if state.phase is not RoundPhase.IDLE:
            state.phase = RoundPhase.IDLE
            self._publish_phase(None)

    # ------------------------------------------------------------------
    # Clock callbacks
    # ------------------------------------------------------------------

    def _on_memorize_finished(self) -> None:
        self._clock = None
        state = self.state
        if state.phase is not RoundPhase.MEMORIZING or self._config is None:
            return
        self.board.hide(sorted(state.targets))
        self._enable_board()
        self._enter_timed_phase(
            RoundPhase.AWAITING_SELECTION,
            self._config.selection_duration_ms,
            self._on_selection_timeout,
        )

    def _on_selection_timeout(self) -> None:
        self._clock = None
        if self.state.phase is not RoundPhase.AWAITING_SELECTION:
            return
        self._end_round(RoundPhase.GAME_OVER, RoundEndReason.TIMEOUT)

    def _on_phase_tick(self, remaining_ms: int) -> None:
        self._publish_phase(remaining_ms)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _on_tile_click(self, sender, **payload) -> None:
        index = payload.get("index")
        if index is None:
            return
        try:
            index_int = int(index)
        except (TypeError, ValueError):
            return
        self.on_tile_selected(index_int)

    def _enter_timed_phase(self, phase: RoundPhase, duration_ms: int, on_finish: Callable[[], None]) -> None:
        interval = self._config.tick_interval_ms if self._config is not None else None
        self.state.phase = phase
        logger.debug("Entering %s for %d ms", phase.name, duration_ms)
        if duration_ms <= 0:
            self._publish_phase(0)
        # A positive duration publishes its first tick immediately on start.
        self._clock = self.clocks.start(
            duration_ms,
            on_finish,
            tick_interval_ms=interval,
            on_tick=self._on_phase_tick,
        )

    def _enable_board(self) -> None:
        if self.state.evaluating:
            return
        self.board.set_enabled(True)

    def _end_round(self, phase: RoundPhase, reason: RoundEndReason) -> None:
        self._cancel_clock()
        state = self.state
        self.board.set_enabled(False)
        if reason is not RoundEndReason.SUCCESS:
            self.board.reveal(sorted(state.targets))
        state.phase = phase
        state.reason = reason
        state.evaluating = False
        logger.debug("Round ended: %s (%d/%d)", reason.name, state.correct_selections, state.tiles_to_remember)
        self._publish_phase(None)
        self.event_bus.emit(
            EVENT_ROUND_ENDED,
            reason=reason,
            correct_selections=state.correct_selections,
            targets=state.targets,
        )

    def _publish_phase(self, remaining_ms: Optional[int]) -> None:
        self.event_bus.emit(EVENT_PHASE_CHANGED, phase=self.state.phase, remaining_ms=remaining_ms)

    def _cancel_clock(self) -> None:
        if self._clock is not None:
            self._clock.cancel()
            self._clock = None
