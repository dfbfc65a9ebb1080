from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS_RAW = "mouse_press_raw"  # payload: x, y, button, modifiers
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button, press_id
EVENT_TILE_CLICK = "tile_click"            # payload: index=int


# ============================================================================
# TILE SURFACE
# ============================================================================
EVENT_BOARD_RESET = "board_reset"                      # payload: size=int
EVENT_TILE_VISUAL_CHANGED = "tile_visual_changed"      # payload: index=int, visual=TileVisual
EVENT_TILES_ENABLED_CHANGED = "tiles_enabled_changed"  # payload: enabled=bool


# ============================================================================
# ROUND & SESSION
# ============================================================================
EVENT_PHASE_CHANGED = "phase_changed"          # payload: phase=RoundPhase, remaining_ms=int|None
# The round engine does not own the score. On WRONG_TILE or TIMEOUT the final
# score follows as EVENT_SESSION_OVER(summary.final_score) within the same dispatch.
EVENT_ROUND_ENDED = "round_ended"              # payload: reason=RoundEndReason, correct_selections=int, targets=frozenset[int]
EVENT_SELECTION_EVALUATED = "selection_evaluated"  # payload: index=int, outcome=SelectionOutcome, correct_selections=int
EVENT_SCORE_CHANGED = "score_changed"          # payload: score=int
EVENT_TIER_CHANGED = "tier_changed"            # payload: previous_tier=Tier, new_tier=Tier
EVENT_SESSION_STARTED = "session_started"      # payload: tier=Tier, player_name=str|None
EVENT_SESSION_OVER = "session_over"            # payload: summary=SessionSummary
EVENT_HIGH_SCORES_CHANGED = "high_scores_changed"  # payload: entries=list[ScoreEntry]


# ============================================================================
# MENU & UI
# ============================================================================
EVENT_PLAY_AGAIN_SELECTED = "play_again_selected"  # payload: None
EVENT_EXIT_SELECTED = "exit_selected"              # payload: None
