from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from esper import World

from recall.components.round_state import RoundEndReason, RoundPhase
from recall.components.score_entry import ScoreEntry
from recall.components.session_summary import SessionSummary
from recall.events.bus import (
    EVENT_HIGH_SCORES_CHANGED,
    EVENT_PHASE_CHANGED,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_OVER,
    EVENT_SESSION_STARTED,
    EventBus,
)
from recall.rendering.board_renderer import BoardRenderer
from recall.systems.tile_board import TileBoardSystem
from recall.ui.layout import compute_board_geometry

END_MESSAGES = {
    RoundEndReason.WRONG_TILE: "Wrong tile!",
    RoundEndReason.TIMEOUT: "Time's up!",
}


@dataclass
class HudModel:
    """Text shown above the board, kept current from session events."""
    score_text: str = "Score: 0"
    timer_text: str = ""
    game_over_lines: List[str] = field(default_factory=list)
    high_score_lines: List[str] = field(default_factory=list)


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window, board: TileBoardSystem):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.board = board
        self.hud = HudModel()
        self._board_renderer = BoardRenderer(self)
        self.event_bus.subscribe(EVENT_PHASE_CHANGED, self.on_phase_changed)
        self.event_bus.subscribe(EVENT_SCORE_CHANGED, self.on_score_changed)
        self.event_bus.subscribe(EVENT_SESSION_STARTED, self.on_session_started)
        self.event_bus.subscribe(EVENT_SESSION_OVER, self.on_session_over)
        self.event_bus.subscribe(EVENT_HIGH_SCORES_CHANGED, self.on_high_scores_changed)

    def on_phase_changed(self, sender, **kwargs):
        phase = kwargs.get('phase')
        remaining_ms = kwargs.get('remaining_ms')
        seconds = remaining_ms // 1000 if isinstance(remaining_ms, int) else None
        if phase == RoundPhase.MEMORIZING:
            self.hud.timer_text = f"Memorize: {seconds}s" if seconds is not None else "Memorize the tiles!"
        elif phase == RoundPhase.AWAITING_SELECTION:
            self.hud.timer_text = f"Time Left: {seconds}s" if seconds is not None else ""
        elif phase == RoundPhase.ROUND_COMPLETE:
            self.hud.timer_text = "Correct!"
        elif phase in (RoundPhase.GAME_OVER, RoundPhase.IDLE):
            self.hud.timer_text = ""

    def on_score_changed(self, sender, **kwargs):
        score = kwargs.get('score')
        if isinstance(score, int):
            self.hud.score_text = f"Score: {score}"

    def on_session_started(self, sender, **kwargs):
        self.hud.game_over_lines = []

    def on_session_over(self, sender, **kwargs):
        summary = kwargs.get('summary')
        if not isinstance(summary, SessionSummary):
            return
        self.hud.game_over_lines = [
            END_MESSAGES.get(summary.reason, "Game over"),
            f"Final score: {summary.final_score}",
            "Play again? (Y / N)",
        ]
        self._set_high_scores(summary.high_scores)

    def on_high_scores_changed(self, sender, **kwargs):
        self._set_high_scores(kwargs.get('entries') or ())

    def _set_high_scores(self, entries) -> None:
        self.hud.high_score_lines = [
            f"{rank}. {entry.name} - {entry.score}"
            for rank, entry in enumerate(entries, start=1)
            if isinstance(entry, ScoreEntry)
        ]

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        board = self.board
        rows = (board.size + board.cols - 1) // board.cols
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, board.cols, rows)
        self._board_renderer.render(arcade, tile_size, start_x, start_y)

        top = self.window.height
        arcade.draw_text(self.hud.score_text, 20, top - 40, arcade.color.WHITE, 20)
        arcade.draw_text(self.hud.timer_text, self.window.width - 240, top - 40, arcade.color.WHITE, 20)
        for offset, line in enumerate(self.hud.high_score_lines):
            arcade.draw_text(line, 20, top - 75 - offset * 20, arcade.color.LIGHT_GRAY, 14)
        if self.hud.game_over_lines:
            arcade.draw_lrbt_rectangle_filled(0, self.window.width, top / 2 - 80, top / 2 + 80, (0, 0, 0, 200))
            for offset, line in enumerate(self.hud.game_over_lines):
                arcade.draw_text(
                    line,
                    self.window.width / 2,
                    top / 2 + 40 - offset * 36,
                    arcade.color.WHITE,
                    22,
                    anchor_x="center",
                )
