from __future__ import annotations

from typing import TYPE_CHECKING

from recall.components.tile_slot import TileVisual
from recall.constants import TILE_GAP

if TYPE_CHECKING:
    from recall.systems.render import RenderSystem

# RGB fill per visual; a disabled blank tile is drawn darker.
VISUAL_COLORS = {
    TileVisual.BLANK: (200, 200, 200),
    TileVisual.SHOWN: (235, 205, 60),
    TileVisual.CORRECT: (80, 170, 80),
    TileVisual.WRONG: (190, 60, 60),
}
DISABLED_BLANK_COLOR = (150, 150, 150)


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, gap: int = TILE_GAP):
        self._rs = render_system
        self._gap = gap

    def tile_rects(self, tile_size: int, start_x: float, start_y: float) -> list[tuple[int, float, float, float, float]]:
        """Return (index, left, right, bottom, top) for each slot, row 0 drawn at the top."""
        board = self._rs.board
        rows = (board.size + board.cols - 1) // board.cols
        half_gap = self._gap / 2
        rects = []
        for slot in board.slots():
            row, col = divmod(slot.index, board.cols)
            left = start_x + col * tile_size + half_gap
            bottom = start_y + (rows - 1 - row) * tile_size + half_gap
            rects.append((slot.index, left, left + tile_size - self._gap, bottom, bottom + tile_size - self._gap))
        return rects

    def color_for(self, visual: TileVisual, enabled: bool) -> tuple[int, int, int]:
        if visual is TileVisual.BLANK and not enabled:
            return DISABLED_BLANK_COLOR
        return VISUAL_COLORS[visual]

    def render(self, arcade, tile_size: int, start_x: float, start_y: float) -> None:
        board = self._rs.board
        for index, left, right, bottom, top in self.tile_rects(tile_size, start_x, start_y):
            slot = board.slot(index)
            arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, self.color_for(slot.visual, slot.enabled))
