from __future__ import annotations

from typing import AbstractSet, Iterable, List

from esper import World

from recall.components.board import Board
from recall.components.tile_slot import SelectionOutcome, TileSlot, TileState, TileVisual
from recall.constants import GRID_COLS, GRID_SIZE
from recall.errors import InvalidSelection
from recall.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_TILE_VISUAL_CHANGED,
    EVENT_TILES_ENABLED_CHANGED,
    EventBus,
)


class TileBoardSystem:
    """Owns the tile slot entities and publishes every change to the tile surface."""

    def __init__(self, world: World, event_bus: EventBus, size: int = GRID_SIZE, cols: int = GRID_COLS):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = self.world.create_entity(Board(size=size, cols=cols))
        self._tile_entities: List[int] = []
        self._enabled = False
        self.reset(size)

    @property
    def size(self) -> int:
        return len(self._tile_entities)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def slot(self, index: int) -> TileSlot:
        if not 0 <= index < len(self._tile_entities):
            raise IndexError(f"tile index out of range: {index}")
        return self.world.component_for_entity(self._tile_entities[index], TileSlot)

    def slots(self) -> List[TileSlot]:
        return [self.world.component_for_entity(ent, TileSlot) for ent in self._tile_entities]

    def reset(self, size: int) -> None:
        """Reallocate ``size`` slots, all unselected and disabled."""
        if size <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        for ent in self._tile_entities:
            self.world.delete_entity(ent, immediate=True)
        self._tile_entities = [self.world.create_entity(TileSlot(index=i)) for i in range(size)]
        board = self.world.component_for_entity(self.board_entity, Board)
        board.size = size
        self._enabled = False
        self.event_bus.emit(EVENT_BOARD_RESET, size=size)

    def clear_round(self) -> None:
        """Return every slot to unselected, blank and disabled without reallocating."""
        self.set_enabled(False)
        for slot in self.slots():
            slot.state = TileState.UNSELECTED
            self._set_visual(slot, TileVisual.BLANK)

    def highlight(self, indices: Iterable[int]) -> None:
        for index in indices:
            self._set_visual(self.slot(index), TileVisual.SHOWN)

    def hide(self, indices: Iterable[int]) -> None:
        for index in indices:
            slot = self.slot(index)
            if slot.visual is TileVisual.SHOWN:
                self._set_visual(slot, TileVisual.BLANK)

    def reveal(self, indices: Iterable[int]) -> None:
        """Force-show tiles the player did not find."""
        for index in indices:
            slot = self.slot(index)
            if slot.state is not TileState.CORRECT:
                self._set_visual(slot, TileVisual.SHOWN)

    def set_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        for slot in self.slots():
            slot.enabled = enabled
        if enabled != self._enabled:
            self._enabled = enabled
            self.event_bus.emit(EVENT_TILES_ENABLED_CHANGED, enabled=enabled)

    def select(self, index: int, targets: AbstractSet[int]) -> SelectionOutcome:
        if not isinstance(index, int) or not 0 <= index < len(self._tile_entities):
            raise InvalidSelection(index, "out of range")
        slot = self.slot(index)
        if not slot.enabled:
            raise InvalidSelection(index, "disabled")
        if slot.state is TileState.CORRECT:
            return SelectionOutcome.ALREADY_SELECTED
        if index in targets:
            slot.state = TileState.CORRECT
            self._set_visual(slot, TileVisual.CORRECT)
            return SelectionOutcome.MARKED_CORRECT
        slot.state = TileState.WRONG
        self._set_visual(slot, TileVisual.WRONG)
        return SelectionOutcome.MARKED_WRONG

    def _set_visual(self, slot: TileSlot, visual: TileVisual) -> None:
        if slot.visual is visual:
            return
        slot.visual = visual
        self.event_bus.emit(EVENT_TILE_VISUAL_CHANGED, index=slot.index, visual=visual)
