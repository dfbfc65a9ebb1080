"""Per-tile selection state for the memory board."""
from dataclasses import dataclass
from enum import Enum, auto


class TileState(Enum):
    """Selection state of a tile within the current round."""
    UNSELECTED = auto()
    CORRECT = auto()
    WRONG = auto()


class TileVisual(Enum):
    """What the tile surface should currently draw for a tile."""
    BLANK = auto()
    SHOWN = auto()
    CORRECT = auto()
    WRONG = auto()


class SelectionOutcome(Enum):
    ALREADY_SELECTED = auto()
    MARKED_CORRECT = auto()
    MARKED_WRONG = auto()


@dataclass(slots=True)
class TileSlot:
    """One selectable tile.

    ``state`` is the game-facing selection result; ``visual`` is purely
    presentational and also covers the memorize highlight, which is not a
    selection state.
    """
    index: int
    state: TileState = TileState.UNSELECTED
    enabled: bool = False
    visual: TileVisual = TileVisual.BLANK
