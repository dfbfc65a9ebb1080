from recall.events.bus import EVENT_MOUSE_PRESS, EVENT_TILE_CLICK, EventBus
from recall.ui.layout import tile_index_at
from recall.utils.game_state import get_board

LEFT_BUTTON = 1


class InputSystem:
    """Turns left-button presses over the board into tile clicks."""

    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if kwargs.get('button') != LEFT_BUTTON:
            return
        board = get_board(self.world)
        if board is None:
            return
        rows = (board.size + board.cols - 1) // board.cols
        index = tile_index_at(x, y, self.window.width, self.window.height, cols=board.cols, rows=rows)
        if index is None or index >= board.size:
            return
        self.event_bus.emit(EVENT_TILE_CLICK, index=index)
