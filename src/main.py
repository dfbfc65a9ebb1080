"""Entry point for the Tile Recall memory game.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, close_window, color, key, run, set_background_color

from recall.components.round_state import RoundPhase
from recall.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from recall.events.bus import (
    EVENT_EXIT_SELECTED,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_PLAY_AGAIN_SELECTED,
    EVENT_TICK,
    EventBus,
)
from recall.systems.input import InputSystem
from recall.systems.press_gate_system import PressGateSystem
from recall.systems.render import RenderSystem
from recall.systems.session_controller import SessionController
from recall.utils.preferences import JsonFilePreferences
from recall.world import create_world

PLAY_AGAIN_KEYS = (key.Y, key.ENTER)
EXIT_KEYS = (key.N, key.ESCAPE)


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


class RecallWindow(Window):
    def __init__(self, preferences=None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Tile Recall")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world()
        self.preferences = preferences or JsonFilePreferences()

        # Core session systems
        self.session = SessionController(self.world, self.event_bus, self.preferences)

        # Interface systems
        self.press_gate = PressGateSystem(self.event_bus)
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self.event_bus, self, self.session.board)

        set_background_color(color.DARK_SLATE_GRAY)
        self.session.start_session()

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(
            EVENT_MOUSE_PRESS_RAW,
            x=x,
            y=y,
            button=button,
            modifiers=modifiers,
        )

    def on_key_press(self, symbol: int, modifiers: int):
        if self.session.engine.phase != RoundPhase.GAME_OVER:
            return
        if symbol in PLAY_AGAIN_KEYS:
            self.event_bus.emit(EVENT_PLAY_AGAIN_SELECTED)
        elif symbol in EXIT_KEYS:
            self.event_bus.emit(EVENT_EXIT_SELECTED)
            close_window()


def main():
    configure_logging()
    RecallWindow()
    run()

if __name__ == "__main__":
    main()
