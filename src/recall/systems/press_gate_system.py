from __future__ import annotations

from typing import Any

from recall.events.bus import (
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_PRESS_RAW,
    EVENT_SESSION_STARTED,
    EVENT_TILES_ENABLED_CHANGED,
    EventBus,
)
from recall.utils.input_throttle import PressThrottle


class PressGateSystem:
    """Lets a raw press through only while the board accepts selections.

    Presses are dropped while the tiles are disabled (memorize phase, the
    delay between rounds, game over) and when they repeat too quickly on the
    same spot. Press ids restart with every session.
    """

    def __init__(self, event_bus: EventBus, *, throttle: PressThrottle | None = None) -> None:
        self.event_bus = event_bus
        self._throttle = throttle or PressThrottle()
        self._tiles_enabled = False
        self.event_bus.subscribe(EVENT_MOUSE_PRESS_RAW, self._on_mouse_press_raw)
        self.event_bus.subscribe(EVENT_TILES_ENABLED_CHANGED, self._on_tiles_enabled_changed)
        self.event_bus.subscribe(EVENT_SESSION_STARTED, self._on_session_started)

    @property
    def tiles_enabled(self) -> bool:
        return self._tiles_enabled

    def _on_tiles_enabled_changed(self, sender: Any, **payload: Any) -> None:
        enabled = payload.get("enabled")
        if isinstance(enabled, bool):
            self._tiles_enabled = enabled

    def _on_session_started(self, sender: Any, **payload: Any) -> None:
        self._throttle.reset()

    def _on_mouse_press_raw(self, sender: Any, **payload: Any) -> None:
        if not self._tiles_enabled:
            return
        try:
            x = float(payload["x"])
            y = float(payload["y"])
            button = int(payload["button"])
        except (KeyError, TypeError, ValueError):
            return
        if not self._throttle.allow(x, y, button):
            return
        self.event_bus.emit(
            EVENT_MOUSE_PRESS,
            x=x,
            y=y,
            button=button,
            press_id=self._throttle.last_sequence,
        )
