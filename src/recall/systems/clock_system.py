from __future__ import annotations

from typing import List, Optional

from recall.events.bus import EVENT_TICK, EventBus
from recall.utils.clock import Clock, FinishCallback, TickCallback


class ClockSystem:
    """Advances every live clock on each frame tick.

    ``EVENT_TICK`` carries ``dt`` in seconds. Clocks started while a tick is
    being delivered are first advanced on the following tick.
    """

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self._clocks: List[Clock] = []
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def start(
        self,
        duration_ms: int,
        on_finish: FinishCallback,
        *,
        tick_interval_ms: Optional[int] = None,
        on_tick: Optional[TickCallback] = None,
    ) -> Clock:
        clock = Clock()
        self._clocks.append(clock)
        return clock.start(duration_ms, tick_interval_ms, on_tick, on_finish)

    def defer(self, delay_ms: int, callback: FinishCallback) -> Clock:
        """Schedule a one-shot callback; cancel the returned clock to drop it."""
        return self.start(delay_ms, callback)

    @property
    def active_count(self) -> int:
        return sum(1 for clock in self._clocks if clock.active)

    def cancel_all(self) -> None:
        for clock in list(self._clocks):
            clock.cancel()
        self._clocks = []

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get("dt")
        if dt is None:
            return
        try:
            elapsed_ms = float(dt) * 1000.0
        except (TypeError, ValueError):
            return
        for clock in list(self._clocks):
            clock.advance(elapsed_ms)
        self._clocks = [clock for clock in self._clocks if clock.active]
