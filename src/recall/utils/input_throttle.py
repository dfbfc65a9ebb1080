from __future__ import annotations

from dataclasses import dataclass, field
from time import monotonic
from typing import Callable, Dict, Tuple


@dataclass(slots=True)
class PressThrottle:
    """Drops pointer presses that repeat too quickly on the same spot.

    A press is rejected when the same button was pressed less than
    ``min_interval`` seconds ago within ``min_distance`` pixels. Accepted
    presses get an increasing sequence number so downstream systems can tell
    one physical press from another.
    """

    min_interval: float = 0.15
    min_distance: float = 6.0
    clock: Callable[[], float] | None = field(default=None, repr=False)

    _clock: Callable[[], float] = field(init=False, repr=False)
    _last_press: Dict[int, Tuple[float, float, float]] = field(init=False, repr=False)
    _sequence: int = field(init=False, default=0, repr=False)

    def __post_init__(self) -> None:
        self._clock = self.clock or monotonic
        self._last_press = {}
        self.min_interval = max(0.0, float(self.min_interval))
        self.min_distance = max(0.0, float(self.min_distance))

    def allow(self, x: float, y: float, button: int) -> bool:
        now = self._clock()
        last = self._last_press.get(button)
        if last is not None and (now - last[0]) < self.min_interval:
            dx = x - last[1]
            dy = y - last[2]
            if dx * dx + dy * dy <= self.min_distance * self.min_distance:
                return False
        self._last_press[button] = (now, x, y)
        self._sequence += 1
        return True

    def reset(self) -> None:
        self._last_press.clear()
        self._sequence = 0

    @property
    def last_sequence(self) -> int | None:
        return self._sequence or None
