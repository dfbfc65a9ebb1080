from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Optional

TickCallback = Callable[[int], None]
FinishCallback = Callable[[], None]


class ClockStatus(Enum):
    IDLE = auto()
    RUNNING = auto()
    FINISHED = auto()
    CANCELLED = auto()


class Clock:
    """Cancellable countdown advanced explicitly by elapsed milliseconds.

    Behaves like a countdown timer on a cooperative scheduler:

    * ``on_tick(remaining_ms)`` fires once when the clock starts and then once
      per advance that crosses a tick boundary while time remains.
    * ``on_finish()`` fires exactly once when the duration is used up.
    * After ``cancel()`` neither callback fires again, including when the
      cancellation happens from inside ``on_tick``.

    A clock without a tick interval is a one-shot deferred callback.
    Clocks are single use; start a new instance for the next countdown.
    """

    def __init__(self) -> None:
        self._status = ClockStatus.IDLE
        self._duration_ms = 0.0
        self._elapsed_ms = 0.0
        self._tick_interval_ms: Optional[float] = None
        self._next_tick_ms = 0.0
        self._on_tick: Optional[TickCallback] = None
        self._on_finish: Optional[FinishCallback] = None

    @property
    def status(self) -> ClockStatus:
        return self._status

    @property
    def active(self) -> bool:
        return self._status is ClockStatus.RUNNING

    @property
    def remaining_ms(self) -> int:
        return int(max(0.0, self._duration_ms - self._elapsed_ms))

    def start(
        self,
        duration_ms: int,
        tick_interval_ms: Optional[int],
        on_tick: Optional[TickCallback],
        on_finish: FinishCallback,
    ) -> "Clock":
        if self._status is not ClockStatus.IDLE:
            raise RuntimeError(f"Clock already used (status={self._status.name})")
        if duration_ms < 0:
            raise ValueError("duration_ms must be >= 0")
        if tick_interval_ms is not None and tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be > 0")
        self._duration_ms = float(duration_ms)
        self._elapsed_ms = 0.0
        self._tick_interval_ms = float(tick_interval_ms) if tick_interval_ms is not None else None
        self._on_tick = on_tick
        self._on_finish = on_finish
        self._status = ClockStatus.RUNNING
        if self._tick_interval_ms is not None:
            self._next_tick_ms = self._tick_interval_ms
            if self._duration_ms > 0:
                self._fire_tick()
        return self

    def advance(self, elapsed_ms: float) -> None:
        if self._status is not ClockStatus.RUNNING:
            return
        if elapsed_ms < 0:
            elapsed_ms = 0.0
        self._elapsed_ms += elapsed_ms
        if self._elapsed_ms >= self._duration_ms:
            self._finish()
            return
        if self._tick_interval_ms is None or self._elapsed_ms < self._next_tick_ms:
            return
        # Several boundaries crossed by one large step collapse into a single tick.
        while self._next_tick_ms <= self._elapsed_ms:
            self._next_tick_ms += self._tick_interval_ms
        self._fire_tick()

    def cancel(self) -> None:
        if self._status is ClockStatus.RUNNING or self._status is ClockStatus.IDLE:
            self._status = ClockStatus.CANCELLED
            self._release()

    def _fire_tick(self) -> None:
        if self._on_tick is not None:
            self._on_tick(self.remaining_ms)

    def _finish(self) -> None:
        callback = self._on_finish
        self._status = ClockStatus.FINISHED
        self._elapsed_ms = self._duration_ms
        self._release()
        if callback is not None:
            callback()

    def _release(self) -> None:
        self._on_tick = None
        self._on_finish = None
