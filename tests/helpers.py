from __future__ import annotations

import random
from typing import Any, Dict, List

from recall.events.bus import EVENT_TICK, EventBus
from recall.systems.clock_system import ClockSystem
from recall.systems.round_engine import RoundEngine
from recall.systems.tile_board import TileBoardSystem
from recall.world import create_world


def capture(bus: EventBus, name: str) -> List[Dict[str, Any]]:
    """Subscribe to ``name`` and return the list that collects every payload."""
    received: List[Dict[str, Any]] = []
    bus.subscribe(name, lambda sender, **payload: received.append(payload))
    return received


def run_for(bus: EventBus, ms: int, step_ms: int = 250) -> None:
    """Emit frame ticks covering ``ms`` milliseconds of game time."""
    elapsed = 0
    while elapsed < ms:
        step = min(step_ms, ms - elapsed)
        bus.emit(EVENT_TICK, dt=step / 1000)
        elapsed += step


def build_engine(size: int = 36, seed: int = 0):
    bus = EventBus()
    world = create_world(rng=random.Random(seed))
    board = TileBoardSystem(world, bus, size=size, cols=6)
    clocks = ClockSystem(bus)
    engine = RoundEngine(world, bus, board, clocks)
    return bus, world, board, clocks, engine


def wrong_index(targets, size: int = 36) -> int:
    return next(i for i in range(size) if i not in targets)
