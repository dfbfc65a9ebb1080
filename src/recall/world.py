import random

from esper import World

from recall.components.round_state import RoundState
from recall.components.session_state import SessionState


def create_world(*, rng: random.Random | None = None) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Singleton resources read through recall.utils.game_state.
    world.create_entity(SessionState())
    world.create_entity(RoundState())
    return world
