from __future__ import annotations

from esper import World

from recall.components.board import Board
from recall.components.round_state import RoundState
from recall.components.session_state import SessionState


def _singleton(world: World, component_type):
    for _, component in world.get_component(component_type):
        return component
    component = component_type()
    world.create_entity(component)
    return component


def get_round_state(world: World) -> RoundState:
    """Return the round state resource, creating it when missing."""
    return _singleton(world, RoundState)


def get_session_state(world: World) -> SessionState:
    """Return the session state resource, creating it when missing."""
    return _singleton(world, SessionState)


def get_board(world: World) -> Board | None:
    for _, board in world.get_component(Board):
        return board
    return None
