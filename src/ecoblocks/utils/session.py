"""Lookups for the single live session entity."""
from __future__ import annotations

from esper import World

from ecoblocks.components.active_pieces import ActivePieces
from ecoblocks.components.board import Board
from ecoblocks.components.session_stats import SessionStats
from ecoblocks.utils.game_state import get_game_state


def find_session_entity(world: World, session_id: str | None = None) -> int | None:
    """Return the entity holding the session's stats, optionally matching ``session_id``."""
    for entity, stats in world.get_component(SessionStats):
        if session_id is None or stats.session_id == session_id:
            return entity
    return None


def live_session_entity(world: World) -> int | None:
    """Entity of the session the GameState currently points at."""
    state = get_game_state(world)
    if state.session_id is None:
        return None
    return find_session_entity(world, state.session_id)


def get_board(world: World, entity: int) -> Board:
    return world.component_for_entity(entity, Board)


def get_pieces(world: World, entity: int) -> ActivePieces:
    return world.component_for_entity(entity, ActivePieces)


def get_stats(world: World, entity: int) -> SessionStats:
    return world.component_for_entity(entity, SessionStats)
