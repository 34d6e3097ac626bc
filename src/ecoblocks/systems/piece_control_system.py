from __future__ import annotations

from esper import World

from ecoblocks.components.game_state import GameMode
from ecoblocks.components.input_action import InputAction
from ecoblocks.events.bus import (
    EVENT_FALL_STEP,
    EVENT_GAME_OVER,
    EVENT_INPUT_ACTION,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_MOVED,
    EVENT_PIECE_SPAWNED,
    EventBus,
)
from ecoblocks.factories.pieces import PieceGenerator
from ecoblocks.systems.placement import commit_and_advance, is_valid_position, try_move
from ecoblocks.systems.rotation import try_rotate
from ecoblocks.utils.game_state import get_game_state
from ecoblocks.utils.session import get_board, get_pieces, live_session_entity

_MOVES = {
    InputAction.MOVE_LEFT: (-1, 0),
    InputAction.MOVE_RIGHT: (1, 0),
    InputAction.MOVE_DOWN: (0, 1),
}


class PieceControlSystem:
    """Applies player input and gravity steps to the falling piece.

    A downward move that does not fit locks the piece, sweeps the board and
    either promotes the preview piece or ends the game.
    """

    def __init__(self, world: World, event_bus: EventBus, generator: PieceGenerator) -> None:
        self.world = world
        self.event_bus = event_bus
        self.generator = generator
        self.event_bus.subscribe(EVENT_INPUT_ACTION, self._on_input_action)
        self.event_bus.subscribe(EVENT_FALL_STEP, self._on_fall_step)

    def _on_input_action(self, sender, **payload) -> None:
        action = payload.get("action")
        if not isinstance(action, InputAction):
            return
        entity = self._running_entity()
        if entity is None:
            return
        self.apply(entity, action)

    def _on_fall_step(self, sender, **payload) -> None:
        session_id = payload.get("session_id")
        if session_id is None or session_id != get_game_state(self.world).session_id:
            return
        entity = self._running_entity()
        if entity is None:
            return
        self.apply(entity, None)

    def apply(self, entity: int, action: InputAction | None) -> None:
        """Run one input ``action``; ``None`` is a gravity step."""
        pieces = get_pieces(self.world, entity)
        board = get_board(self.world, entity)
        if action is InputAction.ROTATE:
            moved = try_rotate(pieces.current, board)
        else:
            dx, dy = _MOVES.get(action, (0, 1))
            moved = try_move(pieces.current, dx, dy, board)
        if moved is not None:
            pieces.current = moved
            self.event_bus.emit(
                EVENT_PIECE_MOVED,
                session_id=get_game_state(self.world).session_id,
                piece=moved,
                action=action,
            )
            return
        if action is None or action is InputAction.MOVE_DOWN:
            self._lock(entity)

    def _lock(self, entity: int) -> None:
        session_id = get_game_state(self.world).session_id
        pieces = get_pieces(self.world, entity)
        result = commit_and_advance(pieces.current, get_board(self.world, entity))
        self.world.add_component(entity, result.board)
        topped_out = not is_valid_position(pieces.next, result.board)
        self.event_bus.emit(
            EVENT_PIECE_LOCKED,
            session_id=session_id,
            lines_cleared=result.lines_cleared,
            keywords=list(result.keywords),
            topped_out=topped_out,
        )
        if get_game_state(self.world).session_id != session_id:
            # A handler restarted or stopped the session mid-commit.
            return
        if topped_out:
            self.event_bus.emit(EVENT_GAME_OVER, session_id=session_id)
            return
        pieces.current = pieces.next
        pieces.next = self.generator.generate()
        self.event_bus.emit(
            EVENT_PIECE_SPAWNED,
            session_id=session_id,
            piece=pieces.current,
            next_piece=pieces.next,
        )

    def _running_entity(self) -> int | None:
        if get_game_state(self.world).mode != GameMode.RUNNING:
            return None
        return live_session_entity(self.world)
