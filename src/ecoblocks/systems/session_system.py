"""Session lifecycle: start, stop, restart and game over."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from esper import World

from ecoblocks.components.active_pieces import ActivePieces
from ecoblocks.components.board import Board
from ecoblocks.components.game_state import GameMode
from ecoblocks.components.session_stats import SessionStats
from ecoblocks.components.timers import FallTimer
from ecoblocks.config import GameConfig
from ecoblocks.events.bus import (
    EVENT_GAME_OVER,
    EVENT_PIECE_SPAWNED,
    EVENT_SESSION_ENDED,
    EVENT_SESSION_START_REQUEST,
    EVENT_SESSION_STARTED,
    EVENT_SESSION_STOP_REQUEST,
    EventBus,
)
from ecoblocks.factories.pieces import PieceGenerator
from ecoblocks.systems.scoring import fall_interval_ms
from ecoblocks.utils.game_state import get_game_state, set_game_mode
from ecoblocks.utils.session import find_session_entity

logger = logging.getLogger(__name__)

_LIVE_MODES = (GameMode.RUNNING, GameMode.CHALLENGE)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_session_id() -> str:
    return uuid.uuid4().hex


class SessionSystem:
    """Owns the session entity and every transition into and out of play.

    A session entity carries the Board, ActivePieces, SessionStats and the
    session's single FallTimer. Starting a new session deletes the previous
    entity, so nothing from an old game can keep running.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        config: GameConfig,
        generator: PieceGenerator,
        *,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_session_id,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.generator = generator
        self._clock = clock
        self._id_factory = id_factory

        self.event_bus.subscribe(EVENT_SESSION_START_REQUEST, self._on_start_request)
        self.event_bus.subscribe(EVENT_SESSION_STOP_REQUEST, self._on_stop_request)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> str:
        """Validate the configuration and begin a fresh session, ending any previous one."""
        self.config.validate()
        self._end_live_session(reason="restarted")
        self._teardown()

        session_id = self._id_factory()
        stats = SessionStats(session_id=session_id, started_at=self._clock())
        pieces = ActivePieces(current=self.generator.generate(), next=self.generator.generate())
        self.world.create_entity(
            Board.empty(self.config.board_width, self.config.board_height),
            pieces,
            stats,
            FallTimer(session_id=session_id, interval_ms=fall_interval_ms(stats.level)),
        )
        get_game_state(self.world).session_id = session_id
        set_game_mode(self.world, self.event_bus, GameMode.RUNNING)
        logger.info("Session %s started", session_id)

        self.event_bus.emit(EVENT_SESSION_STARTED, session_id=session_id, stats=stats.snapshot())
        self.event_bus.emit(
            EVENT_PIECE_SPAWNED,
            session_id=session_id,
            piece=pieces.current,
            next_piece=pieces.next,
        )
        return session_id

    def stop(self) -> None:
        """End the live session, if any, and release everything it owns. Safe to call twice."""
        self._end_live_session(reason="stopped")
        self._teardown()
        set_game_mode(self.world, self.event_bus, GameMode.NOT_STARTED)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_start_request(self, sender, **payload) -> None:
        self.start()

    def _on_stop_request(self, sender, **payload) -> None:
        self.stop()

    def _on_game_over(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        session_id = payload.get("session_id")
        if session_id is None or session_id != state.session_id:
            return
        if state.mode not in _LIVE_MODES:
            return
        entity = find_session_entity(self.world, session_id)
        if entity is None:
            return
        if self.world.has_component(entity, FallTimer):
            self.world.remove_component(entity, FallTimer)
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        logger.info("Session %s topped out", session_id)
        self._emit_ended(entity, reason="game_over")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _end_live_session(self, *, reason: str) -> None:
        state = get_game_state(self.world)
        if state.session_id is None or state.mode not in _LIVE_MODES:
            return
        entity = find_session_entity(self.world, state.session_id)
        if entity is None:
            return
        logger.info("Session %s ended early (%s)", state.session_id, reason)
        self._emit_ended(entity, reason=reason)

    def _emit_ended(self, entity: int, *, reason: str) -> None:
        stats = self.world.component_for_entity(entity, SessionStats)
        now = self._clock()
        stats.ended_at = now
        self.event_bus.emit(
            EVENT_SESSION_ENDED,
            session_id=stats.session_id,
            stats=stats.final_snapshot(now),
            reason=reason,
        )

    def _teardown(self) -> None:
        for entity, _ in list(self.world.get_component(SessionStats)):
            self.world.delete_entity(entity, immediate=True)
        get_game_state(self.world).session_id = None
