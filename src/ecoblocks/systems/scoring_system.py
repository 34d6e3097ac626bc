from __future__ import annotations

import logging

from esper import World

from ecoblocks.components.session_stats import SessionStats
from ecoblocks.events.bus import (
    EVENT_CHALLENGE_COMPLETED,
    EVENT_CHALLENGE_OFFERED,
    EVENT_CHALLENGE_REQUEST,
    EVENT_LEVEL_CHANGED,
    EVENT_LINES_CLEARED,
    EVENT_PIECE_LOCKED,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_UPDATED,
    EventBus,
)
from ecoblocks.systems.scoring import fall_interval_ms, level_for_lines, points_for_lines
from ecoblocks.utils.session import find_session_entity

logger = logging.getLogger(__name__)


class ScoringSystem:
    """Keeps SessionStats in step with locks, line clears and challenge results."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_PIECE_LOCKED, self._on_piece_locked)
        self.event_bus.subscribe(EVENT_CHALLENGE_OFFERED, self._on_challenge_offered)
        self.event_bus.subscribe(EVENT_CHALLENGE_COMPLETED, self._on_challenge_completed)

    def _stats(self, session_id) -> SessionStats | None:
        if session_id is None:
            return None
        entity = find_session_entity(self.world, session_id)
        if entity is None:
            return None
        return self.world.component_for_entity(entity, SessionStats)

    def _on_piece_locked(self, sender, **payload) -> None:
        session_id = payload.get("session_id")
        stats = self._stats(session_id)
        if stats is None:
            return
        stats.pieces_placed += 1
        lines = int(payload.get("lines_cleared", 0) or 0)
        if lines <= 0:
            return
        keywords = list(payload.get("keywords", []))
        # Points use the level in force before this clear.
        points = points_for_lines(lines, stats.level)
        stats.score += points
        stats.lines_cleared += lines
        self.event_bus.emit(EVENT_LINES_CLEARED, count=lines, keywords=keywords, points=points)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=stats.score, delta=points, reason="lines")

        previous_level = stats.level
        stats.level = level_for_lines(stats.lines_cleared)
        if stats.level != previous_level:
            logger.info("Session %s reached level %d", session_id, stats.level)
            self.event_bus.emit(
                EVENT_LEVEL_CHANGED,
                previous_level=previous_level,
                level=stats.level,
                fall_interval_ms=fall_interval_ms(stats.level),
            )
        self.event_bus.emit(
            EVENT_SESSION_UPDATED,
            session_id=session_id,
            stats=stats.snapshot(),
            reason="lines_cleared",
        )
        # Every clear draws a challenge, even one that also tops the board out.
        self.event_bus.emit(
            EVENT_CHALLENGE_REQUEST,
            session_id=session_id,
            keywords=keywords,
            lines_cleared=lines,
        )

    def _on_challenge_offered(self, sender, **payload) -> None:
        stats = self._stats(payload.get("session_id"))
        if stats is None:
            return
        stats.sentences_attempted += 1

    def _on_challenge_completed(self, sender, **payload) -> None:
        session_id = payload.get("session_id")
        stats = self._stats(session_id)
        if stats is None:
            return
        points = max(0, int(payload.get("points", 0) or 0))
        stats.sentences_completed += 1
        challenge_id = payload.get("challenge_id")
        if challenge_id is not None:
            stats.completed_sentences.append(str(challenge_id))
        if points:
            stats.score += points
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=stats.score, delta=points, reason="challenge")
        self.event_bus.emit(
            EVENT_SESSION_UPDATED,
            session_id=session_id,
            stats=stats.snapshot(),
            reason="challenge_completed",
        )
