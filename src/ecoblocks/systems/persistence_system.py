"""Forwards session analytics to the external store without blocking play."""
from __future__ import annotations

import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, Callable, Dict

from ecoblocks.events.bus import (
    EVENT_CHALLENGE_COMPLETED,
    EVENT_SESSION_ENDED,
    EVENT_SESSION_STARTED,
    EVENT_SESSION_UPDATED,
    EventBus,
)
from ecoblocks.utils.score_ledger import ScoreLedger
from ecoblocks.utils.session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class _SessionHandle:
    local_id: str
    remote_id: str | None = None


class PersistenceSystem:
    """Mirrors session lifecycle events into a SessionStore and a ScoreLedger.

    Calls run inline, or on ``executor`` when one is given; a single-worker
    executor keeps them in order. Store failures are logged and never reach
    the game loop.
    """

    def __init__(
        self,
        event_bus: EventBus,
        store: SessionStore,
        *,
        ledger: ScoreLedger | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.event_bus = event_bus
        self.store = store
        self.ledger = ledger
        self._executor = executor
        self._handles: Dict[str, _SessionHandle] = {}

        self.event_bus.subscribe(EVENT_SESSION_STARTED, self._on_session_started)
        self.event_bus.subscribe(EVENT_SESSION_UPDATED, self._on_session_updated)
        self.event_bus.subscribe(EVENT_SESSION_ENDED, self._on_session_ended)
        self.event_bus.subscribe(EVENT_CHALLENGE_COMPLETED, self._on_challenge_completed)

    def remote_id(self, session_id: str) -> str | None:
        handle = self._handles.get(session_id)
        return handle.remote_id if handle else None

    # Event handlers -----------------------------------------------------

    def _on_session_started(self, sender, **payload) -> None:
        session_id = payload.get("session_id")
        if session_id is None:
            return
        handle = _SessionHandle(local_id=session_id)
        self._handles[session_id] = handle
        stats = dict(payload.get("stats") or {})
        self._submit("create_session", self._create, handle, stats)

    def _on_session_updated(self, sender, **payload) -> None:
        handle = self._handles.get(payload.get("session_id"))
        if handle is None:
            return
        stats = dict(payload.get("stats") or {})
        self._submit("update_session", self._update, handle, stats)

    def _on_session_ended(self, sender, **payload) -> None:
        handle = self._handles.pop(payload.get("session_id"), None)
        if handle is None:
            return
        stats = dict(payload.get("stats") or {})
        self._submit("end_session", self._end, handle, stats)

    def _on_challenge_completed(self, sender, **payload) -> None:
        points = int(payload.get("points", 0) or 0)
        if self.ledger is not None:
            self._submit("ledger_record", self.ledger.record, points)
        handle = self._handles.get(payload.get("session_id"))
        if handle is None:
            return
        self._submit(
            "record_answer",
            self._record_answer,
            handle,
            str(payload.get("challenge_id")),
            str(payload.get("answer", "")),
            points,
        )

    # Jobs ---------------------------------------------------------------

    def _create(self, handle: _SessionHandle, stats: Dict[str, Any]) -> None:
        handle.remote_id = self.store.create_session(stats)
        logger.debug("Session %s stored as %s", handle.local_id, handle.remote_id)

    def _update(self, handle: _SessionHandle, stats: Dict[str, Any]) -> None:
        if handle.remote_id is None:
            logger.warning("Skipping update for session %s: it was never stored", handle.local_id)
            return
        self.store.update_session(handle.remote_id, stats)

    def _end(self, handle: _SessionHandle, stats: Dict[str, Any]) -> None:
        if handle.remote_id is None:
            logger.warning("Skipping end for session %s: it was never stored", handle.local_id)
            return
        self.store.end_session(handle.remote_id, stats)

    def _record_answer(self, handle: _SessionHandle, challenge_id: str, answer: str, points: int) -> None:
        if handle.remote_id is None:
            logger.warning("Dropping answer for session %s: it was never stored", handle.local_id)
            return
        self.store.record_answer(handle.remote_id, challenge_id, answer, points)

    def _submit(self, label: str, job: Callable[..., None], *args: Any) -> None:
        if self._executor is None:
            self._run(label, job, args)
        else:
            self._executor.submit(self._run, label, job, args)

    @staticmethod
    def _run(label: str, job: Callable[..., None], args: tuple) -> None:
        try:
            job(*args)
        except Exception:
            logger.exception("Persistence call %s failed", label)
