from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Protocol


class SessionStore(Protocol):
    """Backend that records session analytics; implementations may do I/O."""

    def create_session(self, initial_stats: Mapping[str, Any]) -> str:
        ...

    def update_session(self, session_id: str, partial_stats: Mapping[str, Any]) -> None:
        ...

    def end_session(self, session_id: str, final_stats: Mapping[str, Any]) -> None:
        ...

    def record_answer(self, session_id: str, challenge_id: str, answer: str, points: int) -> None:
        ...


@dataclass
class StoredSession:
    stats: Dict[str, Any]
    ended: bool = False


@dataclass
class InMemorySessionStore:
    """Dictionary-backed store for tests and local play."""

    sessions: Dict[str, StoredSession] = field(default_factory=dict)
    answers: List[Dict[str, Any]] = field(default_factory=list)
    _ids: Any = field(default_factory=lambda: itertools.count(1), repr=False)

    def create_session(self, initial_stats: Mapping[str, Any]) -> str:
        session_id = f"session-{next(self._ids)}"
        self.sessions[session_id] = StoredSession(stats=dict(initial_stats))
        return session_id

    def update_session(self, session_id: str, partial_stats: Mapping[str, Any]) -> None:
        self._get(session_id).stats.update(partial_stats)

    def end_session(self, session_id: str, final_stats: Mapping[str, Any]) -> None:
        stored = self._get(session_id)
        stored.stats.update(final_stats)
        stored.ended = True

    def record_answer(self, session_id: str, challenge_id: str, answer: str, points: int) -> None:
        self._get(session_id)
        self.answers.append(
            {
                "session_id": session_id,
                "sentence_id": challenge_id,
                "answer": answer,
                "score": points,
            }
        )

    def _get(self, session_id: str) -> StoredSession:
        try:
            return self.sessions[session_id]
        except KeyError:
            raise KeyError(f"Unknown session '{session_id}'") from None
