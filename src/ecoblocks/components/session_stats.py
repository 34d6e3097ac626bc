from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from ecoblocks.constants import PERSONA_CARD_POINTS


@dataclass(slots=True)
class SessionStats:
    """Running analytics for one game; snapshots are handed to persistence."""

    session_id: str
    started_at: datetime
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    pieces_placed: int = 0
    sentences_attempted: int = 0
    sentences_completed: int = 0
    completed_sentences: List[str] = field(default_factory=list)
    ended_at: datetime | None = None

    def duration_seconds(self, now: datetime) -> int:
        end = self.ended_at or now
        return max(0, int((end - self.started_at).total_seconds()))

    @property
    def persona_cards_earned(self) -> int:
        return self.score // PERSONA_CARD_POINTS

    def snapshot(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level,
            "lines_cleared": self.lines_cleared,
            "pieces_placed": self.pieces_placed,
            "sentences_attempted": self.sentences_attempted,
            "sentences_completed": self.sentences_completed,
            "completed_sentences": list(self.completed_sentences),
        }

    def final_snapshot(self, now: datetime) -> Dict[str, Any]:
        payload = self.snapshot()
        payload.update(
            session_duration=self.duration_seconds(now),
            persona_cards_earned=self.persona_cards_earned,
            ended_at=(self.ended_at or now).isoformat(),
        )
        return payload
