"""Rolling record of challenge points earned across sessions."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List, Protocol

from ecoblocks.constants import LEDGER_WINDOW_HOURS

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LedgerEntry:
    timestamp: datetime
    points: int


class ScoreLedger(Protocol):
    def record(self, points: int) -> None:
        ...

    def total_since(self, hours_back: float = LEDGER_WINDOW_HOURS) -> int:
        ...


class InMemoryScoreLedger:
    """Keeps entries for one rolling window; older ones are dropped on record."""

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utc_now,
        retention_hours: float = LEDGER_WINDOW_HOURS,
    ) -> None:
        self._clock = clock
        self.retention_hours = retention_hours
        self.entries: List[LedgerEntry] = []

    def record(self, points: int) -> None:
        if points <= 0:
            return
        self.entries.append(LedgerEntry(timestamp=self._clock(), points=int(points)))
        self.prune()

    def total_since(self, hours_back: float = LEDGER_WINDOW_HOURS) -> int:
        cutoff = self._clock() - timedelta(hours=hours_back)
        return sum(entry.points for entry in self.entries if entry.timestamp >= cutoff)

    def prune(self) -> None:
        cutoff = self._clock() - timedelta(hours=self.retention_hours)
        self.entries = [entry for entry in self.entries if entry.timestamp >= cutoff]


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class JsonScoreLedger(InMemoryScoreLedger):
    """Ledger persisted to a JSON file after every record."""

    def __init__(
        self,
        path: Path | str,
        *,
        clock: Callable[[], datetime] = _utc_now,
        retention_hours: float = LEDGER_WINDOW_HOURS,
    ) -> None:
        super().__init__(clock=clock, retention_hours=retention_hours)
        self._path = Path(path)
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            self.entries = []
            return
        except json.JSONDecodeError:
            logger.warning("Score ledger %s is corrupt; starting empty", self._path)
            self.entries = []
            return
        try:
            self.entries = [
                LedgerEntry(
                    timestamp=_as_utc(datetime.fromisoformat(item["timestamp"])),
                    points=int(item["points"]),
                )
                for item in payload["entries"]
            ]
        except (KeyError, TypeError, ValueError):
            logger.warning("Score ledger %s has unexpected content; starting empty", self._path)
            self.entries = []
            return
        self.prune()

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump({
                "entries": [
                    {"timestamp": entry.timestamp.isoformat(), "points": entry.points}
                    for entry in self.entries
                ],
            }, handle, indent=2)

    def record(self, points: int) -> None:
        super().record(points)
        if points > 0:
            self.save()
