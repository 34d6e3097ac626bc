from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence

from ecoblocks.components.board import Board
from ecoblocks.components.cell import Cell
from ecoblocks.components.piece import Piece
from ecoblocks.config import GameConfig, default_game_config
from ecoblocks.engine import GameEngine
from ecoblocks.events.bus import EventBus
from ecoblocks.factories.pieces import build_piece
from ecoblocks.utils.session import live_session_entity


class FakePieceGenerator:
    """Yields the listed shapes in order, then O pieces forever."""

    def __init__(self, shapes: Sequence[str] = (), *, color: str = "#3B82F6") -> None:
        self._shapes = list(shapes)
        self.color = color
        self.generated: list[Piece] = []
        self._counter = itertools.count()

    def generate(self) -> Piece:
        shape = self._shapes.pop(0) if self._shapes else "O"
        index = next(self._counter)
        piece = build_piece(shape, [f"{shape.lower()}{index}-{n}" for n in range(4)], self.color)
        self.generated.append(piece)
        return piece


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now = self.now + timedelta(**delta)


class EventRecorder:
    def __init__(self, bus: EventBus, *names: str) -> None:
        self.events: list[tuple[str, dict]] = []
        for name in names:
            bus.subscribe(name, self._handler_for(name))

    def _handler_for(self, name: str):
        def handler(sender, **payload):
            self.events.append((name, payload))
        return handler

    def of(self, name: str) -> list[dict]:
        return [payload for event, payload in self.events if event == name]

    def count(self, name: str) -> int:
        return len(self.of(name))


def make_engine(
    shapes: Sequence[str] = (),
    *,
    config: GameConfig | None = None,
    **kwargs,
) -> GameEngine:
    ids = itertools.count(1)
    kwargs.setdefault("id_factory", lambda: f"local-{next(ids)}")
    kwargs.setdefault("clock", FakeClock())
    return GameEngine(
        config or default_game_config(),
        generator=FakePieceGenerator(shapes),
        **kwargs,
    )


def board_with_cells(coords: Iterable[tuple[int, int]], *, width: int = 10, height: int = 17, keyword: str = "x") -> Board:
    rows = [[None] * width for _ in range(height)]
    for x, y in coords:
        rows[y][x] = Cell(keyword=keyword, color="#64748B")
    return Board(width, height, tuple(tuple(row) for row in rows))


def replace_board(engine: GameEngine, board: Board) -> None:
    entity = live_session_entity(engine.world)
    assert entity is not None, "a live session is required"
    engine.world.add_component(entity, board)
