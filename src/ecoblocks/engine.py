"""Headless wiring of the world, the event bus and every gameplay system."""
from __future__ import annotations

import random
from concurrent.futures import Executor
from datetime import datetime
from typing import Callable

from ecoblocks.components.input_action import InputAction
from ecoblocks.config import GameConfig, default_game_config
from ecoblocks.events.bus import (
    EVENT_INPUT_ACTION,
    EVENT_KEY_PRESS,
    EVENT_TEXT_INPUT,
    EVENT_TICK,
    EventBus,
)
from ecoblocks.factories.pieces import PieceGenerator
from ecoblocks.systems.challenge_system import ChallengeSystem
from ecoblocks.systems.gravity_system import GravitySystem
from ecoblocks.systems.input_system import InputSystem
from ecoblocks.systems.persistence_system import PersistenceSystem
from ecoblocks.systems.piece_control_system import PieceControlSystem
from ecoblocks.systems.scoring_system import ScoringSystem
from ecoblocks.systems.session_system import SessionSystem
from ecoblocks.utils.score_ledger import ScoreLedger
from ecoblocks.utils.session_store import InMemorySessionStore, SessionStore
from ecoblocks.utils.snapshot import GameSnapshot, build_snapshot
from ecoblocks.world import create_world


class GameEngine:
    """One world, one bus and the systems that play a session on them.

    The host drives time with ``tick`` and feeds input through ``dispatch``,
    ``key_press`` and ``text``; everything runs synchronously on the caller's
    thread.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        generator: PieceGenerator | None = None,
        store: SessionStore | None = None,
        ledger: ScoreLedger | None = None,
        executor: Executor | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.config = config or default_game_config()
        self.rng = rng or random.Random()
        self.event_bus = EventBus()
        self.world = create_world(rng=self.rng)
        self.generator = generator or PieceGenerator(
            self.config.vocabulary, self.config.palette, rng=self.rng
        )
        self.store = store if store is not None else InMemorySessionStore()
        self.ledger = ledger

        session_options = {}
        if clock is not None:
            session_options["clock"] = clock
        if id_factory is not None:
            session_options["id_factory"] = id_factory
        self.session_system = SessionSystem(
            self.world, self.event_bus, self.config, self.generator, **session_options
        )
        self.scoring_system = ScoringSystem(self.world, self.event_bus)
        self.challenge_system = ChallengeSystem(self.world, self.event_bus, self.config, rng=self.rng)
        self.piece_control_system = PieceControlSystem(self.world, self.event_bus, self.generator)
        self.gravity_system = GravitySystem(self.world, self.event_bus)
        self.input_system = InputSystem(self.world, self.event_bus)
        self.persistence_system = PersistenceSystem(
            self.event_bus, self.store, ledger=ledger, executor=executor
        )

    def start(self) -> str:
        return self.session_system.start()

    def stop(self) -> None:
        self.session_system.stop()

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def dispatch(self, action: InputAction) -> None:
        self.event_bus.emit(EVENT_INPUT_ACTION, action=action)

    def key_press(self, symbol: int, modifiers: int = 0) -> None:
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def text(self, text: str) -> None:
        self.event_bus.emit(EVENT_TEXT_INPUT, text=text)

    def snapshot(self) -> GameSnapshot:
        return build_snapshot(self.world)
