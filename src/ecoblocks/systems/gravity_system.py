from __future__ import annotations

from esper import World

from ecoblocks.components.game_state import GameMode
from ecoblocks.components.session_stats import SessionStats
from ecoblocks.components.timers import FallTimer
from ecoblocks.events.bus import (
    EVENT_FALL_STEP,
    EVENT_LEVEL_CHANGED,
    EVENT_PIECE_SPAWNED,
    EVENT_TICK,
    EventBus,
)
from ecoblocks.systems.scoring import fall_interval_ms
from ecoblocks.utils.game_state import get_game_state
from ecoblocks.utils.session import find_session_entity


class GravitySystem:
    """Turns frame ticks into fall steps for the live session.

    The timer only advances while the game is RUNNING, so an open challenge
    freezes it where it stood. A fresh timer replaces the old one whenever a
    piece spawns or the level changes the fall interval.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_PIECE_SPAWNED, self._on_restart)
        self.event_bus.subscribe(EVENT_LEVEL_CHANGED, self._on_restart)

    def on_tick(self, sender, **payload) -> None:
        dt = payload.get("dt", 0.0) or 0.0
        if dt <= 0:
            return
        state = get_game_state(self.world)
        if state.mode != GameMode.RUNNING or state.session_id is None:
            return
        entity = find_session_entity(self.world, state.session_id)
        if entity is None or not self.world.has_component(entity, FallTimer):
            return
        timer = self.world.component_for_entity(entity, FallTimer)
        timer.elapsed_ms += dt * 1000.0
        while timer.elapsed_ms >= timer.interval_ms:
            timer.elapsed_ms -= timer.interval_ms
            self.event_bus.emit(EVENT_FALL_STEP, session_id=timer.session_id)
            if not self._still_current(entity, timer):
                break

    def _still_current(self, entity: int, timer: FallTimer) -> bool:
        state = get_game_state(self.world)
        if state.mode != GameMode.RUNNING or state.session_id != timer.session_id:
            return False
        if not self.world.entity_exists(entity) or not self.world.has_component(entity, FallTimer):
            return False
        return self.world.component_for_entity(entity, FallTimer) is timer

    def _on_restart(self, sender, **payload) -> None:
        session_id = payload.get("session_id") or get_game_state(self.world).session_id
        entity = find_session_entity(self.world, session_id)
        if entity is None:
            return
        stats = self.world.component_for_entity(entity, SessionStats)
        self.world.add_component(
            entity,
            FallTimer(session_id=stats.session_id, interval_ms=fall_interval_ms(stats.level)),
        )
