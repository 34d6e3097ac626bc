"""Sentence challenge offering, countdown and resolution."""
from __future__ import annotations

import logging
import random

from esper import World

from ecoblocks.components.challenge import ActiveChallenge, ChallengeState
from ecoblocks.components.game_state import GameMode
from ecoblocks.components.timers import ChallengeCountdown
from ecoblocks.config import GameConfig
from ecoblocks.constants import CHALLENGE_TICK_SECONDS
from ecoblocks.events.bus import (
    EVENT_CHALLENGE_ANSWER_CHANGED,
    EVENT_CHALLENGE_CLOSED,
    EVENT_CHALLENGE_COMPLETED,
    EVENT_CHALLENGE_COUNTDOWN,
    EVENT_CHALLENGE_EDIT_REQUEST,
    EVENT_CHALLENGE_OFFERED,
    EVENT_CHALLENGE_POINTS_UPDATED,
    EVENT_CHALLENGE_PREVIEW_REQUEST,
    EVENT_CHALLENGE_REQUEST,
    EVENT_CHALLENGE_SKIP_REQUEST,
    EVENT_CHALLENGE_SUBMIT_REQUEST,
    EVENT_SESSION_ENDED,
    EVENT_TICK,
    EventBus,
)
from ecoblocks.systems.challenge_scoring import score_answer
from ecoblocks.utils.game_state import get_game_state, set_game_mode
from ecoblocks.utils.session import find_session_entity, live_session_entity

logger = logging.getLogger(__name__)


class ChallengeSystem:
    """Runs at most one challenge at a time on the live session entity.

    While a challenge is OFFERED the game is in CHALLENGE mode: gravity is
    frozen and piece input is ignored, but the countdown keeps ticking. Every
    outcome removes the ActiveChallenge and its countdown together.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        config: GameConfig,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self._rng = rng or getattr(world, "random", None) or random.Random()

        self.event_bus.subscribe(EVENT_CHALLENGE_REQUEST, self._on_challenge_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_CHALLENGE_ANSWER_CHANGED, self._on_answer_changed)
        self.event_bus.subscribe(EVENT_CHALLENGE_PREVIEW_REQUEST, self._on_preview_request)
        self.event_bus.subscribe(EVENT_CHALLENGE_EDIT_REQUEST, self._on_edit_request)
        self.event_bus.subscribe(EVENT_CHALLENGE_SUBMIT_REQUEST, self._on_submit_request)
        self.event_bus.subscribe(EVENT_CHALLENGE_SKIP_REQUEST, self._on_skip_request)
        self.event_bus.subscribe(EVENT_SESSION_ENDED, self._on_session_ended)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def active(self) -> ActiveChallenge | None:
        entity = live_session_entity(self.world)
        if entity is None or not self.world.has_component(entity, ActiveChallenge):
            return None
        return self.world.component_for_entity(entity, ActiveChallenge)

    def set_answer(self, text: str) -> int | None:
        """Replace the typed answer and return its live points."""
        active = self.active()
        if active is None or active.state is not ChallengeState.OFFERED or active.previewing:
            return None
        active.answer = text
        active.points = score_answer(text, self.config.available_keywords, active.challenge.answer)
        self.event_bus.emit(
            EVENT_CHALLENGE_POINTS_UPDATED,
            challenge_id=active.challenge.id,
            points=active.points,
        )
        return active.points

    def preview(self) -> bool:
        active = self.active()
        if active is None or not active.can_submit:
            return False
        active.previewing = True
        return True

    def edit(self) -> bool:
        active = self.active()
        if active is None or active.state is not ChallengeState.OFFERED:
            return False
        active.previewing = False
        return True

    def submit(self) -> int | None:
        """Submit the current answer; returns the awarded points or ``None`` when refused."""
        active = self.active()
        if active is None or not active.can_submit:
            return None
        if self.config.require_preview and not active.previewing:
            return None
        active.state = ChallengeState.SUBMITTED
        self.event_bus.emit(
            EVENT_CHALLENGE_COMPLETED,
            session_id=active.session_id,
            challenge_id=active.challenge.id,
            answer=active.answer,
            points=active.points,
        )
        self._close(active, reason="submitted")
        return active.points

    def skip(self) -> bool:
        active = self.active()
        if active is None or active.state is not ChallengeState.OFFERED:
            return False
        active.state = ChallengeState.SKIPPED
        self._close(active, reason="skipped")
        return True

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_challenge_request(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        session_id = payload.get("session_id")
        if session_id != state.session_id or state.mode != GameMode.RUNNING:
            return
        entity = find_session_entity(self.world, session_id)
        if entity is None or self.world.has_component(entity, ActiveChallenge):
            return
        # Uniform pick; cleared keywords ride along for listeners only.
        challenge = self._rng.choice(self.config.challenges)
        time_left = self.config.challenge_time_limit
        self.world.add_component(entity, ActiveChallenge(challenge=challenge, session_id=session_id))
        self.world.add_component(entity, ChallengeCountdown(challenge_id=challenge.id, time_left=time_left))
        set_game_mode(self.world, self.event_bus, GameMode.CHALLENGE)
        logger.debug("Offering challenge %s to session %s", challenge.id, session_id)
        self.event_bus.emit(
            EVENT_CHALLENGE_OFFERED,
            session_id=session_id,
            challenge=challenge,
            time_left=time_left,
            keywords=list(payload.get("keywords", [])),
        )

    def on_tick(self, sender, **payload) -> None:
        dt = payload.get("dt", 0.0) or 0.0
        if dt <= 0 or get_game_state(self.world).mode != GameMode.CHALLENGE:
            return
        entity = live_session_entity(self.world)
        if entity is None or not self.world.has_component(entity, ChallengeCountdown):
            return
        countdown = self.world.component_for_entity(entity, ChallengeCountdown)
        countdown.elapsed += dt
        while countdown.elapsed >= CHALLENGE_TICK_SECONDS and countdown.time_left > 0:
            countdown.elapsed -= CHALLENGE_TICK_SECONDS
            countdown.time_left -= 1
            self.event_bus.emit(
                EVENT_CHALLENGE_COUNTDOWN,
                challenge_id=countdown.challenge_id,
                time_left=countdown.time_left,
            )
        if countdown.time_left <= 0:
            active = self.world.component_for_entity(entity, ActiveChallenge)
            active.state = ChallengeState.TIMED_OUT
            self._close(active, reason="timed_out")

    def _on_answer_changed(self, sender, **payload) -> None:
        text = payload.get("text")
        if isinstance(text, str):
            self.set_answer(text)

    def _on_preview_request(self, sender, **payload) -> None:
        self.preview()

    def _on_edit_request(self, sender, **payload) -> None:
        self.edit()

    def _on_submit_request(self, sender, **payload) -> None:
        self.submit()

    def _on_skip_request(self, sender, **payload) -> None:
        self.skip()

    def _on_session_ended(self, sender, **payload) -> None:
        entity = find_session_entity(self.world, payload.get("session_id"))
        if entity is None or not self.world.has_component(entity, ActiveChallenge):
            return
        active = self.world.component_for_entity(entity, ActiveChallenge)
        active.state = ChallengeState.SKIPPED
        self._close(active, reason=payload.get("reason", "session_ended"), resume=False)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _close(self, active: ActiveChallenge, *, reason: str, resume: bool = True) -> None:
        entity = find_session_entity(self.world, active.session_id)
        if entity is not None:
            for component_type in (ActiveChallenge, ChallengeCountdown):
                if self.world.has_component(entity, component_type):
                    self.world.remove_component(entity, component_type)
        self.event_bus.emit(
            EVENT_CHALLENGE_CLOSED,
            session_id=active.session_id,
            challenge_id=active.challenge.id,
            outcome=active.state,
            reason=reason,
        )
        if resume and get_game_state(self.world).mode == GameMode.CHALLENGE:
            set_game_mode(self.world, self.event_bus, GameMode.RUNNING)
