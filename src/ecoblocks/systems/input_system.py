"""Keyboard handling for play and for the challenge answer box."""
from esper import World

from ecoblocks.components.challenge import ActiveChallenge
from ecoblocks.components.game_state import GameMode
from ecoblocks.components.input_action import InputAction
from ecoblocks.constants import (
    KEY_A,
    KEY_BACKSPACE,
    KEY_D,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_SPACE,
    KEY_UP,
    KEY_W,
)
from ecoblocks.events.bus import (
    EVENT_CHALLENGE_ANSWER_CHANGED,
    EVENT_CHALLENGE_EDIT_REQUEST,
    EVENT_CHALLENGE_PREVIEW_REQUEST,
    EVENT_CHALLENGE_SKIP_REQUEST,
    EVENT_CHALLENGE_SUBMIT_REQUEST,
    EVENT_INPUT_ACTION,
    EVENT_KEY_PRESS,
    EVENT_SESSION_START_REQUEST,
    EVENT_TEXT_INPUT,
    EventBus,
)
from ecoblocks.utils.game_state import current_mode
from ecoblocks.utils.session import live_session_entity

KEY_TO_ACTION = {
    KEY_LEFT: InputAction.MOVE_LEFT,
    KEY_A: InputAction.MOVE_LEFT,
    KEY_RIGHT: InputAction.MOVE_RIGHT,
    KEY_D: InputAction.MOVE_RIGHT,
    KEY_DOWN: InputAction.MOVE_DOWN,
    KEY_S: InputAction.MOVE_DOWN,
    KEY_UP: InputAction.ROTATE,
    KEY_W: InputAction.ROTATE,
    KEY_SPACE: InputAction.ROTATE,
}

# Some backends report the keypad or legacy carriage return for Enter.
_ENTER_KEYS = (KEY_ENTER, 13)


class InputSystem:
    """Translates raw key symbols and typed text into engine events.

    In RUNNING mode keys become InputActions. In CHALLENGE mode text edits the
    answer, Enter previews and then submits, and Escape backs out of a preview
    or skips the challenge. Enter outside a session starts a new one.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self._swallow_next_text = False
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_TEXT_INPUT, self.on_text)

    def on_key_press(self, sender, **payload) -> None:
        symbol = payload.get("symbol")
        if symbol is None:
            return
        self.handle_key_press(int(symbol), int(payload.get("modifiers", 0) or 0))

    def on_text(self, sender, **payload) -> None:
        text = payload.get("text")
        if isinstance(text, str):
            self.handle_text(text)

    def handle_key_press(self, symbol: int, modifiers: int = 0) -> None:
        self._swallow_next_text = False
        mode = current_mode(self.world)
        if mode == GameMode.RUNNING:
            action = KEY_TO_ACTION.get(symbol)
            if action is not None:
                self.event_bus.emit(EVENT_INPUT_ACTION, action=action)
                # The key that locked a piece into a challenge also arrives as text.
                self._swallow_next_text = current_mode(self.world) == GameMode.CHALLENGE
        elif mode == GameMode.CHALLENGE:
            self._handle_challenge_key(symbol)
        elif mode in (GameMode.NOT_STARTED, GameMode.GAME_OVER):
            if symbol in _ENTER_KEYS:
                self.event_bus.emit(EVENT_SESSION_START_REQUEST)

    def handle_text(self, text: str) -> None:
        if self._swallow_next_text:
            self._swallow_next_text = False
            return
        if current_mode(self.world) != GameMode.CHALLENGE:
            return
        # Control characters arrive through key presses instead.
        printable = "".join(ch for ch in text if ch.isprintable())
        active = self._active_challenge()
        if not printable or active is None or active.previewing:
            return
        self.event_bus.emit(EVENT_CHALLENGE_ANSWER_CHANGED, text=active.answer + printable)

    def _handle_challenge_key(self, symbol: int) -> None:
        active = self._active_challenge()
        if active is None:
            return
        if symbol == KEY_BACKSPACE:
            if active.answer and not active.previewing:
                self.event_bus.emit(EVENT_CHALLENGE_ANSWER_CHANGED, text=active.answer[:-1])
        elif symbol in _ENTER_KEYS:
            if active.previewing:
                self.event_bus.emit(EVENT_CHALLENGE_SUBMIT_REQUEST)
            else:
                self.event_bus.emit(EVENT_CHALLENGE_PREVIEW_REQUEST)
        elif symbol == KEY_ESCAPE:
            if active.previewing:
                self.event_bus.emit(EVENT_CHALLENGE_EDIT_REQUEST)
            else:
                self.event_bus.emit(EVENT_CHALLENGE_SKIP_REQUEST)

    def _active_challenge(self) -> ActiveChallenge | None:
        entity = live_session_entity(self.world)
        if entity is None or not self.world.has_component(entity, ActiveChallenge):
            return None
        return self.world.component_for_entity(entity, ActiveChallenge)
