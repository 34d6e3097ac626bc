import pytest

from ecoblocks.components.active_pieces import ActivePieces
from ecoblocks.components.game_state import GameMode
from ecoblocks.config import default_game_config
from ecoblocks.constants import (
    KEY_A,
    KEY_BACKSPACE,
    KEY_D,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_S,
    KEY_UP,
)
from ecoblocks.events.bus import (
    EVENT_CHALLENGE_CLOSED,
    EVENT_CHALLENGE_REQUEST,
    EVENT_INPUT_ACTION,
)
from ecoblocks.factories.content import DEFAULT_CHALLENGES
from ecoblocks.utils.session import live_session_entity

from tests.helpers import EventRecorder, board_with_cells, make_engine, replace_board


def _engine(shapes=("T",)):
    config = default_game_config()
    config.challenges = DEFAULT_CHALLENGES[:1]
    return make_engine(shapes, config=config)


@pytest.fixture
def challenge_engine():
    engine = _engine()
    engine.start()
    engine.event_bus.emit(
        EVENT_CHALLENGE_REQUEST,
        session_id=engine.snapshot().session_id,
        keywords=[],
        lines_cleared=1,
    )
    assert engine.snapshot().mode == GameMode.CHALLENGE
    return engine


def test_arrow_and_wasd_keys_move_the_piece():
    engine = _engine()
    engine.start()

    engine.key_press(KEY_LEFT)
    assert engine.snapshot().current_piece.anchor == (2, 0)
    engine.key_press(KEY_D)
    engine.key_press(KEY_D)
    assert engine.snapshot().current_piece.anchor == (4, 0)
    engine.key_press(KEY_DOWN)
    engine.key_press(KEY_S)
    assert engine.snapshot().current_piece.anchor == (4, 2)
    engine.key_press(KEY_A)
    assert engine.snapshot().current_piece.anchor == (3, 2)


def test_up_rotates_the_piece():
    engine = _engine()
    engine.start()
    before = engine.snapshot().current_piece.offsets()

    engine.key_press(KEY_UP)

    assert engine.snapshot().current_piece.offsets() != before


def test_unmapped_keys_do_nothing():
    engine = _engine()
    recorder = EventRecorder(engine.event_bus, EVENT_INPUT_ACTION)
    engine.start()
    engine.key_press(ord("q"))
    assert recorder.count(EVENT_INPUT_ACTION) == 0


@pytest.mark.parametrize("symbol", [KEY_ENTER, 13])
def test_enter_starts_a_session(symbol):
    engine = _engine()
    engine.key_press(symbol)
    assert engine.snapshot().mode == GameMode.RUNNING


def test_typing_builds_the_answer(challenge_engine):
    challenge_engine.text("prot")
    challenge_engine.text("ecx")
    challenge_engine.key_press(KEY_BACKSPACE)
    challenge_engine.text("t")

    challenge = challenge_engine.snapshot().challenge
    assert challenge.answer == "protect"
    assert challenge.points == 6


def test_control_characters_are_not_typed(challenge_engine):
    challenge_engine.text("\r")
    challenge_engine.text("\x08")
    assert challenge_engine.snapshot().challenge.answer == ""


def test_enter_previews_then_submits(challenge_engine):
    challenge_engine.text("protect")

    challenge_engine.key_press(KEY_ENTER)
    assert challenge_engine.snapshot().challenge.previewing
    challenge_engine.text("extra")
    challenge_engine.key_press(KEY_BACKSPACE)
    assert challenge_engine.snapshot().challenge.answer == "protect"

    challenge_engine.key_press(KEY_ENTER)

    snapshot = challenge_engine.snapshot()
    assert snapshot.mode == GameMode.RUNNING
    assert snapshot.score == 6


def test_escape_leaves_preview_then_skips(challenge_engine):
    recorder = EventRecorder(challenge_engine.event_bus, EVENT_CHALLENGE_CLOSED)
    challenge_engine.text("protect")
    challenge_engine.key_press(KEY_ENTER)

    challenge_engine.key_press(KEY_ESCAPE)
    assert not challenge_engine.snapshot().challenge.previewing
    assert recorder.count(EVENT_CHALLENGE_CLOSED) == 0

    challenge_engine.key_press(KEY_ESCAPE)
    assert recorder.count(EVENT_CHALLENGE_CLOSED) == 1
    assert challenge_engine.snapshot().score == 0


def test_enter_on_an_empty_answer_does_not_preview(challenge_engine):
    challenge_engine.key_press(KEY_ENTER)
    assert not challenge_engine.snapshot().challenge.previewing


def test_text_from_the_locking_key_is_not_typed():
    engine = _engine(("I",))
    engine.start()
    replace_board(engine, board_with_cells([(x, 16) for x in range(10) if x not in (3, 4, 5, 6)]))
    active = engine.world.component_for_entity(live_session_entity(engine.world), ActivePieces)
    active.current = active.current.translated(0, 16)

    engine.key_press(KEY_S)
    assert engine.snapshot().mode == GameMode.CHALLENGE
    engine.text("s")
    engine.text("p")

    assert engine.snapshot().challenge.answer == "p"


def test_text_outside_a_challenge_is_ignored():
    engine = _engine()
    engine.start()
    engine.text("hello")
    assert engine.snapshot().challenge is None
