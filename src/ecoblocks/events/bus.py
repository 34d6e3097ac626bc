from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references keep systems alive even when the caller drops them.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)
EVENT_FALL_STEP = "fall_step"                      # payload: session_id=str


# ============================================================================
# INPUT
# ============================================================================
EVENT_INPUT_ACTION = "input_action"                # payload: action=InputAction
EVENT_KEY_PRESS = "key_press"                      # payload: symbol=int, modifiers=int
EVENT_TEXT_INPUT = "text_input"                    # payload: text=str


# ============================================================================
# SESSION LIFECYCLE
# ============================================================================
EVENT_SESSION_START_REQUEST = "session_start_request"  # payload: None
EVENT_SESSION_STOP_REQUEST = "session_stop_request"    # payload: None
EVENT_SESSION_STARTED = "session_started"              # payload: session_id=str, stats=dict
EVENT_SESSION_UPDATED = "session_updated"              # payload: session_id=str, stats=dict, reason=str
EVENT_SESSION_ENDED = "session_ended"                  # payload: session_id=str, stats=dict, reason=str
EVENT_GAME_MODE_CHANGED = "game_mode_changed"          # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_GAME_OVER = "game_over"                          # payload: session_id=str


# ============================================================================
# PIECES & BOARD
# ============================================================================
EVENT_PIECE_SPAWNED = "piece_spawned"      # payload: session_id=str, piece=Piece, next_piece=Piece
EVENT_PIECE_MOVED = "piece_moved"          # payload: session_id=str, piece=Piece, action=InputAction|None
EVENT_PIECE_LOCKED = "piece_locked"        # payload: session_id=str, lines_cleared=int, keywords=list[str], topped_out=bool


# ============================================================================
# SCORING & DIFFICULTY
# ============================================================================
EVENT_LINES_CLEARED = "lines_cleared"      # payload: count=int, keywords=list[str], points=int
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=int, delta=int, reason=str
EVENT_LEVEL_CHANGED = "level_changed"      # payload: previous_level=int, level=int, fall_interval_ms=int


# ============================================================================
# SENTENCE CHALLENGES
# ============================================================================
EVENT_CHALLENGE_REQUEST = "challenge_request"                  # payload: session_id=str, keywords=list[str], lines_cleared=int
EVENT_CHALLENGE_OFFERED = "challenge_offered"                  # payload: session_id=str, challenge=Challenge, time_left=int, keywords=list[str]
EVENT_CHALLENGE_ANSWER_CHANGED = "challenge_answer_changed"    # payload: text=str
EVENT_CHALLENGE_POINTS_UPDATED = "challenge_points_updated"    # payload: challenge_id=str, points=int
EVENT_CHALLENGE_COUNTDOWN = "challenge_countdown"              # payload: challenge_id=str, time_left=int
EVENT_CHALLENGE_PREVIEW_REQUEST = "challenge_preview_request"  # payload: None
EVENT_CHALLENGE_EDIT_REQUEST = "challenge_edit_request"        # payload: None
EVENT_CHALLENGE_SUBMIT_REQUEST = "challenge_submit_request"    # payload: None
EVENT_CHALLENGE_SKIP_REQUEST = "challenge_skip_request"        # payload: None
EVENT_CHALLENGE_COMPLETED = "challenge_completed"              # payload: session_id=str, challenge_id=str, answer=str, points=int
EVENT_CHALLENGE_CLOSED = "challenge_closed"                    # payload: session_id=str, challenge_id=str, outcome=ChallengeState, reason=str
