from dataclasses import dataclass


@dataclass(slots=True)
class FallTimer:
    """Auto-fall timer owned by exactly one session.

    Replaced (never duplicated) whenever the interval or the active piece
    changes, so a session can only ever have one of these.
    """
    session_id: str
    interval_ms: int
    elapsed_ms: float = 0.0


@dataclass(slots=True)
class ChallengeCountdown:
    """One-second countdown that runs while a challenge is offered."""
    challenge_id: str
    time_left: int
    elapsed: float = 0.0
