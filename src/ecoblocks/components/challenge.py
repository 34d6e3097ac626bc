from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

from ecoblocks.constants import BLANK_MARKER


@dataclass(slots=True, frozen=True)
class Challenge:
    """Fill-in-the-blank sentence offered after a line clear."""

    id: str
    template: str
    answer: str
    keywords: Tuple[str, ...] = ()

    def template_parts(self) -> tuple[str, str]:
        before, _, after = self.template.partition(BLANK_MARKER)
        return before, after


class ChallengeState(Enum):
    OFFERED = auto()
    SUBMITTED = auto()
    SKIPPED = auto()
    TIMED_OUT = auto()

    @property
    def terminal(self) -> bool:
        return self is not ChallengeState.OFFERED


@dataclass(slots=True)
class ActiveChallenge:
    """The challenge currently on screen and the player's progress on it."""

    challenge: Challenge
    session_id: str
    state: ChallengeState = ChallengeState.OFFERED
    answer: str = ""
    points: int = 0
    previewing: bool = False

    @property
    def can_submit(self) -> bool:
        return self.state is ChallengeState.OFFERED and bool(self.answer.strip())
