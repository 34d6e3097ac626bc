"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """High-level session modes that gate input and timers."""
    NOT_STARTED = auto()
    RUNNING = auto()
    CHALLENGE = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the mode and the live session id."""
    mode: GameMode = GameMode.NOT_STARTED
    session_id: Optional[str] = None
