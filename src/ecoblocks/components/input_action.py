from enum import Enum, auto


class InputAction(Enum):
    """Player commands applied to the falling piece."""
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    MOVE_DOWN = auto()
    ROTATE = auto()
