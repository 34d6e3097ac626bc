from dataclasses import dataclass

@dataclass(slots=True, frozen=True)
class Cell:
    """A settled block on the board: the keyword it carries and its piece color."""
    keyword: str
    color: str
