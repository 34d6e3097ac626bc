from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple


@dataclass(slots=True, frozen=True)
class BlockOffset:
    """One block of a piece, relative to the piece anchor."""

    dx: int
    dy: int
    keyword: str


@dataclass(slots=True, frozen=True)
class Piece:
    """A falling piece: per-block keywords, a shared color and an anchor.

    Absolute coordinates are derived from the anchor on every call to
    ``cells`` and never cached. Transforms return new pieces.
    """

    blocks: Tuple[BlockOffset, ...]
    x: int
    y: int
    color: str
    shape: str = ""

    @property
    def anchor(self) -> tuple[int, int]:
        return self.x, self.y

    def cells(self) -> List[tuple[int, int, str]]:
        return [(self.x + block.dx, self.y + block.dy, block.keyword) for block in self.blocks]

    def positions(self) -> List[tuple[int, int]]:
        return [(self.x + block.dx, self.y + block.dy) for block in self.blocks]

    def offsets(self) -> List[tuple[int, int]]:
        return [(block.dx, block.dy) for block in self.blocks]

    @property
    def keywords(self) -> List[str]:
        return [block.keyword for block in self.blocks]

    def translated(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Piece":
        """Rotate 90 degrees clockwise about the anchor; keywords stay with their block."""
        turned = tuple(BlockOffset(-block.dy, block.dx, block.keyword) for block in self.blocks)
        return replace(self, blocks=turned)
