from __future__ import annotations

import random
from typing import Mapping, Sequence, Tuple

from ecoblocks.components.piece import BlockOffset, Piece
from ecoblocks.config import ConfigurationError
from ecoblocks.constants import SPAWN_X, SPAWN_Y

Offsets = Tuple[Tuple[int, int], ...]

SHAPES: Mapping[str, Offsets] = {
    "I": ((0, 0), (1, 0), (2, 0), (3, 0)),
    "O": ((0, 0), (1, 0), (0, 1), (1, 1)),
    "T": ((1, 0), (0, 1), (1, 1), (2, 1)),
    "S": ((1, 0), (2, 0), (0, 1), (1, 1)),
    "Z": ((0, 0), (1, 0), (1, 1), (2, 1)),
    "J": ((0, 0), (0, 1), (1, 1), (2, 1)),
    "L": ((2, 0), (0, 1), (1, 1), (2, 1)),
}


def build_piece(shape: str, keywords: Sequence[str], color: str, *, x: int = SPAWN_X, y: int = SPAWN_Y) -> Piece:
    """Assemble a piece of ``shape`` with one keyword per block, in offset order."""
    offsets = SHAPES[shape]
    if len(keywords) != len(offsets):
        raise ValueError(f"Shape {shape} needs {len(offsets)} keywords, got {len(keywords)}")
    blocks = tuple(BlockOffset(dx, dy, keyword) for (dx, dy), keyword in zip(offsets, keywords))
    return Piece(blocks=blocks, x=x, y=y, color=color, shape=shape)


class PieceGenerator:
    """Produces random pieces from the configured vocabulary and palette."""

    def __init__(
        self,
        vocabulary: Sequence[str],
        palette: Sequence[str],
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._vocabulary = tuple(vocabulary)
        self._palette = tuple(palette)
        self._shape_names = tuple(SHAPES)
        self.rng = rng or random.Random()

    def generate(self) -> Piece:
        if not self._vocabulary:
            raise ConfigurationError("Cannot generate pieces from an empty vocabulary")
        if not self._palette:
            raise ConfigurationError("Cannot generate pieces from an empty palette")
        shape = self.rng.choice(self._shape_names)
        keywords = [self.rng.choice(self._vocabulary) for _ in SHAPES[shape]]
        color = self.rng.choice(self._palette)
        return build_piece(shape, keywords, color)
