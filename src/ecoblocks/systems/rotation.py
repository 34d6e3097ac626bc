from __future__ import annotations

from typing import Sequence

from ecoblocks.components.board import Board
from ecoblocks.components.piece import Piece
from ecoblocks.constants import WALL_KICKS
from ecoblocks.systems.placement import is_valid_position


def rotate(piece: Piece) -> Piece:
    return piece.rotated()


def try_rotate(piece: Piece, board: Board, kicks: Sequence[int] = WALL_KICKS) -> Piece | None:
    """Rotate in place, falling back to horizontal kicks in table order.

    The kick table is a fixed list of x shifts, not a full SRS table, so a
    rotation hemmed in by walls or the stack can fail where other games
    would succeed. Returns ``None`` when nothing fits.
    """
    turned = rotate(piece)
    if is_valid_position(turned, board):
        return turned
    for shift in kicks:
        kicked = turned.translated(shift, 0)
        if is_valid_position(kicked, board):
            return kicked
    return None
