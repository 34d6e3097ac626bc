from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ecoblocks.components.board import Board
from ecoblocks.components.piece import Piece


@dataclass(slots=True)
class CommitResult:
    board: Board
    lines_cleared: int
    keywords: List[str] = field(default_factory=list)


def is_valid_position(piece: Piece, board: Board) -> bool:
    """True when every block is inside the walls, above the floor and on a free cell.

    Blocks above the top edge (``y < 0``) are allowed.
    """
    for x, y in piece.positions():
        if x < 0 or x >= board.width or y >= board.height:
            return False
        if y >= 0 and board.is_occupied(x, y):
            return False
    return True


def try_move(piece: Piece, dx: int, dy: int, board: Board) -> Piece | None:
    moved = piece.translated(dx, dy)
    if not is_valid_position(moved, board):
        return None
    return moved


def commit_and_advance(piece: Piece, board: Board) -> CommitResult:
    """Lock ``piece`` into ``board`` and sweep any rows it completed."""
    placed = board.place(piece)
    swept, cleared, keywords = placed.sweep()
    return CommitResult(board=swept, lines_cleared=cleared, keywords=keywords)
