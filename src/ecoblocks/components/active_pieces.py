from dataclasses import dataclass

from ecoblocks.components.piece import Piece


@dataclass(slots=True)
class ActivePieces:
    """The falling piece and the preview piece for the live session."""
    current: Piece
    next: Piece
