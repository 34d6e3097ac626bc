from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from ecoblocks.components.cell import Cell
from ecoblocks.constants import BOARD_HEIGHT, BOARD_WIDTH

if TYPE_CHECKING:
    from ecoblocks.components.piece import Piece

Row = Tuple[Optional[Cell], ...]


@dataclass(slots=True, frozen=True)
class Board:
    """Fixed-size grid of settled cells.

    Row 0 is the top of the well. Boards are values: ``place`` and ``sweep``
    return new boards and the session swaps the component as a whole.
    """

    width: int
    height: int
    rows: Tuple[Row, ...]

    @classmethod
    def empty(cls, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> "Board":
        return cls(width, height, tuple(cls._empty_row(width) for _ in range(height)))

    @staticmethod
    def _empty_row(width: int) -> Row:
        return (None,) * width

    def is_in_bounds(self, x: int, y: int) -> bool:
        # No lower bound on y: pieces spawn partly above the visible well.
        return 0 <= x < self.width and y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if y < 0 or y >= self.height or not 0 <= x < self.width:
            return False
        return self.rows[y][x] is not None

    def cell_at(self, x: int, y: int) -> Cell | None:
        if not self.is_occupied(x, y):
            return None
        return self.rows[y][x]

    def place(self, piece: "Piece") -> "Board":
        """Write every in-bounds block of ``piece`` as a Cell."""
        grid = [list(row) for row in self.rows]
        for x, y, keyword in piece.cells():
            if y < 0 or not self.is_in_bounds(x, y):
                continue
            grid[y][x] = Cell(keyword=keyword, color=piece.color)
        return Board(self.width, self.height, tuple(tuple(row) for row in grid))

    def sweep(self) -> tuple["Board", int, List[str]]:
        """Remove full rows bottom-up and drop everything above them.

        Returns the new board, the number of rows cleared and the cleared
        keywords in bottom-to-top, left-to-right order.
        """
        grid: List[Row] = list(self.rows)
        cleared = 0
        keywords: List[str] = []
        y = self.height - 1
        while y >= 0:
            row = grid[y]
            if all(cell is not None for cell in row):
                keywords.extend(cell.keyword for cell in row if cell is not None)
                del grid[y]
                grid.insert(0, self._empty_row(self.width))
                cleared += 1
                # The row above just slid into index y; examine it again.
            else:
                y -= 1
        if not cleared:
            return self, 0, keywords
        return Board(self.width, self.height, tuple(grid)), cleared, keywords

    def is_row_full(self, y: int) -> bool:
        return all(cell is not None for cell in self.rows[y])

    def filled_cells(self) -> Iterator[tuple[int, int, Cell]]:
        for y, row in enumerate(self.rows):
            for x, cell in enumerate(row):
                if cell is not None:
                    yield x, y, cell

    def occupied_count(self) -> int:
        return sum(1 for _ in self.filled_cells())
