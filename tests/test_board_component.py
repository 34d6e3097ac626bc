from ecoblocks.components.board import Board
from ecoblocks.components.cell import Cell
from ecoblocks.factories.pieces import build_piece

from tests.helpers import board_with_cells


def _full_row(y, width=10):
    return [(x, y) for x in range(width)]


def test_empty_board_dimensions_and_bounds():
    board = Board.empty()
    assert (board.width, board.height) == (10, 17)
    assert board.occupied_count() == 0
    assert board.is_in_bounds(0, 0)
    assert board.is_in_bounds(9, 16)
    assert board.is_in_bounds(4, -2)
    assert not board.is_in_bounds(-1, 0)
    assert not board.is_in_bounds(10, 0)
    assert not board.is_in_bounds(0, 17)


def test_is_occupied_ignores_coordinates_off_the_grid():
    board = board_with_cells([(0, 0)])
    assert board.is_occupied(0, 0)
    assert not board.is_occupied(0, -1)
    assert not board.is_occupied(-1, 0)
    assert not board.is_occupied(0, 17)


def test_place_writes_keyword_and_piece_color():
    piece = build_piece("I", ["protect", "nature", "care", "green"], "#22C55E", y=16)
    board = Board.empty().place(piece)
    assert board.cell_at(3, 16) == Cell("protect", "#22C55E")
    assert board.cell_at(6, 16) == Cell("green", "#22C55E")
    assert board.occupied_count() == 4


def test_place_drops_blocks_above_the_top_edge():
    piece = build_piece("O", ["a1", "a2", "a3", "a4"], "#EF4444", y=-1)
    board = Board.empty().place(piece)
    assert board.occupied_count() == 2
    assert board.cell_at(3, 0).keyword == "a3"
    assert board.cell_at(4, 0).keyword == "a4"


def test_place_does_not_mutate_the_original_board():
    original = Board.empty()
    original.place(build_piece("O", ["a", "b", "c", "d"], "#EF4444", y=10))
    assert original.occupied_count() == 0


def test_sweep_without_full_rows_returns_same_board():
    board = board_with_cells([(0, 16), (1, 16)])
    swept, cleared, keywords = board.sweep()
    assert swept is board
    assert cleared == 0
    assert keywords == []


def test_sweep_clears_consecutive_full_rows():
    # Two adjacent full rows: the upper one slides into the cleared index and must be re-checked.
    coords = _full_row(15) + _full_row(16) + [(2, 14)]
    board = board_with_cells(coords)
    swept, cleared, _ = board.sweep()
    assert cleared == 2
    assert swept.occupied_count() == 1
    assert swept.is_occupied(2, 16)


def test_sweep_shifts_rows_above_a_cleared_row_down():
    coords = _full_row(16) + [(0, 15), (5, 13)]
    swept, cleared, _ = board_with_cells(coords).sweep()
    assert cleared == 1
    assert swept.is_occupied(0, 16)
    assert swept.is_occupied(5, 14)
    assert not swept.is_occupied(5, 13)


def test_sweep_collects_keywords_bottom_to_top_left_to_right():
    rows = [[None] * 10 for _ in range(17)]
    for x in range(10):
        rows[16][x] = Cell(f"b{x}", "#000000")
        rows[15][x] = Cell(f"t{x}", "#000000")
    board = Board(10, 17, tuple(tuple(row) for row in rows))
    _, cleared, keywords = board.sweep()
    assert cleared == 2
    assert keywords == [f"b{x}" for x in range(10)] + [f"t{x}" for x in range(10)]


def test_sweep_is_idempotent():
    coords = _full_row(16) + _full_row(12) + [(3, 11), (7, 15)]
    once, cleared, _ = board_with_cells(coords).sweep()
    twice, cleared_again, keywords = once.sweep()
    assert cleared == 2
    assert cleared_again == 0
    assert keywords == []
    assert twice == once


def test_sweep_keeps_non_full_rows_intact():
    coords = [(x, 16) for x in range(9)]
    swept, cleared, _ = board_with_cells(coords).sweep()
    assert cleared == 0
    assert not swept.is_row_full(16)
    assert swept.occupied_count() == 9
