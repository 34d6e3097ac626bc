import pytest

from ecoblocks.components.game_state import GameMode
from ecoblocks.systems.render_system import RenderSystem
from ecoblocks.ui.layout import cell_rect, compute_board_geometry, hex_to_rgb, window_size_for_board
from ecoblocks.utils.snapshot import build_snapshot
from ecoblocks.world import create_world


class DummyWindow:
    def __init__(self, width=632, height=592):
        self.width = width
        self.height = height


def test_default_window_fits_full_size_tiles():
    width, height = window_size_for_board(10, 17)
    assert (width, height) == (632, 592)
    assert compute_board_geometry(width, height, 10, 17) == (32, 24, 24)


def test_tiles_never_shrink_below_minimum():
    tile_size, _, _ = compute_board_geometry(300, 200, 10, 17)
    assert tile_size == 12


def test_row_zero_is_drawn_at_the_top():
    top = cell_rect(0, 0, 17, 32, 24, 24)
    bottom = cell_rect(0, 16, 17, 32, 24, 24)
    assert bottom == (24, 56, 24, 56)
    assert top[2] == 24 + 16 * 32
    assert cell_rect(3, 16, 17, 32, 24, 24)[0] == 24 + 3 * 32


def test_hex_colors():
    assert hex_to_rgb("#3B82F6") == (59, 130, 246)
    assert hex_to_rgb("10b981") == (16, 185, 129)
    with pytest.raises(ValueError):
        hex_to_rgb("#fff")


def test_unknown_color_tags_fall_back_to_gray():
    render = RenderSystem(create_world(), DummyWindow())
    assert render.color_for("#EF4444") == (239, 68, 68)
    assert render.color_for("teal-ish") == render.color_for("#zzzzzz")


def test_snapshot_without_a_session():
    snapshot = build_snapshot(create_world())
    assert snapshot.mode == GameMode.NOT_STARTED
    assert snapshot.session_id is None
    assert snapshot.board is None
    assert snapshot.challenge is None
