from ecoblocks.constants import BOARD_MARGIN, SIDE_PANEL_WIDTH, TILE_SIZE


def window_size_for_board(cols: int, rows: int, tile_size: int = TILE_SIZE) -> tuple[int, int]:
    width = cols * tile_size + SIDE_PANEL_WIDTH + 3 * BOARD_MARGIN
    height = rows * tile_size + 2 * BOARD_MARGIN
    return width, height


def compute_board_geometry(window_width: int, window_height: int, cols: int, rows: int):
    """Return (tile_size, left, bottom) for a board that fits beside the side panel.

    Tiles shrink with the window but never below 12 px.
    """
    max_board_w = window_width - SIDE_PANEL_WIDTH - 3 * BOARD_MARGIN
    max_board_h = window_height - 2 * BOARD_MARGIN
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < 12:
        tile_size = 12
    return tile_size, BOARD_MARGIN, BOARD_MARGIN


def cell_rect(x: int, y: int, rows: int, tile_size: int, left: float, bottom: float):
    """Screen rectangle (left, right, bottom, top) for board cell (x, y); row 0 is drawn on top."""
    cell_left = left + x * tile_size
    cell_bottom = bottom + (rows - 1 - y) * tile_size
    return cell_left, cell_left + tile_size, cell_bottom, cell_bottom + tile_size


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    text = value.lstrip("#")
    if len(text) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {value!r}")
    return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)
