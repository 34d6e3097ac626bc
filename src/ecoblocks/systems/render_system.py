from __future__ import annotations

from esper import World

from ecoblocks.components.game_state import GameMode
from ecoblocks.components.piece import Piece
from ecoblocks.ui.layout import cell_rect, compute_board_geometry, hex_to_rgb
from ecoblocks.utils.score_ledger import ScoreLedger
from ecoblocks.utils.snapshot import GameSnapshot, build_snapshot

_FALLBACK_COLOR = (120, 120, 130)
_GRID_COLOR = (40, 44, 52)
_WELL_COLOR = (18, 20, 26)
_TEXT_COLOR = (235, 235, 235)
_DIM_TEXT_COLOR = (160, 160, 170)
_OVERLAY_COLOR = (10, 12, 16, 220)


class RenderSystem:
    """Draws the board, the pieces, the stats panel and any open challenge."""

    def __init__(self, world: World, window, *, ledger: ScoreLedger | None = None):
        self.world = world
        self.window = window
        self.ledger = ledger
        self._colors: dict[str, tuple[int, int, int]] = {}
        self.last_snapshot: GameSnapshot | None = None

    def color_for(self, tag: str) -> tuple[int, int, int]:
        color = self._colors.get(tag)
        if color is None:
            try:
                color = hex_to_rgb(tag)
            except ValueError:
                color = _FALLBACK_COLOR
            self._colors[tag] = color
        return color

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade

        snapshot = build_snapshot(self.world)
        self.last_snapshot = snapshot
        if snapshot.board is None:
            self._draw_title(arcade, "EcoBlocks", "Press Enter to start")
            return
        board = snapshot.board
        tile_size, left, bottom = compute_board_geometry(
            self.window.width, self.window.height, board.width, board.height
        )
        arcade.draw_lrbt_rectangle_filled(
            left, left + board.width * tile_size, bottom, bottom + board.height * tile_size, _WELL_COLOR
        )
        for y in range(board.height):
            for x in range(board.width):
                l, r, b, t = cell_rect(x, y, board.height, tile_size, left, bottom)
                arcade.draw_lrbt_rectangle_outline(l, r, b, t, _GRID_COLOR, 1)
        for x, y, cell in board.filled_cells():
            self._draw_block(arcade, x, y, cell.keyword, self.color_for(cell.color), board.height, tile_size, left, bottom)
        if snapshot.current_piece is not None and snapshot.mode != GameMode.GAME_OVER:
            self._draw_piece(arcade, snapshot.current_piece, board.height, tile_size, left, bottom)
        self._draw_panel(arcade, snapshot, left + board.width * tile_size, tile_size)
        if snapshot.challenge is not None:
            self._draw_challenge(arcade, snapshot)
        elif snapshot.mode == GameMode.GAME_OVER:
            self._draw_title(arcade, "Game Over", f"Score {snapshot.score}. Press Enter to play again")

    def _draw_piece(self, arcade, piece: Piece, rows: int, tile_size: int, left: float, bottom: float) -> None:
        color = self.color_for(piece.color)
        for x, y, keyword in piece.cells():
            if y < 0:
                continue
            self._draw_block(arcade, x, y, keyword, color, rows, tile_size, left, bottom)

    def _draw_block(self, arcade, x, y, keyword, color, rows, tile_size, left, bottom) -> None:
        l, r, b, t = cell_rect(x, y, rows, tile_size, left, bottom)
        arcade.draw_lrbt_rectangle_filled(l + 1, r - 1, b + 1, t - 1, color)
        if tile_size >= 24:
            arcade.draw_text(
                keyword[:4],
                (l + r) / 2,
                (b + t) / 2,
                _TEXT_COLOR,
                max(7, tile_size // 4),
                anchor_x="center",
                anchor_y="center",
            )

    def _draw_panel(self, arcade, snapshot: GameSnapshot, board_right: float, tile_size: int) -> None:
        x = board_right + 24
        y = self.window.height - 48
        lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines}",
        ]
        if self.ledger is not None:
            lines.append(f"Last 24h: {self.ledger.total_since()}")
        for line in lines:
            arcade.draw_text(line, x, y, _TEXT_COLOR, 14)
            y -= 24
        arcade.draw_text("Next", x, y - 8, _DIM_TEXT_COLOR, 12)
        if snapshot.next_piece is not None:
            color = self.color_for(snapshot.next_piece.color)
            preview_size = min(tile_size, 24)
            top = y - 24
            for dx, dy in snapshot.next_piece.offsets():
                l = x + dx * preview_size
                t = top - dy * preview_size
                arcade.draw_lrbt_rectangle_filled(l + 1, l + preview_size - 1, t - preview_size + 1, t - 1, color)

    def _draw_challenge(self, arcade, snapshot: GameSnapshot) -> None:
        challenge = snapshot.challenge
        width = self.window.width
        height = self.window.height
        arcade.draw_lrbt_rectangle_filled(0, width, height * 0.3, height * 0.7, _OVERLAY_COLOR)
        center_x = width / 2
        arcade.draw_text(
            f"Complete the sentence ({challenge.time_left}s)",
            center_x, height * 0.64, _DIM_TEXT_COLOR, 14, anchor_x="center",
        )
        arcade.draw_text(challenge.template, center_x, height * 0.56, _TEXT_COLOR, 18, anchor_x="center")
        answer = challenge.answer or " "
        arcade.draw_text(f"> {answer}", center_x, height * 0.48, _TEXT_COLOR, 18, anchor_x="center")
        if challenge.previewing:
            hint = f"Points: {challenge.points}. Enter to submit, Escape to edit"
        else:
            hint = f"Points: {challenge.points}. Enter to preview, Escape to skip"
        arcade.draw_text(hint, center_x, height * 0.38, _DIM_TEXT_COLOR, 12, anchor_x="center")

    def _draw_title(self, arcade, title: str, subtitle: str) -> None:
        center_x = self.window.width / 2
        center_y = self.window.height / 2
        arcade.draw_text(title, center_x, center_y + 20, _TEXT_COLOR, 28, anchor_x="center")
        arcade.draw_text(subtitle, center_x, center_y - 20, _DIM_TEXT_COLOR, 14, anchor_x="center")
