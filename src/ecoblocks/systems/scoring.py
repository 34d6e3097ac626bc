"""Line-clear scoring and difficulty formulas."""
from __future__ import annotations

from ecoblocks.constants import (
    BASE_FALL_INTERVAL_MS,
    FALL_INTERVAL_STEP_MS,
    LINE_CLEAR_POINTS,
    LINES_PER_LEVEL,
    MIN_FALL_INTERVAL_MS,
    PERSONA_CARD_POINTS,
)


def points_for_lines(lines: int, level: int) -> int:
    if lines <= 0:
        return 0
    return lines * LINE_CLEAR_POINTS * level


def level_for_lines(total_lines: int) -> int:
    return 1 + max(0, total_lines) // LINES_PER_LEVEL


def fall_interval_ms(level: int) -> int:
    return max(MIN_FALL_INTERVAL_MS, BASE_FALL_INTERVAL_MS - (level - 1) * FALL_INTERVAL_STEP_MS)


def persona_cards(score: int) -> int:
    return max(0, score) // PERSONA_CARD_POINTS
