BOARD_WIDTH = 10
BOARD_HEIGHT = 17

# Every freshly generated piece starts at this anchor.
SPAWN_X = 3
SPAWN_Y = 0

# Anchor x shifts tried, in order, when an in-place rotation collides.
WALL_KICKS = (-1, 1, -2, 2)

# Scoring & level progression
LINE_CLEAR_POINTS = 100      # per line, multiplied by the level at clear time
LINES_PER_LEVEL = 10

# Gravity curve: 1s at level 1, 80ms faster per level, never below 150ms.
BASE_FALL_INTERVAL_MS = 1000
FALL_INTERVAL_STEP_MS = 80
MIN_FALL_INTERVAL_MS = 150

# Sentence challenges
CHALLENGE_TIME_LIMIT = 20           # seconds on the countdown
CHALLENGE_TICK_SECONDS = 1.0
AVAILABLE_KEYWORD_COUNT = 10        # leading vocabulary entries that earn keyword bonuses
BLANK_MARKER = "_____"
MIN_TOKEN_LENGTH = 3
STOP_WORDS = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by", "a", "an",
})
KEYWORD_BONUS = 2

# Long-term rewards
PERSONA_CARD_POINTS = 50
LEDGER_WINDOW_HOURS = 24

# Keyboard symbols (pyglet/arcade key codes).
KEY_LEFT = 65361
KEY_UP = 65362
KEY_RIGHT = 65363
KEY_DOWN = 65364
KEY_A = 97
KEY_D = 100
KEY_S = 115
KEY_W = 119
KEY_SPACE = 32
KEY_BACKSPACE = 65288
KEY_ENTER = 65293
KEY_ESCAPE = 65307

# Window layout
TILE_SIZE = 32
BOARD_MARGIN = 24
SIDE_PANEL_WIDTH = 240
