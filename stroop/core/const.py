from stroop.core.types import ColorName

# -----------------------------
# Palette
# -----------------------------

# Colors in play when a session starts
BASE_COLORS = (
    ColorName.RED,
    ColorName.BLUE,
    ColorName.GREEN,
    ColorName.YELLOW,
    ColorName.BLACK,
)

# Streak milestone -> bonus color unlocked when the streak reaches it
UNLOCK_TABLE = (
    (3, ColorName.PURPLE),
    (6, ColorName.ORANGE),
    (9, ColorName.PINK),
    (12, ColorName.CYAN),
)

# -----------------------------
# Pacing
# -----------------------------

DEFAULT_TOTAL_ROUNDS = 30
COUNTDOWN_MS = 3000          # "3, 2, 1" before the first round is answerable
FEEDBACK_MS = 800            # how long the host shows feedback before next_round()
TIME_REMAINING_POLL_MS = 50  # display refresh for the time-remaining readout
TIMER_FRAME_MS = 16          # display refresh for the live stopwatch (~60 fps)

# -----------------------------
# Adaptive timeout
# -----------------------------

# (min streak, timeout ms, speed label); non-increasing timeout as streak grows
TIMEOUT_TIERS = (
    (0, 5000, "1x"),
    (5, 4000, "1.25x"),
    (10, 3000, "1.67x"),
    (15, 2000, "2.5x"),
    (20, 1500, "3.3x"),
    (30, 1000, "5x"),
)
MIN_TIMEOUT_MS = 1000        # floor; no tier may go below this

DANGER_ZONE_PCT = 20         # <= this % of the budget left
WARNING_ZONE_PCT = 50

# -----------------------------
# History
# -----------------------------

HISTORY_LIMIT = 100          # rounds kept in the durable log
