"""Snake grid size, speed ramp and storage key."""

GRID_SIZE = 15

START_X = 5
START_Y = 5

# Tick interval in milliseconds
INITIAL_TICK_INTERVAL_MS = 200
MIN_TICK_INTERVAL_MS = 50
TICK_INTERVAL_STEP_MS = 20

# The interval shrinks each time the score reaches a multiple of this
POINTS_PER_SPEEDUP = 5

STORAGE_KEY = "snakeGameHighScore"
