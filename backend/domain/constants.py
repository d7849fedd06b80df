"""
Game constants for the snake engine.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}
HORIZONTAL_MOVES = {LEFT, RIGHT}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# (dx, dy) per direction; y grows downward like terminal rows
DELTAS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Game settings
STARTING_LENGTH = 10
APPLE_GROW_RATE = 5
STARTING_SPEED = 50  # ms slept between ticks
MAX_SPEED = 15       # lowest sleep the speed ramp can reach
MIN_BOARD_SIZE = 5
MAX_APPLE_ATTEMPTS = 1000

# Tick outcomes reported by GameState.advance_with_result()
IDLE = "idle"
MOVED = "moved"
ATE_APPLE = "ate_apple"
DIED = "died"
WON = "won"
