"""
GameState entity - the tick-driven snake simulation.
"""

import logging
import random
from typing import List, Optional

from .constants import (
    APPLE_GROW_RATE,
    ATE_APPLE,
    DIED,
    HORIZONTAL_MOVES,
    IDLE,
    MAX_APPLE_ATTEMPTS,
    MAX_SPEED,
    MIN_BOARD_SIZE,
    MOVED,
    OPPOSITES,
    STARTING_LENGTH,
    STARTING_SPEED,
    VALID_MOVES,
    WON,
)
from .mailbox import DirectionMailbox
from .snake import Point, Snake

logger = logging.getLogger(__name__)


class GameState:
    """
    The single mutable state of one snake session.

    The outermost ring of the board is wall, so the playable area is
    [1, width-2] x [1, height-2]. The snake is ordered tail-first, head-last.

    Only advance() and reset() mutate the board, and they must be called from
    one thread. set_planned_direction() is safe to call from any thread: it
    posts into a single-slot mailbox that advance() drains at the next tick.

    Attributes:
        current_direction: direction the snake is travelling, None before the first input
        planned_direction: last requested direction adopted at a tick boundary
        death_reason: 'wall' or 'self' for the most recent death, else None
        deaths: number of deaths since construction
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random()
        self._mailbox = DirectionMailbox()
        self._width = 0
        self._height = 0
        self._snake = Snake([])
        self._apple: Optional[Point] = None
        self._sleep_ms = STARTING_SPEED
        self._step_counter = 0
        self._apples_eaten = 0
        self.current_direction: Optional[str] = None
        self.planned_direction: Optional[str] = None
        self.death_reason: Optional[str] = None
        self.deaths = 0

    # ------------------------------------------------------------------
    # Read-only accessors for the host
    # ------------------------------------------------------------------

    @property
    def snake(self) -> List[Point]:
        """Snake points, tail first."""
        return self._snake.to_list()

    @property
    def apple(self) -> Optional[Point]:
        return self._apple

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def current_sleep_ms(self) -> int:
        return self._sleep_ms

    @property
    def apples_eaten(self) -> int:
        """Apples eaten since the last reset."""
        return self._apples_eaten

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def reset(self, width: int, height: int) -> None:
        """
        Start a fresh board of the given size.

        Boards smaller than MIN_BOARD_SIZE in either dimension are ignored and
        the current state is left untouched.
        """
        if width < MIN_BOARD_SIZE or height < MIN_BOARD_SIZE:
            logger.debug(
                "Ignoring reset to %sx%s (minimum is %s)", width, height, MIN_BOARD_SIZE
            )
            return

        self._width = width
        self._height = height

        # Start with a length of 2 at the centre, then stack the rest on the tail
        middle = (width // 2, height // 2)
        self._snake = Snake([middle, middle])
        self._snake.grow(STARTING_LENGTH)

        self._sleep_ms = STARTING_SPEED
        self._step_counter = 0
        self._apples_eaten = 0
        self.current_direction = None
        self.planned_direction = None
        self._mailbox.clear()

        apple = self._draw_apple()
        if apple is None:
            # Random draws can miss on tiny boards; a fresh board always has room
            apple = self._rng.choice(self._free_cells())
        self._apple = apple

        logger.debug("Reset board to %sx%s, apple at %s", width, height, apple)

    def set_planned_direction(self, direction: str) -> None:
        """Request a direction; it takes effect at the next moving tick."""
        self._mailbox.put(direction)

    def advance(self) -> bool:
        """
        Run one clock tick.

        Returns True when the visible state changed and the host should redraw.
        """
        return self.advance_with_result() != IDLE

    def advance_with_result(self) -> str:
        """
        Run one clock tick and report what happened.

        Returns one of IDLE, MOVED, ATE_APPLE, DIED or WON. DIED and WON both
        leave the engine on a freshly reset board.
        """
        if not len(self._snake):
            # reset() has not been called yet
            return IDLE

        self._receive_direction()
        if self.planned_direction is None:
            return IDLE

        # Cells are about twice as tall as wide, so vertical moves take two ticks
        self._step_counter += 1
        required_steps = 1 if self.current_direction in HORIZONTAL_MOVES else 2
        if self._step_counter < required_steps:
            return IDLE
        self._step_counter = 0

        self._update_direction()

        new_head = self._snake.next_head(self.current_direction)
        self._snake.step(new_head)

        reason = self._death_reason(new_head)
        if reason is not None:
            self.death_reason = reason
            self.deaths += 1
            logger.info(
                "Snake died (%s) at %s with length %d; restarting",
                reason,
                new_head,
                len(self._snake),
            )
            self.reset(self._width, self._height)
            return DIED

        if new_head == self._apple:
            return self._eat_apple()

        return MOVED

    def place_apple(self) -> Optional[Point]:
        """
        Move the apple to a random free interior cell.

        If no free cell turns up after MAX_APPLE_ATTEMPTS draws the board is
        treated as full and the game restarts.
        """
        if not len(self._snake):
            # reset() has not been called yet
            return self._apple

        candidate = self._draw_apple()
        if candidate is None:
            logger.info(
                "No free cell for the apple after %d attempts; restarting",
                MAX_APPLE_ATTEMPTS,
            )
            self.reset(self._width, self._height)
            return self._apple

        self._apple = candidate
        return candidate

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _receive_direction(self) -> None:
        pending = self._mailbox.take()
        if pending is None:
            return
        if pending not in VALID_MOVES:
            logger.debug("Ignoring unknown direction %r", pending)
            return
        self.planned_direction = pending

    def _update_direction(self) -> None:
        if self.current_direction is None:
            self.current_direction = self.planned_direction
        elif OPPOSITES[self.current_direction] != self.planned_direction:
            self.current_direction = self.planned_direction

    def _eat_apple(self) -> str:
        self._snake.grow(APPLE_GROW_RATE)
        self._apples_eaten += 1

        candidate = self._draw_apple()
        if candidate is None:
            logger.info(
                "Board full after %d apples (length %d); restarting",
                self._apples_eaten,
                len(self._snake),
            )
            self.reset(self._width, self._height)
            return WON
        self._apple = candidate

        previous = self._sleep_ms
        self._speed_up()
        logger.debug(
            "Apple eaten, length %d, speed %sms -> %sms, next apple at %s",
            len(self._snake),
            previous,
            self._sleep_ms,
            candidate,
        )
        return ATE_APPLE

    def _speed_up(self) -> None:
        delta = 5
        if self._sleep_ms < 30:
            delta = 3
        if self._sleep_ms < 20:
            delta = 2
        self._sleep_ms = max(MAX_SPEED, self._sleep_ms - delta)

    def _death_reason(self, point: Point) -> Optional[str]:
        x, y = point
        if x <= 0 or x >= self._width - 1:
            return "wall"
        if y <= 0 or y >= self._height - 1:
            return "wall"
        if self._snake.body_contains(point):
            return "self"
        return None

    def _draw_apple(self) -> Optional[Point]:
        head = self._snake.head
        for _ in range(MAX_APPLE_ATTEMPTS):
            x = self._rng.randrange(0, self._width)
            y = self._rng.randrange(0, self._height)
            candidate = (x, y)
            if candidate == head:
                continue
            if self._death_reason(candidate) is not None:
                continue
            return candidate
        return None

    def _free_cells(self) -> List[Point]:
        occupied = set(self._snake)
        return [
            (x, y)
            for y in range(1, self._height - 1)
            for x in range(1, self._width - 1)
            if (x, y) not in occupied
        ]

    # ------------------------------------------------------------------
    # Debug helpers
    # ------------------------------------------------------------------

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        # = wall
        . = empty space
        A = apple
        o = snake body
        H = snake head
        Row 0 is printed first, matching terminal orientation.
        """
        if not len(self._snake):
            return ""

        board = [['.' for _ in range(self._width)] for _ in range(self._height)]
        for x in range(self._width):
            board[0][x] = '#'
            board[self._height - 1][x] = '#'
        for y in range(self._height):
            board[y][0] = '#'
            board[y][self._width - 1] = '#'

        if self._apple is not None:
            ax, ay = self._apple
            board[ay][ax] = 'A'

        for x, y in self._snake:
            board[y][x] = 'o'
        hx, hy = self._snake.head
        board[hy][hx] = 'H'

        return "\n".join("".join(row) for row in board)

    def __repr__(self):
        return (
            f"<GameState {self._width}x{self._height}, length={len(self._snake)}, "
            f"apple={self._apple}, sleep_ms={self._sleep_ms}, "
            f"direction={self.current_direction}>"
        )
