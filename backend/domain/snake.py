"""
Snake entity for the game engine.
"""

from collections import deque
from itertools import islice
from typing import Iterable, List, Tuple

from .constants import DELTAS

Point = Tuple[int, int]


class Snake:
    """
    Represents the snake body on the board.

    Attributes:
        positions: deque of (x, y) from the tail at index 0 to the head at the end
    """

    def __init__(self, positions: Iterable[Point]):
        self.positions = deque(positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self):
        return iter(self.positions)

    @property
    def head(self) -> Point:
        """Return the head position (last element)."""
        return self.positions[-1]

    @property
    def tail(self) -> Point:
        """Return the tail position (first element)."""
        return self.positions[0]

    def next_head(self, direction: str) -> Point:
        """Return the cell the head would move to in the given direction."""
        if direction not in DELTAS:
            raise ValueError(f"Unknown direction: {direction!r}")
        dx, dy = DELTAS[direction]
        x, y = self.head
        return (x + dx, y + dy)

    def step(self, new_head: Point) -> None:
        """Drop the tail and push a new head."""
        self.positions.popleft()
        self.positions.append(new_head)

    def grow(self, amount: int) -> None:
        """
        Duplicate the tail point `amount` times.

        The tail stays put for the next `amount` steps while the copies are
        consumed, which is what makes the body visibly longer.
        """
        tail = self.positions[0]
        for _ in range(amount):
            self.positions.appendleft(tail)

    def body_contains(self, point: Point) -> bool:
        """True if point is on the body, not counting the head itself."""
        return point in islice(self.positions, 0, len(self.positions) - 1)

    def to_list(self) -> List[Point]:
        return list(self.positions)
