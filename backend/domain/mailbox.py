"""
Single-slot mailbox for handing a planned direction to the tick thread.
"""

import threading
from typing import Optional


class DirectionMailbox:
    """
    Holds at most one pending direction.

    The input side calls put() from any thread; the tick side calls take()
    once per tick. A newer put() overwrites an unread one, so only the last
    request before a tick boundary is seen.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: Optional[str] = None

    def put(self, direction: str) -> None:
        with self._lock:
            self._pending = direction

    def take(self) -> Optional[str]:
        """Return and clear the pending direction, or None if nothing was posted."""
        with self._lock:
            direction, self._pending = self._pending, None
            return direction

    def clear(self) -> None:
        with self._lock:
            self._pending = None
