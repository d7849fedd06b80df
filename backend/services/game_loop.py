"""
Background scheduler that ticks a GameState at its own cadence.

The loop owns the engine's writer side: it calls advance(), sleeps for the
engine's current_sleep_ms (re-read every iteration, since eating apples makes
it shorter) and hands the state to a redraw callback only when a tick
actually changed something. Stopping is cooperative through an Event, so a
stop request takes effect at the next sleep.
"""

import logging
import threading
from typing import Callable, Optional

from domain.game_state import GameState

logger = logging.getLogger(__name__)

StateCallback = Callable[[GameState], None]


class GameLoop:
    """
    Drive a GameState on a timer.

    Args:
        game: the engine to tick; it should already be reset
        on_change: called with the engine after every tick that changed it
        before_tick: called with the engine right before every tick, e.g. to
            plan a direction from an automated player
    """

    def __init__(
        self,
        game: GameState,
        on_change: Optional[StateCallback] = None,
        before_tick: Optional[StateCallback] = None,
    ):
        self.game = game
        self.on_change = on_change
        self.before_tick = before_tick
        self.ticks = 0
        self.redraws = 0
        self.error: Optional[BaseException] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick on the calling thread until stopped or max_ticks is reached.

        Returns the number of ticks run by this call.
        """
        ticks = 0
        try:
            while not self._stop_event.is_set():
                if max_ticks is not None and ticks >= max_ticks:
                    break

                if self.before_tick is not None:
                    self.before_tick(self.game)

                changed = self.game.advance()
                ticks += 1
                self.ticks += 1

                if changed and self.on_change is not None:
                    self.on_change(self.game)
                    self.redraws += 1

                if self._stop_event.wait(self.game.current_sleep_ms / 1000.0):
                    break
        except Exception:
            logger.exception("Game loop stopped after an error")
            raise

        return ticks

    def start(self, max_ticks: Optional[int] = None) -> None:
        """Run the loop on a background thread."""
        if self.running:
            raise RuntimeError("Game loop is already running")

        self._stop_event.clear()
        self.error = None
        self._thread = threading.Thread(
            target=self._run_in_thread,
            args=(max_ticks,),
            name="snake-game-loop",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Game loop started (max_ticks=%s)", max_ticks)

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """Ask the loop to stop and wait for the background thread to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread is threading.current_thread():
            # Called from a callback on the loop thread; run() exits at the next wait
            return
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Game loop did not stop within %ss", timeout)
            else:
                self._thread = None
        logger.debug("Game loop stopped after %d ticks", self.ticks)

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _run_in_thread(self, max_ticks: Optional[int]) -> None:
        try:
            self.run(max_ticks)
        except Exception as exc:
            self.error = exc
