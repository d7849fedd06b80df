import argparse
import json
import logging
import random
from typing import Any, Dict, Optional

import settings
from domain import ATE_APPLE, DIED, IDLE, WON
from domain.game_state import GameState
from players import Player, RandomPlayer
from services.game_loop import GameLoop

logger = logging.getLogger(__name__)


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(
    width: int,
    height: int,
    max_ticks: int,
    seed: Optional[int] = None,
    player: Optional[Player] = None,
    show_board: bool = False,
) -> Dict[str, Any]:
    """
    Runs a headless snake session, ticking as fast as possible.

    Args:
        width, height: board dimensions, including the wall ring
        max_ticks: number of clock ticks to run
        seed: seeds both the engine and the default player
        player: chooses a direction before every tick (RandomPlayer by default)
        show_board: log the board after every apple and death

    Returns:
        A dictionary summarizing the session.
    """
    rng = random.Random(seed)
    game = GameState(rng=random.Random(rng.getrandbits(32)))
    game.reset(width, height)
    if game.width == 0:
        raise ValueError(f"Board {width}x{height} is too small to play on.")

    if player is None:
        player = RandomPlayer(rng=random.Random(rng.getrandbits(32)))

    counts = {"moves": 0, "apples": 0, "deaths": 0, "wins": 0}
    max_length = len(game.snake)

    for tick in range(max_ticks):
        game.set_planned_direction(player.get_move(game))
        result = game.advance_with_result()

        if result == IDLE:
            continue
        counts["moves"] += 1

        if result == ATE_APPLE:
            counts["apples"] += 1
            logger.info(
                "Tick %d: apple eaten, length %d, sleep %dms",
                tick, len(game.snake), game.current_sleep_ms,
            )
        elif result == DIED:
            counts["deaths"] += 1
            logger.info("Tick %d: died (%s), board reset", tick, game.death_reason)
        elif result == WON:
            counts["wins"] += 1
            logger.info("Tick %d: board full, board reset", tick)

        if show_board and result in (ATE_APPLE, DIED, WON):
            logger.info("\n%s", game.print_board())

        max_length = max(max_length, len(game.snake))

    return {
        "width": game.width,
        "height": game.height,
        "ticks": max_ticks,
        "seed": seed,
        "moves": counts["moves"],
        "apples_eaten": counts["apples"],
        "deaths": counts["deaths"],
        "wins": counts["wins"],
        "max_length": max_length,
        "final_length": len(game.snake),
        "final_sleep_ms": game.current_sleep_ms,
    }


def run_realtime(width: int, height: int, max_ticks: int, seed: Optional[int] = None) -> GameLoop:
    """
    Runs a session on the background scheduler, at the engine's own speed,
    logging the board after every visible change.
    """
    rng = random.Random(seed)
    game = GameState(rng=random.Random(rng.getrandbits(32)))
    game.reset(width, height)
    if game.width == 0:
        raise ValueError(f"Board {width}x{height} is too small to play on.")

    player = RandomPlayer(rng=random.Random(rng.getrandbits(32)))
    loop = GameLoop(
        game,
        on_change=lambda g: logger.info("\n%s", g.print_board()),
        before_tick=lambda g: g.set_planned_direction(player.get_move(g)),
    )
    loop.start(max_ticks=max_ticks)
    try:
        loop.join()
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping game loop")
    finally:
        loop.stop()

    if loop.error is not None:
        raise loop.error
    return loop


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Run the snake engine headless with a random player steering."
    )
    parser.add_argument("--width", type=int, required=False, default=settings.BOARD_WIDTH,
                        help="Width of the board, wall included")
    parser.add_argument("--height", type=int, required=False, default=settings.BOARD_HEIGHT,
                        help="Height of the board, wall included")
    parser.add_argument("--max_ticks", type=int, required=False, default=settings.MAX_TICKS,
                        help="Number of clock ticks to run")
    parser.add_argument("--seed", type=int, required=False, default=settings.SEED,
                        help="Seed for apple placement and the random player")
    parser.add_argument("--realtime", action="store_true",
                        help="Tick on the background scheduler at the engine's speed")
    parser.add_argument("--show_board", action="store_true",
                        help="Log the board after apples and deaths")
    parser.add_argument("--log_level", type=str, required=False, default=settings.LOG_LEVEL,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.realtime:
        loop = run_realtime(args.width, args.height, args.max_ticks, args.seed)
        print(f"Ran {loop.ticks} ticks with {loop.redraws} redraws.")
        return

    result = run_simulation(
        width=args.width,
        height=args.height,
        max_ticks=args.max_ticks,
        seed=args.seed,
        show_board=args.show_board,
    )

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
