"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.constants import DELTAS, OPPOSITES, VALID_MOVES
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def get_move(self, game_state: GameState) -> str:
        snake_positions = game_state.snake
        head_x, head_y = snake_positions[-1]

        # The engine ignores a reversal, so never bother planning one
        current = game_state.current_direction
        candidates = sorted(
            move for move in VALID_MOVES
            if current is None or move != OPPOSITES[current]
        )

        # Filter out moves that:
        # 1. Hit walls
        # 2. Hit own body (except tail, which will move)
        body = set(snake_positions[1:])
        valid_moves: List[str] = []
        for move in candidates:
            dx, dy = DELTAS[move]
            new_x, new_y = head_x + dx, head_y + dy

            if (new_x <= 0 or new_x >= game_state.width - 1 or
                    new_y <= 0 or new_y >= game_state.height - 1):
                continue

            if (new_x, new_y) in body:
                continue

            valid_moves.append(move)

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            return self.rng.choice(candidates)

        # Keep going straight when that is safe so the snake does not jitter
        if current in valid_moves and self.rng.random() < 0.7:
            return current

        return self.rng.choice(valid_moves)
