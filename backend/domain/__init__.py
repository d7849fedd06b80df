"""
Domain entities for the snake simulation engine.

This module contains the core game entities that are independent of
hosting concerns (terminal drawing, keyboard input, scheduling).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES,
    IDLE, MOVED, ATE_APPLE, DIED, WON,
)
from .mailbox import DirectionMailbox
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES',
    'IDLE', 'MOVED', 'ATE_APPLE', 'DIED', 'WON',
    'DirectionMailbox',
    'Snake',
    'GameState',
]
