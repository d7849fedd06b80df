"""
Player implementations for the snake engine.

Players stand in for keyboard input when the engine runs headless.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
