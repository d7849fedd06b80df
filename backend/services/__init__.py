"""
Hosting services for the snake engine.
"""

from .game_loop import GameLoop

__all__ = ['GameLoop']
