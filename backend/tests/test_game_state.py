"""
Tests for the GameState simulation engine.

These cover the tick rules (movement cadence, reversal guard, death,
apples and the speed ramp) and the board invariants that must hold after
any sequence of ticks.
"""

import os
import random
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (  # noqa: E402
    GameState,
    UP, DOWN, LEFT, RIGHT,
    IDLE, MOVED, ATE_APPLE, DIED, WON,
)
from domain.constants import MAX_APPLE_ATTEMPTS  # noqa: E402
from domain.snake import Snake  # noqa: E402
from players import RandomPlayer  # noqa: E402


class WallOnlyRandom:
    """Random source whose draws always land on the wall at (0, 0)."""

    def __init__(self):
        self.draws = 0

    def randrange(self, start, stop):
        self.draws += 1
        return start

    def choice(self, seq):
        return seq[0]


def make_game(width=20, height=20, seed=0):
    game = GameState(rng=random.Random(seed))
    game.reset(width, height)
    return game


def fresh_snake(width, height):
    middle = (width // 2, height // 2)
    return [middle] * 12


def assert_on_board(game):
    for x, y in game.snake:
        assert 1 <= x <= game.width - 2
        assert 1 <= y <= game.height - 2
    ax, ay = game.apple
    assert 1 <= ax <= game.width - 2
    assert 1 <= ay <= game.height - 2
    assert game.apple not in game.snake


class TestReset:
    """Tests for GameState.reset()."""

    def test_reset_builds_centered_snake_of_twelve(self):
        game = make_game(20, 10)
        assert game.snake == fresh_snake(20, 10)
        assert game.width == 20
        assert game.height == 10

    def test_reset_restores_speed_and_directions(self):
        game = make_game()
        assert game.current_sleep_ms == 50
        assert game.current_direction is None
        assert game.planned_direction is None
        assert game.apples_eaten == 0

    def test_reset_places_apple_off_snake(self):
        for seed in range(20):
            game = make_game(5, 5, seed=seed)
            assert_on_board(game)

    @pytest.mark.parametrize("width,height", [(4, 10), (10, 4), (0, 0), (-3, 8)])
    def test_reset_ignores_small_boards(self, width, height):
        game = GameState(rng=random.Random(0))
        game.reset(width, height)
        assert game.width == 0
        assert game.snake == []

    def test_small_reset_keeps_existing_board(self):
        game = make_game(12, 12)
        before = (game.snake, game.apple, game.width, game.height)
        game.reset(3, 3)
        assert (game.snake, game.apple, game.width, game.height) == before

    def test_reset_falls_back_to_free_cell_scan(self):
        rng = WallOnlyRandom()
        game = GameState(rng=rng)
        game.reset(7, 7)
        assert rng.draws == 2 * MAX_APPLE_ATTEMPTS
        assert game.apple == (1, 1)


class TestAdvanceBasics:
    """Tests for tick cadence and direction handling."""

    def test_advance_before_reset_is_noop(self):
        game = GameState()
        assert game.advance() is False
        assert game.snake == []

    def test_place_apple_before_reset_is_noop(self):
        game = GameState(rng=random.Random(0))
        assert game.place_apple() is None
        assert game.apple is None
        assert game.snake == []

    def test_advance_without_input_does_not_move(self):
        game = make_game()
        for _ in range(5):
            assert game.advance() is False
        assert game.snake == fresh_snake(20, 20)

    def test_first_move_waits_for_second_tick(self):
        game = make_game()
        game.set_planned_direction(RIGHT)
        assert game.advance() is False
        assert game.advance() is True
        assert game.snake[-1] == (11, 10)
        assert game.current_direction == RIGHT

    def test_horizontal_moves_every_tick(self):
        game = make_game()
        game._apple = (1, 1)
        game.set_planned_direction(RIGHT)
        game.advance()
        game.advance()
        assert game.advance() is True
        assert game.snake[-1] == (12, 10)
        assert game.advance() is True
        assert game.snake[-1] == (13, 10)

    def test_vertical_moves_every_second_tick(self):
        game = make_game()
        game._apple = (1, 1)
        game.set_planned_direction(UP)
        game.advance()
        game.advance()
        assert game.snake[-1] == (10, 9)

        before = game.snake
        assert game.advance() is False
        assert game.snake == before
        assert game.advance() is True
        assert game.snake[-1] == (10, 8)

    def test_reversal_is_ignored(self):
        game = make_game()
        game._apple = (1, 1)
        game.set_planned_direction(RIGHT)
        game.advance()
        game.advance()

        game.set_planned_direction(LEFT)
        assert game.advance() is True
        assert game.current_direction == RIGHT
        assert game.snake[-1] == (12, 10)

    def test_turn_is_applied_at_next_tick(self):
        game = make_game()
        game._apple = (1, 1)
        game.set_planned_direction(RIGHT)
        game.advance()
        game.advance()

        game.set_planned_direction(DOWN)
        assert game.current_direction == RIGHT
        assert game.advance() is True
        assert game.current_direction == DOWN
        assert game.snake[-1] == (11, 11)

    def test_last_request_before_tick_wins(self):
        game = make_game()
        game._apple = (1, 1)
        game.set_planned_direction(UP)
        game.set_planned_direction(LEFT)
        game.advance()
        game.advance()
        assert game.current_direction == LEFT
        assert game.snake[-1] == (9, 10)

    def test_unknown_direction_is_ignored(self):
        game = make_game()
        game.set_planned_direction("SIDEWAYS")
        assert game.advance() is False
        assert game.planned_direction is None

    def test_advance_with_result_reports_idle_and_moved(self):
        game = make_game()
        game._apple = (1, 1)
        game.set_planned_direction(RIGHT)
        assert game.advance_with_result() == IDLE
        assert game.advance_with_result() == MOVED


class TestDeath:
    """Tests for wall and self collisions."""

    def test_wall_death_resets_board(self):
        game = make_game(10, 10)
        game._apple = (8, 1)
        game.set_planned_direction(LEFT)
        game.advance()
        game.advance()
        while game.snake[-1][0] > 1:
            assert game.advance() is True
        assert game.snake[-1] == (1, 5)

        assert game.advance_with_result() == DIED
        assert game.snake == fresh_snake(10, 10)
        assert game.death_reason == "wall"
        assert game.deaths == 1
        assert game.current_direction is None
        assert game.current_sleep_ms == 50
        assert_on_board(game)

    def test_advance_returns_true_on_death(self):
        game = make_game(10, 10)
        game._apple = (1, 8)
        game.set_planned_direction(UP)
        results = [game.advance() for _ in range(10)]
        assert game.deaths == 1
        assert results[-1] is True
        assert game.snake == fresh_snake(10, 10)

    def test_self_collision_resets_board(self):
        game = make_game()
        game._snake = Snake([(4, 5), (5, 5), (6, 5), (6, 6), (5, 6)])
        game._apple = (15, 15)
        game.current_direction = LEFT
        game.planned_direction = LEFT
        game.set_planned_direction(UP)

        assert game.advance_with_result() == DIED
        assert game.death_reason == "self"
        assert game.snake == fresh_snake(20, 20)

    def test_moving_into_vacated_tail_cell_is_safe(self):
        game = make_game()
        game._snake = Snake([(5, 5), (6, 5), (6, 6), (5, 6)])
        game._apple = (15, 15)
        game.current_direction = LEFT
        game.planned_direction = LEFT
        game.set_planned_direction(UP)

        assert game.advance_with_result() == MOVED
        assert game.snake == [(6, 5), (6, 6), (5, 6), (5, 5)]


class TestApples:
    """Tests for eating apples, growth and the speed ramp."""

    def test_eating_apple_grows_and_speeds_up(self):
        game = make_game(20, 20)
        game._apple = (12, 10)
        game.set_planned_direction(RIGHT)
        assert game.advance_with_result() == IDLE
        assert game.advance_with_result() == MOVED
        assert game.advance_with_result() == ATE_APPLE

        assert len(game.snake) == 17
        assert game.current_sleep_ms == 45
        assert game.apples_eaten == 1
        assert game.apple != (12, 10)
        assert_on_board(game)

    def test_growth_keeps_tail_in_place(self):
        game = make_game(30, 20)
        game._snake = Snake([(3, 3), (4, 3), (5, 3)])
        game._apple = (6, 3)
        game.current_direction = RIGHT
        game.planned_direction = RIGHT

        assert game.advance_with_result() == ATE_APPLE
        game._apple = (1, 18)
        for _ in range(5):
            game.advance()
            assert game.snake[0] == (4, 3)
        assert len(game.snake) == 8
        game.advance()
        assert game.snake[0] == (5, 3)
        assert len(set(game.snake)) == 8

    def test_speed_ramp_sequence(self):
        game = make_game()
        seen = []
        for _ in range(10):
            game._speed_up()
            seen.append(game.current_sleep_ms)
        assert seen == [45, 40, 35, 30, 25, 22, 19, 17, 15, 15]

    def test_place_apple_avoids_snake(self):
        game = make_game(6, 6, seed=3)
        game._snake = Snake([(1, 1), (2, 1), (3, 1), (4, 1), (4, 2), (3, 2), (2, 2)])
        for _ in range(50):
            apple = game.place_apple()
            assert apple == game.apple
            assert apple not in game.snake
            assert 1 <= apple[0] <= 4 and 1 <= apple[1] <= 4

    def test_place_apple_without_room_resets(self):
        game = GameState(rng=WallOnlyRandom())
        game.reset(7, 7)
        game._snake = Snake([(2, 2), (2, 3), (2, 4)])

        apple = game.place_apple()
        assert game.snake == fresh_snake(7, 7)
        assert apple == game.apple == (1, 1)

    def test_unplaceable_apple_after_eating_is_a_win(self):
        game = GameState(rng=WallOnlyRandom())
        game.reset(7, 7)
        game._apple = (4, 3)
        game.set_planned_direction(RIGHT)
        game.advance()

        assert game.advance_with_result() == WON
        assert game.snake == fresh_snake(7, 7)
        assert game.current_sleep_ms == 50


class TestInvariants:
    """Long random sessions must never break the board invariants."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_snake_stays_inside_and_apple_stays_free(self, seed):
        game = make_game(12, 9, seed=seed)
        player = RandomPlayer(rng=random.Random(seed))
        for _ in range(3000):
            game.set_planned_direction(player.get_move(game))
            game.advance()
            assert len(game.snake) >= 2
            assert_on_board(game)
            assert 15 <= game.current_sleep_ms <= 50


class TestPrintBoard:
    """Tests for the text board dump."""

    def test_print_board_layout(self):
        game = make_game(7, 6)
        lines = game.print_board().split("\n")
        assert len(lines) == 6
        assert all(len(line) == 7 for line in lines)
        assert lines[0] == "#######"
        assert lines[-1] == "#######"
        assert lines[3][3] == "H"
        assert sum(line.count("A") for line in lines) == 1

    def test_print_board_before_reset_is_empty(self):
        assert GameState().print_board() == ""

    def test_repr(self):
        assert "20x20" in repr(make_game())
