"""Tests for the Board module."""

import json

import numpy as np

from duel_snake.board import Board, TerminationReason
from duel_snake.config import GameConfig
from duel_snake.grid import Grid
from duel_snake.oracle import PositionOracle
from duel_snake.snake import Direction, Snake


def _board(**kwargs) -> Board:
    defaults = {
        "slot": 1,
        "snake": Snake([(5, 5), (4, 5)], Direction.RIGHT),
        "food": (10, 10),
    }
    defaults.update(kwargs)
    return Board(**defaults)


class TestBoardFresh:
    def test_start_layout(self):
        grid = Grid(20)
        oracle = PositionOracle(grid, np.random.default_rng(0))
        board = Board.fresh(1, grid, oracle, GameConfig(), owner_name="ann")
        assert list(board.snake.body) == [(5, 10), (4, 10)]
        assert board.direction is Direction.RIGHT
        assert board.score == 0
        assert board.debuffs == []
        assert board.food_eaten_counter == 0
        assert not board.terminated
        assert board.food not in board.snake.body
        assert board.owner_name == "ann"
        assert board.color == "green"

    def test_slot_two_is_blue_and_ai_flag(self):
        grid = Grid(20)
        oracle = PositionOracle(grid, np.random.default_rng(0))
        board = Board.fresh(2, grid, oracle, GameConfig(), owner_name="AI", is_ai=True)
        assert board.color == "blue"
        assert board.is_ai


class TestBoardDirection:
    def test_reverse_rejected(self):
        board = _board()
        assert not board.request_direction(Direction.LEFT)
        assert board.pending_direction is None

    def test_turn_queued_not_applied(self):
        board = _board()
        assert board.request_direction(Direction.UP)
        assert board.direction is Direction.RIGHT
        board.apply_pending_direction()
        assert board.direction is Direction.UP
        assert board.pending_direction is None

    def test_reverse_checked_against_current_heading(self):
        board = _board()
        board.request_direction(Direction.UP)
        # Still heading right, so LEFT is a reversal even after queueing UP.
        assert not board.request_direction(Direction.LEFT)
        assert board.pending_direction is Direction.UP

    def test_latest_valid_request_wins(self):
        board = _board()
        board.request_direction(Direction.UP)
        board.request_direction(Direction.DOWN)
        assert board.pending_direction is Direction.DOWN

    def test_terminated_board_refuses_input(self):
        board = _board()
        board.terminate(TerminationReason.WALL_COLLISION)
        assert not board.request_direction(Direction.UP)


class TestBoardSnapshot:
    def test_occupied_cells(self):
        board = _board(debuffs=[(1, 1)])
        assert board.occupied_cells() == {(5, 5), (4, 5), (10, 10), (1, 1)}

    def test_to_dict(self):
        board = _board(debuffs=[(1, 2)], owner_name="bo", score=20)
        data = board.to_dict()
        assert data["snake"] == [[5, 5], [4, 5]]
        assert data["direction"] == "right"
        assert data["food"] == [10, 10]
        assert data["debuffs"] == [[1, 2]]
        assert data["score"] == 20
        assert data["terminated"] is False
        assert data["ownerName"] == "bo"
        assert data["isAi"] is False
        json.dumps(data)
