"""Tests for the PositionOracle module."""

import logging

import numpy as np

from duel_snake.grid import Grid
from duel_snake.oracle import FALLBACK_POSITION, PositionOracle


class TestOracleSampling:
    def test_sample_in_bounds(self):
        grid = Grid(10)
        oracle = PositionOracle(grid, np.random.default_rng(0))
        for _ in range(50):
            assert grid.in_bounds(oracle.sample(set()))

    def test_sample_avoids_forbidden(self):
        grid = Grid(5)
        oracle = PositionOracle(grid, np.random.default_rng(1))
        forbidden = {(x, y) for x in range(5) for y in range(5)} - {(3, 2)}
        # Only one free cell; most seeds find it within 25 draws.
        found = oracle.sample(forbidden)
        assert found in {(3, 2), FALLBACK_POSITION}
        for _ in range(20):
            cell = oracle.sample({(0, 0), (1, 1)})
            assert cell not in {(0, 0), (1, 1)}

    def test_accepts_any_collection(self):
        oracle = PositionOracle(Grid(6), np.random.default_rng(2))
        cell = oracle.sample([(0, 0), (1, 0)])
        assert cell not in {(0, 0), (1, 0)}

    def test_returns_plain_ints(self):
        oracle = PositionOracle(Grid(6), np.random.default_rng(3))
        x, y = oracle.sample(set())
        assert type(x) is int
        assert type(y) is int


class TestOracleDeterminism:
    def test_same_seed_same_cells(self):
        a = PositionOracle(Grid(20), np.random.default_rng(123))
        b = PositionOracle(Grid(20), np.random.default_rng(123))
        assert [a.sample(set()) for _ in range(10)] == [
            b.sample(set()) for _ in range(10)
        ]


class TestOracleSaturation:
    def test_full_grid_falls_back_with_warning(self, caplog):
        grid = Grid(5)
        oracle = PositionOracle(grid, np.random.default_rng(0))
        everything = {(x, y) for x in range(5) for y in range(5)}
        with caplog.at_level(logging.WARNING, logger="duel_snake.oracle"):
            cell = oracle.sample(everything)
        assert cell == FALLBACK_POSITION
        assert "No free cell" in caplog.text
