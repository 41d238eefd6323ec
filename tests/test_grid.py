"""Tests for the Grid module."""

import pytest

from duel_snake.grid import Grid


class TestGridInit:
    def test_default_size(self):
        grid = Grid()
        assert grid.size == 20
        assert grid.area == 400

    def test_invalid_size(self):
        with pytest.raises(ValueError, match="positive"):
            Grid(0)


class TestGridBounds:
    def test_corners_in_bounds(self):
        grid = Grid(10)
        assert grid.in_bounds((0, 0))
        assert grid.in_bounds((9, 9))

    def test_outside_each_edge(self):
        grid = Grid(10)
        assert not grid.in_bounds((-1, 5))
        assert not grid.in_bounds((10, 5))
        assert not grid.in_bounds((5, -1))
        assert not grid.in_bounds((5, 10))


class TestGridRepr:
    def test_repr(self):
        assert repr(Grid(7)) == "Grid(size=7)"
