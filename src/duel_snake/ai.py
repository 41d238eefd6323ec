"""Scripted opponent: greedy food seeking behind a two-step safety filter."""

from __future__ import annotations

from collections.abc import Iterable

from duel_snake.board import Board
from duel_snake.grid import Coordinate, Grid
from duel_snake.snake import Direction


def _candidates(heading: Direction) -> list[Direction]:
    """All directions except the reverse of *heading*, in enumeration order."""
    return [d for d in Direction if d is not heading.opposite]


def _is_safe(cell: Coordinate, body: Iterable[Coordinate], grid: Grid) -> bool:
    return grid.in_bounds(cell) and cell not in body


def _has_follow_up(
    first: Direction,
    body: list[Coordinate],
    grid: Grid,
) -> bool:
    """Whether some second move survives after moving *first*.

    The body after the first move is the new head followed by every
    current segment but the tail.
    """
    head = first.apply(body[0])
    after = [head, *body[:-1]]
    return any(
        _is_safe(second.apply(head), after, grid)
        for second in _candidates(first)
    )


def choose_move(
    board: Board,
    grid: Grid,
    opponent: Board | None = None,
) -> Direction:
    """Pick the next heading for an AI-controlled board.

    *opponent* is accepted for signature parity with the tick loop and is
    not consulted.
    """
    heading = board.snake.direction
    body = list(board.snake.body)
    head = body[0]

    safe = [
        d for d in _candidates(heading)
        if _is_safe(d.apply(head), body, grid)
    ]
    if not safe:
        return heading

    roomy = [d for d in safe if _has_follow_up(d, body, grid)]
    pool = roomy or safe

    fx, fy = board.food

    def distance(d: Direction) -> int:
        x, y = d.apply(head)
        return abs(x - fx) + abs(y - fy)

    best = min(distance(d) for d in pool)
    closest = [d for d in pool if distance(d) == best]
    if heading in closest:
        return heading
    return closest[0]
