"""One-tick movement and collision resolution for a single board."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from duel_snake.board import Board, TerminationReason
from duel_snake.config import GameConfig
from duel_snake.grid import Grid
from duel_snake.oracle import PositionOracle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickOutcome:
    """What happened to one board during one tick."""

    terminated: bool = False
    reason: TerminationReason | None = None
    ate_food: bool = False
    ate_debuff: bool = False
    spawned_debuff_on_opponent: bool = False


def resolve_tick(
    board: Board,
    grid: Grid,
    oracle: PositionOracle,
    opponent: Board | None = None,
    config: GameConfig | None = None,
) -> TickOutcome:
    """Advance *board* by one tick.

    The pending direction is applied first. The new head is checked
    against the walls and then against every current segment, the tail
    included: a snake may not move into the cell its tail is about to
    vacate. Eating food grows the snake by one and, every
    ``debuff_trigger_count`` foods, drops a debuff on the opponent's
    board. Eating a debuff shrinks the snake from the tail, never below
    ``min_snake_length``.
    """
    cfg = config or GameConfig()
    if board.terminated:
        return TickOutcome(terminated=True, reason=board.termination_reason)

    board.apply_pending_direction()
    snake = board.snake
    next_head = snake.next_head()

    # --- wall check ---
    if not grid.in_bounds(next_head):
        return _terminate(board, TerminationReason.WALL_COLLISION)

    # --- self-collision check ---
    if snake.occupies(next_head):
        return _terminate(board, TerminationReason.SELF_COLLISION)

    # --- food ---
    ate_food = False
    spawned_debuff = False
    if next_head == board.food:
        ate_food = True
        board.score += cfg.food_score
        board.food_eaten_counter += 1
        board.food = oracle.sample(board.occupied_cells())
        if board.food_eaten_counter >= cfg.debuff_trigger_count:
            board.food_eaten_counter = 0
            if opponent is not None and not opponent.terminated:
                opponent.debuffs.append(oracle.sample(opponent.occupied_cells()))
                spawned_debuff = True

    # --- debuff ---
    ate_debuff = False
    shrunk = 0
    if next_head in board.debuffs:
        ate_debuff = True
        board.debuffs.remove(next_head)
        board.score = max(0, board.score - cfg.debuff_penalty)
        shrunk = snake.shrink(cfg.debuff_shrink_amount, cfg.min_snake_length)

    # --- move ---
    snake.body.appendleft(next_head)
    if not ate_food and shrunk == 0 and len(snake) > cfg.min_snake_length:
        snake.body.pop()

    if len(snake) == 0:
        return _terminate(board, TerminationReason.EMPTY_SNAKE)

    return TickOutcome(
        ate_food=ate_food,
        ate_debuff=ate_debuff,
        spawned_debuff_on_opponent=spawned_debuff,
    )


def _terminate(board: Board, reason: TerminationReason) -> TickOutcome:
    board.terminate(reason)
    logger.info(
        "Board %d terminated (%s) with score %d.",
        board.slot, reason.value, board.score,
    )
    return TickOutcome(terminated=True, reason=reason)
