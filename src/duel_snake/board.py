"""Per-slot simulation state."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from duel_snake.config import GameConfig
from duel_snake.grid import Coordinate, Grid
from duel_snake.oracle import PositionOracle
from duel_snake.snake import Direction, Snake

SLOT_COLORS: dict[int, str] = {1: "green", 2: "blue"}


class TerminationReason(str, enum.Enum):
    """Why a board stopped advancing."""

    WALL_COLLISION = "wallCollision"
    SELF_COLLISION = "selfCollision"
    EMPTY_SNAKE = "emptySnake"


@dataclass
class Board:
    """Everything one slot's snake lives with.

    ``debuffs`` keeps spawn order so snapshots are stable.
    """

    slot: int
    snake: Snake
    food: Coordinate
    debuffs: list[Coordinate] = field(default_factory=list)
    score: int = 0
    food_eaten_counter: int = 0
    terminated: bool = False
    termination_reason: TerminationReason | None = None
    pending_direction: Direction | None = None
    owner_name: str = ""
    is_ai: bool = False
    color: str = ""

    @classmethod
    def fresh(
        cls,
        slot: int,
        grid: Grid,
        oracle: PositionOracle,
        config: GameConfig,
        *,
        owner_name: str = "",
        is_ai: bool = False,
    ) -> Board:
        """Create a board in its start layout with food placed off the snake."""
        head = (grid.size // 4, grid.size // 2)
        snake = Snake.spawn(head, Direction.RIGHT, config.initial_snake_length)
        food = oracle.sample(set(snake.body))
        return cls(
            slot=slot,
            snake=snake,
            food=food,
            owner_name=owner_name,
            is_ai=is_ai,
            color=SLOT_COLORS.get(slot, "green"),
        )

    @property
    def direction(self) -> Direction:
        return self.snake.direction

    def request_direction(self, direction: Direction) -> bool:
        """Queue a heading change for the next tick.

        Reversals of the current heading and requests on a terminated
        board are refused. Returns whether the request was accepted.
        """
        if self.terminated:
            return False
        if direction is self.snake.direction.opposite:
            return False
        self.pending_direction = direction
        return True

    def apply_pending_direction(self) -> None:
        if self.pending_direction is not None:
            self.snake.direction = self.pending_direction
            self.pending_direction = None

    def occupied_cells(self) -> set[Coordinate]:
        """Cells a new pickup must avoid on this board."""
        cells = set(self.snake.body)
        cells.add(self.food)
        cells.update(self.debuffs)
        return cells

    def terminate(self, reason: TerminationReason) -> None:
        self.terminated = True
        self.termination_reason = reason
        self.pending_direction = None

    def to_dict(self) -> dict:
        """Serialize the board for a ``matchState`` snapshot."""
        return {
            "slot": self.slot,
            "snake": [list(seg) for seg in self.snake.body],
            "direction": self.snake.direction.wire_name,
            "score": self.score,
            "food": list(self.food),
            "debuffs": [list(d) for d in self.debuffs],
            "terminated": self.terminated,
            "ownerName": self.owner_name,
            "isAi": self.is_ai,
            "color": self.color,
        }
