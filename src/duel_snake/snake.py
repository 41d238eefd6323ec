"""Snake body and heading."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable

from duel_snake.grid import Coordinate


class Direction(enum.Enum):
    """Cardinal headings with ``(dx, dy)`` vectors.

    Member order is the enumeration order used wherever candidates are
    tried in turn.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def wire_name(self) -> str:
        return self.name.lower()

    def apply(self, cell: Coordinate) -> Coordinate:
        """Return the cell one step from *cell* in this direction."""
        dx, dy = self.value
        return cell[0] + dx, cell[1] + dy

    @classmethod
    def parse(cls, raw: str) -> Direction | None:
        """Map ``"up"``/``"UP"`` etc. to a member, or ``None``."""
        return _BY_NAME.get(raw.strip().lower())


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_BY_NAME: dict[str, Direction] = {d.name.lower(): d for d in Direction}


class Snake:
    """A snake represented as an ordered deque of ``(x, y)`` segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        segments: Iterable[Coordinate],
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.body: deque[Coordinate] = deque(segments)
        self.direction = direction

    @classmethod
    def spawn(
        cls,
        head: Coordinate,
        direction: Direction = Direction.RIGHT,
        length: int = 2,
    ) -> Snake:
        """Build a straight snake whose body trails behind *head*."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        x, y = head
        return cls(((x - dx * i, y - dy * i) for i in range(length)), direction)

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Coordinate:
        """Return the head coordinate."""
        return self.body[0]

    def next_head(self) -> Coordinate:
        """Compute the next head position without moving."""
        return self.direction.apply(self.head)

    def occupies(self, cell: Coordinate) -> bool:
        """Check whether any segment, tail included, covers *cell*."""
        return cell in self.body

    def shrink(self, amount: int, min_length: int) -> int:
        """Drop up to *amount* tail segments without going below *min_length*.

        Returns the number of segments actually removed.
        """
        removed = 0
        while removed < amount and len(self.body) > min_length:
            self.body.pop()
            removed += 1
        return removed
