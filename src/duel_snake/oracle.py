"""Random free-cell placement for food and debuffs."""

from __future__ import annotations

import logging
from collections.abc import Collection

import numpy as np

from duel_snake.grid import Coordinate, Grid

logger = logging.getLogger(__name__)

FALLBACK_POSITION: Coordinate = (0, 0)


class PositionOracle:
    """Samples uniformly random cells that avoid a forbidden set.

    Uses a NumPy RNG so placements are reproducible for a given seed.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def sample(self, forbidden: Collection[Coordinate]) -> Coordinate:
        """Return a free cell by rejection sampling.

        Makes at most ``grid.area`` independent draws over the whole
        grid. When none of them lands on a free cell the grid is treated
        as saturated and :data:`FALLBACK_POSITION` is returned, which may
        overlap an existing object.
        """
        blocked = forbidden if isinstance(forbidden, (set, frozenset)) else set(forbidden)
        size = self.grid.size
        for _ in range(self.grid.area):
            x, y = self.rng.integers(0, size, size=2)
            cell = (int(x), int(y))
            if cell not in blocked:
                return cell

        logger.warning(
            "No free cell found after %d attempts; falling back to %s.",
            self.grid.area,
            FALLBACK_POSITION,
        )
        return FALLBACK_POSITION
