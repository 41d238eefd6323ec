"""Square playing field shared by both boards."""

from __future__ import annotations

Coordinate = tuple[int, int]


class Grid:
    """Immutable square grid of side ``size``.

    Coordinates are ``(x, y)`` with ``x`` growing to the right and ``y``
    growing downwards, both in ``[0, size)``.
    """

    __slots__ = ("_size",)

    def __init__(self, size: int = 20) -> None:
        if size < 1:
            raise ValueError("Grid size must be positive.")
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    @property
    def area(self) -> int:
        return self._size * self._size

    def in_bounds(self, cell: Coordinate) -> bool:
        """Check whether a coordinate lies within the grid."""
        x, y = cell
        return 0 <= x < self._size and 0 <= y < self._size

    def __repr__(self) -> str:
        return f"Grid(size={self._size})"
