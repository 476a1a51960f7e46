"""Board model for the sliding-tile puzzle."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from patterndb.errors import InvalidBoardError


class Direction(StrEnum):
    """Displacement of the *blank* in (row, col) board indexing.

    Declaration order is the order in which the search expands children.
    """

    DOWN = "down"
    UP = "up"
    RIGHT = "right"
    LEFT = "left"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.DOWN: (1, 0),
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.LEFT: (0, -1),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.DOWN: Direction.UP,
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
}


@dataclass
class Board:
    """An N×N grid of tiles; 0 is the blank.

    ``blank_pos`` caches the blank's (row, col) and must be kept in sync
    with ``tiles`` by whoever mutates the grid.
    """

    size: int
    tiles: list[list[int]]
    blank_pos: tuple[int, int]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def goal(cls, size: int) -> Board:
        """Return the solved board: tiles in order, blank bottom-right."""
        if size < 2:
            raise InvalidBoardError(f"Board size must be at least 2, got {size}.")
        tiles = [[r * size + c + 1 for c in range(size)] for r in range(size)]
        tiles[size - 1][size - 1] = 0
        return cls(size=size, tiles=tiles, blank_pos=(size - 1, size - 1))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Board:
        """Create a board from a list of rows, validating shape and values.

        Raises :class:`InvalidBoardError` unless ``rows`` is square,
        at least 2×2, and a permutation of ``0..N²-1``.
        """
        size = len(rows)
        if size < 2:
            raise InvalidBoardError(f"Board must have at least 2 rows, got {size}.")
        for r, row in enumerate(rows):
            if len(row) != size:
                raise InvalidBoardError(
                    f"Row {r} has {len(row)} values; a {size}×{size} board "
                    f"needs {size}."
                )

        tiles = [list(row) for row in rows]
        flat = [v for row in tiles for v in row]
        if any(isinstance(v, bool) or not isinstance(v, int) for v in flat):
            raise InvalidBoardError("Board values must be integers.")
        if sorted(flat) != list(range(size * size)):
            raise InvalidBoardError(
                f"Board values must be a permutation of 0..{size * size - 1}."
            )

        blank = flat.index(0)
        return cls(size=size, tiles=tiles, blank_pos=divmod(blank, size))

    @classmethod
    def from_flat(cls, size: int, flat: Sequence[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        if len(flat) != size * size:
            raise InvalidBoardError(
                f"Expected {size * size} tiles for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        return cls.from_rows(
            [list(flat[r * size : (r + 1) * size]) for r in range(size)]
        )

    # -- queries --------------------------------------------------------------

    def is_solved(self) -> bool:
        """Every cell except the bottom-right holds ``row * N + col + 1``."""
        n = self.size
        for r, row in enumerate(self.tiles):
            for c, val in enumerate(row):
                if r == n - 1 and c == n - 1:
                    continue
                if val != r * n + c + 1:
                    return False
        return True

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if a specific tile is in its goal position."""
        val = self.tiles[row][col]
        if val == 0:
            return row == self.size - 1 and col == self.size - 1
        return (row, col) == divmod(val - 1, self.size)

    def flat(self) -> tuple[int, ...]:
        return tuple(v for row in self.tiles for v in row)

    def copy(self) -> Board:
        return Board(
            size=self.size,
            tiles=[row[:] for row in self.tiles],
            blank_pos=self.blank_pos,
        )
