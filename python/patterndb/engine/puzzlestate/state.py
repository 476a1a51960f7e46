"""One board configuration and the primitive operations the search needs."""

from __future__ import annotations

from collections.abc import Sequence

from patterndb.models.board import Board, Direction
from patterndb.models.database import Fingerprint, TileGroup


class PuzzleState:
    """Owns a :class:`Board` snapshot; ``move`` is the only mutator.

    The search never shares a state between branches: children are built
    with :meth:`simulate_move`, which moves a private copy.
    """

    __slots__ = ("board",)

    def __init__(self, board: Board) -> None:
        self.board = board

    @classmethod
    def goal(cls, size: int) -> PuzzleState:
        return cls(Board.goal(size))

    @classmethod
    def from_tiles(cls, rows: Sequence[Sequence[int]]) -> PuzzleState:
        """Build a state from tile rows; raises InvalidBoardError if invalid."""
        return cls(Board.from_rows(rows))

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def blank_pos(self) -> tuple[int, int]:
        return self.board.blank_pos

    def is_solved(self) -> bool:
        return self.board.is_solved()

    def fingerprint(self, group: TileGroup) -> Fingerprint:
        """Cells held by ``group``'s tiles, in row-major scan order.

        Only the placement of the group matters: the blank and every tile
        outside the group are ignored.
        """
        return tuple(
            (r, c)
            for r, row in enumerate(self.board.tiles)
            for c, tile in enumerate(row)
            if tile in group
        )

    def rows(self) -> tuple[tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self.board.tiles)

    def to_display(self) -> str:
        return "".join(
            "".join(f"{tile}\t" for tile in row) + "\n" for row in self.board.tiles
        )

    # -- movement -------------------------------------------------------------

    def move(self, direction: Direction) -> bool:
        """Slide the blank by ``direction``.

        Returns False, leaving the state untouched, when the blank would
        leave the board.
        """
        board = self.board
        br, bc = board.blank_pos
        dr, dc = direction.delta
        tr, tc = br + dr, bc + dc

        if not (0 <= tr < board.size and 0 <= tc < board.size):
            return False

        tiles = board.tiles
        tiles[br][bc], tiles[tr][tc] = tiles[tr][tc], 0
        board.blank_pos = (tr, tc)
        return True

    def simulate_move(self, direction: Direction) -> tuple[bool, PuzzleState]:
        """Return ``(valid, child)`` without touching this state."""
        child = self.copy()
        return child.move(direction), child

    def copy(self) -> PuzzleState:
        return PuzzleState(self.board.copy())

    # -- dunder ---------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return self.board.tiles == other.board.tiles

    def __hash__(self) -> int:
        return hash(self.board.flat())

    def __repr__(self) -> str:
        return f"PuzzleState({self.board.flat()!r}, size={self.size})"
