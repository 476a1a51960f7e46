"""Additive pattern-database heuristic with a Manhattan fallback."""

from __future__ import annotations

from patterndb.engine.puzzlestate import PuzzleState
from patterndb.models.database import PatternDatabase, TileGroup


def manhattan(state: PuzzleState, group: TileGroup) -> int:
    """Sum of |dest_row - row| + |dest_col - col| over the group's tiles."""
    n = state.size
    dist = 0
    for r, row in enumerate(state.board.tiles):
        for c, tile in enumerate(row):
            if tile != 0 and tile in group:
                gr, gc = divmod(tile - 1, n)
                dist += abs(gr - r) + abs(gc - c)
    return dist


class HeuristicEvaluator:
    """Admissible lower bound on the moves needed to solve a state.

    Each group contributes its table entry for the state's fingerprint, or
    its Manhattan distance when the fingerprint is missing. Groups are
    disjoint, so the contributions add up without overcounting.

    Holds no mutable state; one evaluator (and its database) can serve
    any number of concurrent searches.
    """

    def __init__(self, database: PatternDatabase) -> None:
        self.database = database

    @property
    def size(self) -> int:
        return self.database.size

    def estimate(self, state: PuzzleState) -> int:
        h = 0
        for group, table in self.database:
            moves = table.get(state.fingerprint(group))
            h += manhattan(state, group) if moves is None else moves
        return h

    __call__ = estimate
