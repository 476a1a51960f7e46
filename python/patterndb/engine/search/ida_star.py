"""Iterative-deepening A* over blank moves."""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import perf_counter

from patterndb.engine.puzzlestate import PuzzleState
from patterndb.errors import SearchCancelled
from patterndb.models.board import Direction

logger = logging.getLogger(__name__)

Heuristic = Callable[[PuzzleState], int]

# Returned up the recursion once a solved state is reached.
_FOUND = -1


@dataclass
class SearchStats:
    expanded: int = 0
    generated: int = 0
    iterations: int = 0
    max_depth: int = 0
    bound: float = 0
    elapsed: float = 0.0


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search: ``moves`` is None when no solution exists."""

    moves: tuple[Direction, ...] | None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def found(self) -> bool:
        return self.moves is not None


class IDAStarSearcher:
    """Optimal solver: repeated bounded depth-first search.

    The bound starts at the heuristic value of the initial state and is
    raised, after each exhausted iteration, to the smallest ``f = g + h``
    seen beyond it. Children are expanded in :class:`Direction` order and
    the move undoing the previous one is never tried. Longer cycles are
    not detected.

    ``cancel_event`` and ``timeout`` are checked at every node and raise
    :class:`SearchCancelled`. ``max_depth`` caps the bound: once the next
    iteration would exceed it the search gives up with no solution.
    """

    def __init__(
        self,
        heuristic: Heuristic,
        *,
        cancel_event: threading.Event | None = None,
        timeout: float | None = None,
        max_depth: int | None = None,
    ) -> None:
        self.heuristic = heuristic
        self.cancel_event = cancel_event
        self.timeout = timeout
        self.max_depth = max_depth

        self._deadline: float | None = None
        self._stats = SearchStats()
        self._path: list[Direction] = []

    def search(self, initial: PuzzleState) -> SearchResult:
        t0 = perf_counter()
        self._deadline = None if self.timeout is None else t0 + self.timeout
        self._stats = stats = SearchStats()
        self._path = []

        h0 = self.heuristic(initial)
        bound: float = h0
        while True:
            if self.max_depth is not None and bound > self.max_depth:
                logger.info("No solution within %d moves", self.max_depth)
                stats.elapsed = perf_counter() - t0
                return SearchResult(None, stats)

            stats.iterations += 1
            stats.bound = bound
            logger.debug("IDA* iteration %d: bound=%s", stats.iterations, bound)

            t = self._dfs(initial, 0, bound, h0)
            stats.elapsed = perf_counter() - t0

            if t == _FOUND:
                moves = tuple(self._path)
                logger.info(
                    "Solved in %d moves (%d expanded, %d iterations, %.3fs)",
                    len(moves), stats.expanded, stats.iterations, stats.elapsed,
                )
                return SearchResult(moves, stats)
            if t == math.inf:
                logger.info("Search space exhausted after %d iterations", stats.iterations)
                return SearchResult(None, stats)
            bound = t

    def _dfs(self, state: PuzzleState, g: int, bound: float, h: int) -> float:
        """Explore below ``state``; return _FOUND or the smallest excess f."""
        self._check_cancelled()

        f = g + h
        if f > bound:
            return f
        if g > self._stats.max_depth:
            self._stats.max_depth = g
        if state.is_solved():
            return _FOUND

        self._stats.expanded += 1
        path = self._path
        previous = path[-1].opposite if path else None
        minimum = math.inf

        for direction in Direction:
            if direction is previous:
                continue
            valid, child = state.simulate_move(direction)
            if not valid:
                continue

            self._stats.generated += 1
            path.append(direction)
            t = self._dfs(child, g + 1, bound, self.heuristic(child))
            if t == _FOUND:
                return _FOUND
            path.pop()
            if t < minimum:
                minimum = t

        return minimum

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SearchCancelled("Search cancelled.")
        if self._deadline is not None and perf_counter() >= self._deadline:
            raise SearchCancelled(f"Search exceeded {self.timeout:g}s timeout.")
