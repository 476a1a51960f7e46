"""Solve requests: validation, search on a worker, tagged results."""

from __future__ import annotations

import logging
import threading
from bisect import bisect_left, insort
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from patterndb.config import Settings
from patterndb.engine.gamesolver.worker import run_on_worker
from patterndb.engine.heuristic import HeuristicEvaluator
from patterndb.engine.pathreplay import reconstruct_path
from patterndb.engine.puzzlestate import PuzzleState
from patterndb.engine.search import IDAStarSearcher, SearchResult, SearchStats
from patterndb.errors import (
    DimensionMismatchError,
    InvalidBoardError,
    PatternDatabaseError,
    SearchCancelled,
    UnsolvableBoardError,
)
from patterndb.models.board import Board, Direction
from patterndb.models.database import PatternDatabase

logger = logging.getLogger(__name__)


class SolveStatus(StrEnum):
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"
    INVALID_INPUT = "invalid_input"
    RESOURCE_ERROR = "resource_error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SolveResult:
    """Tagged outcome of a solve request.

    ``moves`` and ``states`` are only populated when ``status`` is
    ``SOLVED``; ``states[0]`` is the initial board.
    """

    status: SolveStatus
    moves: tuple[Direction, ...] = ()
    states: tuple[PuzzleState, ...] = ()
    reason: str = ""
    stats: SearchStats | None = None

    @property
    def ok(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @classmethod
    def failure(
        cls, status: SolveStatus, reason: str, stats: SearchStats | None = None
    ) -> SolveResult:
        return cls(status=status, reason=reason, stats=stats)


class Solver:
    """Optimal solver bound to one pattern database."""

    def __init__(
        self, database: PatternDatabase, settings: Settings | None = None
    ) -> None:
        self.database = database
        self.settings = settings or Settings()
        self.evaluator = HeuristicEvaluator(database)

    @classmethod
    def from_path(
        cls,
        path: str | Path | None = None,
        size: int = 4,
        settings: Settings | None = None,
    ) -> Solver:
        """Load the database at ``path`` (or the default for ``size``).

        The document decides its own board size, so a board of another size
        is reported by :meth:`solve` as a dimension mismatch.
        """
        settings = settings or Settings()
        database = PatternDatabase.load(path or settings.database_path(size))
        return cls(database, settings)

    # -- public API -----------------------------------------------------------

    def solve(
        self,
        board: Board | Sequence[Sequence[int]],
        *,
        cancel_event: threading.Event | None = None,
        timeout: float | None = None,
    ) -> SolveResult:
        """Return the optimal solution of *board* as a :class:`SolveResult`.

        Input problems are reported before any search runs.
        """
        try:
            initial = self._prepare(board)
        except InvalidBoardError as exc:
            logger.info("Rejected board: %s", exc)
            return SolveResult.failure(SolveStatus.INVALID_INPUT, str(exc))

        if timeout is None:
            timeout = self.settings.timeout
        searcher = IDAStarSearcher(
            self.evaluator, cancel_event=cancel_event, timeout=timeout
        )
        try:
            result: SearchResult = run_on_worker(
                lambda: searcher.search(initial),
                stack_size=self.settings.worker_stack_size,
                recursion_limit=self.settings.recursion_limit,
            )
        except SearchCancelled as exc:
            logger.info("%s", exc)
            return SolveResult.failure(SolveStatus.CANCELLED, str(exc))

        if result.moves is None:
            return SolveResult.failure(
                SolveStatus.NO_SOLUTION, "Search space exhausted.", result.stats
            )
        return SolveResult(
            status=SolveStatus.SOLVED,
            moves=result.moves,
            states=tuple(reconstruct_path(initial, result.moves)),
            stats=result.stats,
        )

    def hint(self, board: Board | Sequence[Sequence[int]]) -> Direction | None:
        """Return the first move of an optimal solution, or ``None``."""
        result = self.solve(board)
        return result.moves[0] if result.moves else None

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if *board* can reach the goal state."""
        n = board.size
        inv = 0
        seen: list[int] = []
        for v in board.flat():
            if v == 0:
                continue
            inv += len(seen) - bisect_left(seen, v)
            insort(seen, v)
        if n % 2 == 1:
            return inv % 2 == 0
        blank_from_bottom = n - 1 - board.blank_pos[0]
        return (inv + blank_from_bottom) % 2 == 0

    # -- helpers --------------------------------------------------------------

    def _prepare(self, board: Board | Sequence[Sequence[int]]) -> PuzzleState:
        if isinstance(board, Board):
            board = Board.from_rows(board.tiles)
        else:
            board = Board.from_rows(board)
        if board.size != self.database.size:
            raise DimensionMismatchError(
                f"Board is {board.size}×{board.size} but the pattern database "
                f"is for {self.database.size}×{self.database.size}."
            )
        if not self.is_solvable(board):
            raise UnsolvableBoardError("Board cannot reach the goal configuration.")
        return PuzzleState(board)


def solve_board(
    rows: Sequence[Sequence[int]],
    database_path: str | Path | None = None,
    *,
    settings: Settings | None = None,
    timeout: float | None = None,
) -> SolveResult:
    """Load the database for ``rows``' size and solve, as one request.

    Database failures become ``RESOURCE_ERROR`` results; the board shape is
    checked first since it decides which database to load.
    """
    settings = settings or Settings()
    try:
        board = Board.from_rows(rows)
    except InvalidBoardError as exc:
        return SolveResult.failure(SolveStatus.INVALID_INPUT, str(exc))

    try:
        solver = Solver.from_path(database_path, board.size, settings)
    except PatternDatabaseError as exc:
        logger.error("%s", exc)
        return SolveResult.failure(SolveStatus.RESOURCE_ERROR, str(exc))
    return solver.solve(board, timeout=timeout)
