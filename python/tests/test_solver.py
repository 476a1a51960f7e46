"""Solver facade: tagged results for every kind of request.

Solvable boards are generated from fixed seeds so each parametrised case
is reproducible. Whenever the solver reports success, the move list is
replayed through ``PuzzleState.move`` to verify it really reaches the goal.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from patterndb.config import Settings
from patterndb.engine.gamegenerator import GameGenerator
from patterndb.engine.gamesolver import SolveStatus, Solver, solve_board
from patterndb.engine.puzzlestate import PuzzleState
from patterndb.models.board import Board, Direction
from patterndb.models.database import PatternDatabase

ONE_MOVE_4x4 = [[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12], [13, 14, 0, 15]]

_BOARDS_3x3 = [GameGenerator.generate(3, 20, seed) for seed in range(12)]


def _ids(board: Board) -> str:
    return "-".join(str(v) for v in board.flat())


# -- helpers ------------------------------------------------------------------


def _assert_solve(solver: Solver, board: Board) -> None:
    """Solve the board and verify the returned moves reach the goal state."""
    result = solver.solve(board)

    # ---- result sanity ------------------------------------------------------
    assert result.status is SolveStatus.SOLVED, result.reason
    assert all(isinstance(m, Direction) for m in result.moves)
    assert len(result.states) == len(result.moves) + 1
    assert result.states[0].board.tiles == board.tiles

    # ---- apply moves and check win ------------------------------------------
    state = PuzzleState(board.copy())
    for i, direction in enumerate(result.moves):
        assert state.move(direction), (
            f"Move {i} ({direction.value}) was invalid at blank {state.blank_pos}"
        )
        assert state == result.states[i + 1]

    assert state.is_solved(), f"Board not solved after {len(result.moves)} moves"


# -- solved results -----------------------------------------------------------


@pytest.mark.parametrize("board", _BOARDS_3x3, ids=_ids)
def test_solve_3x3(board: Board, db3: PatternDatabase) -> None:
    _assert_solve(Solver(db3), board)


def test_one_move_scenario() -> None:
    result = Solver(PatternDatabase.manhattan_only(4)).solve(ONE_MOVE_4x4)

    assert result.ok
    assert result.moves == (Direction.RIGHT,)
    assert len(result.states) == 2
    assert result.states[-1].is_solved()


def test_already_solved_board() -> None:
    result = Solver(PatternDatabase.manhattan_only(3)).solve(Board.goal(3))

    assert result.ok
    assert result.moves == ()
    assert [s.rows() for s in result.states] == [PuzzleState.goal(3).rows()]


def test_solve_does_not_touch_callers_board(db3: PatternDatabase) -> None:
    board = _BOARDS_3x3[0]
    before = [row[:] for row in board.tiles]
    Solver(db3).solve(board)
    assert board.tiles == before


# -- rejected input -----------------------------------------------------------


@pytest.mark.parametrize(
    "rows, message",
    [
        ([[1, 2, 3], [4, 5, 6]], "board needs"),
        ([[1, 2, 3], [4, 5, 6], [7, 8, 8]], "permutation"),
        ([[1, 2, 3], [4, 5, 6], [8, 7, 0]], "cannot reach"),
        (ONE_MOVE_4x4, "pattern database"),
    ],
    ids=["shape", "values", "parity", "dimension"],
)
def test_invalid_input_never_searches(
    rows: list[list[int]], message: str, db3: PatternDatabase
) -> None:
    result = Solver(db3).solve(rows)

    assert result.status is SolveStatus.INVALID_INPUT
    assert message in result.reason
    assert result.moves == () and result.states == ()
    assert result.stats is None


# -- cancellation -------------------------------------------------------------


def test_timeout_is_reported_as_cancelled(db3: PatternDatabase) -> None:
    result = Solver(db3).solve(_BOARDS_3x3[1], timeout=0)

    assert result.status is SolveStatus.CANCELLED
    assert result.moves == ()


def test_settings_timeout_applies(db3: PatternDatabase) -> None:
    result = Solver(db3, Settings(timeout=0)).solve(_BOARDS_3x3[1])
    assert result.status is SolveStatus.CANCELLED


def test_cancel_event(db3: PatternDatabase) -> None:
    event = threading.Event()
    event.set()
    result = Solver(db3).solve(_BOARDS_3x3[2], cancel_event=event)
    assert result.status is SolveStatus.CANCELLED


# -- hint / solvability -------------------------------------------------------


def test_hint_is_first_optimal_move() -> None:
    solver = Solver(PatternDatabase.manhattan_only(4))
    assert solver.hint(ONE_MOVE_4x4) is Direction.RIGHT
    assert solver.hint(Board.goal(4)) is None


@pytest.mark.parametrize(
    "flat, expected",
    [
        ([1, 2, 3, 4, 5, 6, 7, 8, 0], True),
        ([1, 2, 3, 4, 5, 6, 8, 7, 0], False),
        ([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 0, 15], True),
        ([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 15, 14, 0], False),
        ([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 13, 14, 15, 12], True),
    ],
    ids=["goal-3", "swap-3", "one-move-4", "swap-4", "blank-up-4"],
)
def test_is_solvable(flat: list[int], expected: bool) -> None:
    size = 3 if len(flat) == 9 else 4
    assert Solver.is_solvable(Board.from_flat(size, flat)) is expected


# -- request boundary ---------------------------------------------------------


def test_solve_board_missing_database(tmp_path: Path) -> None:
    result = solve_board(ONE_MOVE_4x4, tmp_path / "missing.json")

    assert result.status is SolveStatus.RESOURCE_ERROR
    assert "Cannot read" in result.reason


def test_solve_board_default_location(tmp_path: Path, db3: PatternDatabase) -> None:
    settings = Settings(data_dir=tmp_path)
    db3.dump(settings.database_path(3))

    result = solve_board([[1, 2, 3], [4, 0, 6], [7, 5, 8]], settings=settings)

    assert result.ok
    assert result.moves == (Direction.DOWN, Direction.RIGHT)


def test_solve_board_malformed_database(tmp_path: Path) -> None:
    path = tmp_path / "patternDb_3.json"
    path.write_text(json.dumps({"groups": [[1, 2]], "patternDbDict": []}))

    result = solve_board([[1, 2, 3], [4, 0, 6], [7, 5, 8]], path)
    assert result.status is SolveStatus.RESOURCE_ERROR


def test_solve_board_rejects_shape_before_loading(tmp_path: Path) -> None:
    result = solve_board([[1, 2], [3]], tmp_path / "missing.json")
    assert result.status is SolveStatus.INVALID_INPUT


def test_solve_board_database_of_other_size(
    tmp_path: Path, db4: PatternDatabase
) -> None:
    path = tmp_path / "patternDb_4.json"
    db4.dump(path)

    result = solve_board([[1, 2, 3], [4, 0, 6], [7, 5, 8]], path)

    assert result.status is SolveStatus.INVALID_INPUT
    assert "Board is 3×3 but the pattern database is for 4×4" in result.reason


@pytest.mark.parametrize(
    "groups, expected",
    [
        ([[13, 14, 15]], SolveStatus.INVALID_INPUT),
        ([[1, 2, 3, 4, 5, 6, 7, 8]], SolveStatus.SOLVED),
    ],
    ids=["4x4-document", "3x3-document"],
)
def test_solve_board_sizeless_document_decides_its_size(
    tmp_path: Path, groups: list[list[int]], expected: SolveStatus
) -> None:
    path = tmp_path / "patternDb.json"
    path.write_text(json.dumps({"groups": groups, "patternDbDict": [{}]}))

    result = solve_board([[1, 2, 3], [4, 0, 6], [7, 5, 8]], path)
    assert result.status is expected
