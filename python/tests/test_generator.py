"""GameGenerator: goal boards and seeded scrambles."""

from __future__ import annotations

import random

from patterndb.engine.gamegenerator import GameGenerator
from patterndb.engine.gamesolver import Solver
from patterndb.engine.pathreplay import reconstruct_path
from patterndb.engine.puzzlestate import PuzzleState


def test_generate_is_seeded_and_solvable() -> None:
    a = GameGenerator.generate(4, 50, seed=7)
    b = GameGenerator.generate(4, 50, seed=7)

    assert a.tiles == b.tiles
    assert not a.is_solved()
    assert Solver.is_solvable(a)


def test_zero_moves_returns_goal() -> None:
    assert GameGenerator.generate(3, 0).is_solved()


def test_scramble_reports_moves_it_applied() -> None:
    board = GameGenerator.solved(3)
    moves = GameGenerator.scramble(board, 12, random.Random(3))

    assert len(moves) == 12
    replayed = reconstruct_path(PuzzleState.goal(3), moves)[-1]
    assert replayed.rows() == PuzzleState(board).rows()
    for prev, nxt in zip(moves, moves[1:]):
        assert nxt is not prev.opposite
