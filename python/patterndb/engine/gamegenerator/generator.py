"""Generates solvable boards by walking away from the goal."""

from __future__ import annotations

import random

from patterndb.engine.puzzlestate import PuzzleState
from patterndb.models.board import Board, Direction


class GameGenerator:
    """Creates solvable puzzles by random blank moves from the solved state."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        return Board.goal(size)

    @staticmethod
    def scramble(
        board: Board, moves: int, rng: random.Random | None = None
    ) -> list[Direction]:
        """Scramble *board* in-place with ``moves`` random blank moves.

        Never undoes the previous move. Returns the moves applied.
        """
        rng = rng or random.Random()
        state = PuzzleState(board)
        applied: list[Direction] = []

        for _ in range(moves):
            previous = applied[-1].opposite if applied else None
            options = [
                d for d in Direction
                if d is not previous and state.simulate_move(d)[0]
            ]
            direction = rng.choice(options)
            state.move(direction)
            applied.append(direction)
        return applied

    @staticmethod
    def generate(size: int, moves: int | None = None, seed: int | None = None) -> Board:
        """Return a random *solvable* board that is not already solved.

        ``moves`` defaults to ``size * size * 10`` random blank moves; with
        ``moves=0`` the goal itself is returned.
        """
        rng = random.Random(seed)
        if moves is None:
            moves = size * size * 10

        board = GameGenerator.solved(size)
        if moves <= 0:
            return board
        GameGenerator.scramble(board, moves, rng)

        # A walk can come back to the goal; keep going until it does not.
        while board.is_solved():
            GameGenerator.scramble(board, 2, rng)
        return board
