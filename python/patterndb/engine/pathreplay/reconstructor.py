"""Replay a move path into the boards it passes through."""

from __future__ import annotations

from collections.abc import Iterable

from patterndb.engine.puzzlestate import PuzzleState
from patterndb.models.board import Direction


def reconstruct_path(
    initial: PuzzleState, moves: Iterable[Direction]
) -> list[PuzzleState]:
    """Return ``[initial, after move 1, ..., after move k]`` as fresh copies.

    Raises ValueError if a move in the path is illegal for the board it is
    applied to.
    """
    current = initial.copy()
    states = [current.copy()]
    for i, direction in enumerate(moves):
        if not current.move(direction):
            raise ValueError(
                f"Move {i} ({direction.value}) is illegal with the blank at "
                f"{current.blank_pos}."
            )
        states.append(current.copy())
    return states
