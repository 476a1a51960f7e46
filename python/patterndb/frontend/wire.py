"""Text wire format for boards: ``"1 2 3;4 5 6;7 8 0"``."""

from __future__ import annotations

from patterndb.errors import InvalidBoardError
from patterndb.models.board import Board

ROW_SEP = ";"


def parse_board(text: str) -> list[list[int]]:
    """Split ``text`` into rows of integers, checking the grid is square.

    Value checks (permutation, blank) are left to :meth:`Board.from_rows`.
    """
    rows: list[list[int]] = []
    for r, chunk in enumerate(text.strip().split(ROW_SEP)):
        tokens = chunk.split()
        if not tokens:
            raise InvalidBoardError(f"Row {r} is empty.")
        try:
            rows.append([int(tok) for tok in tokens])
        except ValueError:
            raise InvalidBoardError(
                f"Row {r} contains a non-integer value: {chunk.strip()!r}."
            ) from None

    size = len(rows)
    for r, row in enumerate(rows):
        if len(row) != size:
            raise InvalidBoardError(
                f"Expected a {size}×{size} board but row {r} has {len(row)} values."
            )
    return rows


def format_board(board: Board) -> str:
    return ROW_SEP.join(" ".join(str(v) for v in row) for row in board.tiles)
