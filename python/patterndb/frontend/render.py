"""Presentation of solve results: Rich panels or plain text."""

from __future__ import annotations

from collections.abc import Sequence

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from patterndb.engine.gamesolver import SolveResult
from patterndb.engine.puzzlestate import PuzzleState
from patterndb.engine.search import SearchStats


def format_trace(states: Sequence[PuzzleState]) -> str:
    """One ``Step i:`` block per state, tab-separated rows."""
    return "".join(
        f"Step {i}:\n{state.to_display()}\n" for i, state in enumerate(states)
    )


def format_stats(stats: SearchStats) -> str:
    return (
        f"{stats.expanded} expanded, {stats.generated} generated, "
        f"{stats.iterations} iterations, {stats.elapsed:.3f}s"
    )


# -- board rendering ----------------------------------------------------------


def render_board(state: PuzzleState) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    board = state.board
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.tiles):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif board.is_tile_correct(r, c):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def render_solution(result: SolveResult, console: Console) -> None:
    """Print every step of a solved result, then a summary line."""
    total = len(result.moves)
    for i, state in enumerate(result.states):
        caption = Text()
        if i == 0:
            caption.append("initial", style="dim")
        else:
            caption.append(f"blank {result.moves[i - 1].value}", style="dim")

        panel = Panel(
            Group(Align.center(render_board(state)), Align.center(caption)),
            title=f"[bold cyan]Step {i}/{total}[/bold cyan]",
            border_style="cyan",
            padding=(0, 2),
            expand=False,
        )
        console.print(panel)

    summary = Text()
    summary.append(f"Solved in {total} moves", style="bold green")
    if result.stats is not None:
        summary.append(f"  ({format_stats(result.stats)})", style="dim")
    console.print(summary)
