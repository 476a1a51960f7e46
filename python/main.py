#!/usr/bin/env python3
"""Optimal sliding-tile puzzle solver.

Usage::

    python main.py solve "1 2 3 4;5 6 7 8;9 10 11 12;13 14 0 15"
    python main.py solve "8 1 3;4 0 2;7 6 5" --manhattan --plain
    python main.py build-db -s 3 -o data/patternDb_3.json
    python main.py scramble -s 4 -m 30 --seed 7
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from patterndb.config import Settings  # noqa: E402
from patterndb.engine.dbbuilder import build_pattern_database, default_groups  # noqa: E402
from patterndb.engine.gamegenerator import GameGenerator  # noqa: E402
from patterndb.engine.gamesolver import SolveResult, SolveStatus, Solver, solve_board  # noqa: E402
from patterndb.errors import ConfigError, InvalidBoardError, PatternDatabaseError  # noqa: E402
from patterndb.frontend.render import format_stats, format_trace, render_solution  # noqa: E402
from patterndb.frontend.wire import format_board, parse_board  # noqa: E402
from patterndb.logs import configure_logging  # noqa: E402
from patterndb.models.database import PatternDatabase  # noqa: E402

console = Console()
err_console = Console(stderr=True)

_EXIT_CODES = {
    SolveStatus.SOLVED: 0,
    SolveStatus.NO_SOLUTION: 1,
    SolveStatus.CANCELLED: 1,
    SolveStatus.INVALID_INPUT: 2,
    SolveStatus.RESOURCE_ERROR: 3,
}


# -- helpers ------------------------------------------------------------------


def _settings(verbose: int) -> Settings:
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from None

    if verbose >= 2:
        level: int | str = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = settings.log_level
    configure_logging(level)
    return settings


def _report(result: SolveResult, plain: bool) -> None:
    if result.ok:
        if plain:
            typer.echo(format_trace(result.states), nl=False)
            moves = " ".join(d.value for d in result.moves) or "-"
            typer.echo(f"Moves ({len(result.moves)}): {moves}")
            if result.stats is not None:
                typer.echo(format_stats(result.stats))
        else:
            render_solution(result, console)
        return

    err_console.print(f"[red]{result.status.value}:[/red] {escape(result.reason)}")
    raise typer.Exit(code=_EXIT_CODES[result.status])


def _parse_group(raw: str) -> list[int]:
    try:
        return [int(tok) for tok in raw.replace(",", " ").split()]
    except ValueError:
        raise typer.BadParameter(f"not a list of tile labels: {raw!r}") from None


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, help="Optimal sliding-tile puzzle solver.")


@app.command()
def solve(
    board: str = typer.Argument(
        ..., help='Rows separated by ";", e.g. "1 2 3;4 5 6;7 0 8".',
    ),
    database: Optional[Path] = typer.Option(
        None, "-d", "--database",
        envvar="PATTERNDB_PATH",
        help="Pattern database JSON. Defaults to data/patternDb_<N>.json.",
    ),
    manhattan: bool = typer.Option(
        False, "--manhattan",
        help="Skip the database and use plain Manhattan distance.",
    ),
    timeout: Optional[float] = typer.Option(
        None, "-t", "--timeout",
        min=0,
        help="Give up after this many seconds.",
    ),
    plain: bool = typer.Option(
        False, "--plain",
        help="Print a plain-text trace instead of Rich panels.",
    ),
    verbose: int = typer.Option(
        0, "-v", "--verbose",
        count=True,
        help="-v for progress, -vv for every IDA* iteration.",
    ),
) -> None:
    """Find a shortest solution for BOARD and print every step."""
    settings = _settings(verbose)
    try:
        rows = parse_board(board)
    except InvalidBoardError as exc:
        err_console.print(f"[red]invalid_input:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from None

    if manhattan:
        try:
            solver = Solver(PatternDatabase.manhattan_only(len(rows)), settings)
        except PatternDatabaseError as exc:
            err_console.print(f"[red]invalid_input:[/red] {escape(str(exc))}")
            raise typer.Exit(code=2) from None
        result = solver.solve(rows, timeout=timeout)
    else:
        result = solve_board(rows, database, settings=settings, timeout=timeout)
    _report(result, plain)


@app.command("build-db")
def build_db(
    size: int = typer.Option(
        4, "-s", "--size",
        min=2, max=6,
        help="Board size.",
    ),
    group: Optional[list[str]] = typer.Option(
        None, "-g", "--group",
        help='Tile labels of one group, e.g. "1 2 3 4". Repeat per group.',
    ),
    group_size: int = typer.Option(
        4, "--group-size",
        min=1,
        help="Chunk size when no --group is given.",
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output",
        help="Destination JSON. Defaults to data/patternDb_<N>.json.",
    ),
    verbose: int = typer.Option(0, "-v", "--verbose", count=True),
) -> None:
    """Precompute a pattern database by breadth-first search."""
    settings = _settings(verbose)
    groups = [_parse_group(g) for g in group] if group else default_groups(size, group_size)
    try:
        database = build_pattern_database(size, groups)
    except PatternDatabaseError as exc:
        err_console.print(f"[red]Invalid groups:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from None

    destination = output or settings.database_path(size)
    database.dump(destination)
    console.print(
        f"Wrote [bold]{database.entries}[/bold] entries in "
        f"{len(database)} groups to {destination}"
    )


@app.command()
def scramble(
    size: int = typer.Option(4, "-s", "--size", min=2, help="Board size."),
    moves: Optional[int] = typer.Option(
        None, "-m", "--moves",
        min=0,
        help="Random blank moves from the goal (default size²×10).",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed."),
) -> None:
    """Print a random solvable board in the solve wire format."""
    typer.echo(format_board(GameGenerator.generate(size, moves, seed)))


if __name__ == "__main__":
    app()
