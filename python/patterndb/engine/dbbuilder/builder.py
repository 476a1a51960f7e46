"""Offline construction of additive pattern databases.

For each tile group a breadth-first search runs from the goal over the
placements of that group's tiles alone. A group tile may step onto any
orthogonally adjacent cell not held by another group tile (the blank is
assumed to be wherever it is needed), and each step costs one move.
Tiles outside the group cost nothing, which is what makes the tables of
disjoint groups safe to add.

The table is keyed by fingerprint, which records *which cells* the group
occupies but not which tile sits where, so each entry is the smallest
depth over every assignment of tiles to those cells.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Sequence

from patterndb.models.database import Fingerprint, PatternDatabase

logger = logging.getLogger(__name__)


def default_groups(size: int, group_size: int = 4) -> list[list[int]]:
    """Split ``1..size²-1`` into consecutive groups of ``group_size`` tiles."""
    if group_size < 1:
        raise ValueError(f"group_size must be positive, got {group_size}")
    tiles = list(range(1, size * size))
    return [tiles[i : i + group_size] for i in range(0, len(tiles), group_size)]


def build_pattern_database(
    size: int, groups: Iterable[Iterable[int]]
) -> PatternDatabase:
    """Build the tables for ``groups`` on a ``size``×``size`` board."""
    groups = [sorted(set(g)) for g in groups]
    # Reject bad labels or overlaps before spending time on the searches.
    PatternDatabase(size, groups, [{} for _ in groups])
    tables = [_build_table(size, group) for group in groups]
    database = PatternDatabase(size, groups, tables)
    logger.info(
        "Built %d×%d pattern database: %d groups, %d entries",
        size, size, len(database), database.entries,
    )
    return database


def _neighbours(size: int) -> list[tuple[int, ...]]:
    adj: list[tuple[int, ...]] = []
    for i in range(size * size):
        r, c = divmod(i, size)
        nb: list[int] = []
        if r > 0:
            nb.append(i - size)
        if r < size - 1:
            nb.append(i + size)
        if c > 0:
            nb.append(i - 1)
        if c < size - 1:
            nb.append(i + 1)
        adj.append(tuple(nb))
    return adj


def _fingerprint(cells: Sequence[int], size: int) -> Fingerprint:
    return tuple(divmod(cell, size) for cell in sorted(cells))


def _build_table(size: int, tiles: Sequence[int]) -> dict[Fingerprint, int]:
    adj = _neighbours(size)
    # State: flat cell of each tile, in ``tiles`` order.
    start = tuple(t - 1 for t in tiles)

    depth_of: dict[tuple[int, ...], int] = {start: 0}
    table: dict[Fingerprint, int] = {_fingerprint(start, size): 0}
    frontier = deque([start])

    while frontier:
        cells = frontier.popleft()
        depth = depth_of[cells] + 1
        occupied = set(cells)
        for i, cell in enumerate(cells):
            for target in adj[cell]:
                if target in occupied:
                    continue
                nxt = cells[:i] + (target,) + cells[i + 1 :]
                if nxt in depth_of:
                    continue
                depth_of[nxt] = depth
                frontier.append(nxt)
                table.setdefault(_fingerprint(nxt, size), depth)

    logger.debug(
        "Group %s: %d placements, %d fingerprints",
        list(tiles), len(depth_of), len(table),
    )
    return table
