"""Shared fixtures: small pattern databases and a brute-force BFS oracle.

The BFS here works on flat tuples and knows nothing about the solver, so
it is an independent reference for optimality and admissibility checks.
"""

from __future__ import annotations

from collections import deque

import pytest

from patterndb.engine.dbbuilder import build_pattern_database, default_groups
from patterndb.models.database import PatternDatabase


def _neighbours(flat: tuple[int, ...], size: int) -> list[tuple[int, ...]]:
    z = flat.index(0)
    r, c = divmod(z, size)
    out: list[tuple[int, ...]] = []
    for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        nr, nc = r + dr, c + dc
        if 0 <= nr < size and 0 <= nc < size:
            j = nr * size + nc
            lst = list(flat)
            lst[z], lst[j] = lst[j], lst[z]
            out.append(tuple(lst))
    return out


def _goal(size: int) -> tuple[int, ...]:
    return tuple(range(1, size * size)) + (0,)


def bfs_distance(rows: list[list[int]], limit: int = 12) -> int:
    """Shortest number of blank moves from ``rows`` to the goal."""
    size = len(rows)
    start = tuple(v for row in rows for v in row)
    goal = _goal(size)
    depth = {start: 0}
    frontier = deque([start])
    while frontier:
        s = frontier.popleft()
        if s == goal:
            return depth[s]
        if depth[s] >= limit:
            continue
        for nxt in _neighbours(s, size):
            if nxt not in depth:
                depth[nxt] = depth[s] + 1
                frontier.append(nxt)
    raise AssertionError(f"goal not within {limit} moves")


# -- fixtures -----------------------------------------------------------------


@pytest.fixture(scope="session")
def db3() -> PatternDatabase:
    return build_pattern_database(3, default_groups(3))


@pytest.fixture(scope="session")
def db4() -> PatternDatabase:
    return build_pattern_database(4, default_groups(4))


@pytest.fixture(scope="session")
def distances3() -> dict[tuple[int, ...], int]:
    """Exact distance to the goal for every reachable 3×3 board."""
    goal = _goal(3)
    depth = {goal: 0}
    frontier = deque([goal])
    while frontier:
        s = frontier.popleft()
        for nxt in _neighbours(s, 3):
            if nxt not in depth:
                depth[nxt] = depth[s] + 1
                frontier.append(nxt)
    return depth


@pytest.fixture
def bfs():
    return bfs_distance
