"""Pattern database: per-group tables of exact moves-to-goal.

A database pairs each tile group with a table keyed by the group's
*fingerprint*, the row-major list of cells its tiles occupy. The resource
document on disk looks like::

    {
      "size": 4,
      "groups": [[1, 2, 3], [4, 5, 6]],
      "patternDbDict": [{"0:0,0:1,0:2": 0, ...}, {...}]
    }

Keys written by older tools concatenate single-digit coordinates
(``"000102"``); those are still accepted for boards up to 10×10.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from patterndb.errors import PatternDatabaseError

logger = logging.getLogger(__name__)

TileGroup = frozenset[int]
Fingerprint = tuple[tuple[int, int], ...]

_LEGACY_MAX_SIZE = 10


# -- fingerprint keys ---------------------------------------------------------


def encode_fingerprint(fingerprint: Fingerprint) -> str:
    return ",".join(f"{r}:{c}" for r, c in fingerprint)


def decode_fingerprint(key: str, size: int) -> Fingerprint:
    """Parse a resource key into a structured fingerprint."""
    if ":" in key:
        try:
            pairs = [part.split(":") for part in key.split(",")]
            return tuple((int(r), int(c)) for r, c in pairs)
        except ValueError:
            raise PatternDatabaseError(f"Malformed fingerprint key {key!r}.") from None

    if not key.isdigit() or len(key) % 2:
        raise PatternDatabaseError(f"Malformed fingerprint key {key!r}.")
    if size > _LEGACY_MAX_SIZE:
        raise PatternDatabaseError(
            f"Digit-pair key {key!r} is ambiguous on a {size}×{size} board."
        )
    return tuple((int(key[i]), int(key[i + 1])) for i in range(0, len(key), 2))


# -- database -----------------------------------------------------------------


@dataclass(frozen=True, eq=False, repr=False)
class PatternDatabase:
    """Immutable, shareable set of (group, table) pairs for one board size."""

    size: int
    groups: tuple[TileGroup, ...]
    tables: tuple[Mapping[Fingerprint, int], ...]

    def __init__(
        self,
        size: int,
        groups: Iterable[Iterable[int]],
        tables: Iterable[Mapping[Fingerprint, int]],
    ) -> None:
        frozen_groups = tuple(frozenset(g) for g in groups)
        frozen_tables = tuple(MappingProxyType(dict(t)) for t in tables)
        object.__setattr__(self, "size", size)
        object.__setattr__(self, "groups", frozen_groups)
        object.__setattr__(self, "tables", frozen_tables)
        self._validate()

    def _validate(self) -> None:
        n = self.size
        if n < 2:
            raise PatternDatabaseError(f"Database size must be at least 2, got {n}.")
        if len(self.groups) != len(self.tables):
            raise PatternDatabaseError(
                f"{len(self.groups)} groups but {len(self.tables)} tables."
            )

        seen: set[int] = set()
        for i, group in enumerate(self.groups):
            if not group:
                raise PatternDatabaseError(f"Group {i} is empty.")
            bad = [t for t in group if not 1 <= t < n * n]
            if bad:
                raise PatternDatabaseError(
                    f"Group {i} has labels outside 1..{n * n - 1}: {sorted(bad)}."
                )
            overlap = seen & group
            if overlap:
                raise PatternDatabaseError(
                    f"Group {i} overlaps an earlier group on {sorted(overlap)}."
                )
            seen |= group

        for i, (group, table) in enumerate(zip(self.groups, self.tables)):
            for fingerprint, moves in table.items():
                if len(fingerprint) != len(group) or not all(
                    0 <= r < n and 0 <= c < n for r, c in fingerprint
                ):
                    raise PatternDatabaseError(
                        f"Table {i} has key {encode_fingerprint(fingerprint)!r} "
                        f"that does not place {len(group)} tiles on a "
                        f"{n}×{n} board."
                    )
                if isinstance(moves, bool) or not isinstance(moves, int) or moves < 0:
                    raise PatternDatabaseError(
                        f"Table {i} maps {encode_fingerprint(fingerprint)!r} "
                        f"to {moves!r}; expected a non-negative integer."
                    )

    # -- container protocol ---------------------------------------------------

    def __iter__(self) -> Iterator[tuple[TileGroup, Mapping[Fingerprint, int]]]:
        return iter(zip(self.groups, self.tables))

    def __len__(self) -> int:
        return len(self.groups)

    def __repr__(self) -> str:
        return (
            f"PatternDatabase(size={self.size}, groups={len(self.groups)}, "
            f"entries={self.entries})"
        )

    @property
    def entries(self) -> int:
        return sum(len(t) for t in self.tables)

    # -- construction ---------------------------------------------------------

    @classmethod
    def manhattan_only(cls, size: int) -> PatternDatabase:
        """A database whose every lookup misses, i.e. plain Manhattan distance."""
        return cls(size, [range(1, size * size)], [{}])

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], size: int | None = None
    ) -> PatternDatabase:
        """Build a database from a decoded resource document."""
        if not isinstance(data, Mapping):
            raise PatternDatabaseError("Pattern database document must be an object.")
        try:
            raw_groups = data["groups"]
            raw_tables = data["patternDbDict"]
        except KeyError as exc:
            raise PatternDatabaseError(f"Missing field {exc.args[0]!r}.") from None
        if not isinstance(raw_groups, list) or not isinstance(raw_tables, list):
            raise PatternDatabaseError("'groups' and 'patternDbDict' must be arrays.")
        if len(raw_groups) != len(raw_tables):
            raise PatternDatabaseError(
                f"'groups' has {len(raw_groups)} entries but 'patternDbDict' "
                f"has {len(raw_tables)}."
            )

        groups: list[list[int]] = []
        for i, group in enumerate(raw_groups):
            if not isinstance(group, list) or not all(
                isinstance(t, int) and not isinstance(t, bool) for t in group
            ):
                raise PatternDatabaseError(f"Group {i} must be an array of integers.")
            groups.append(group)

        if size is None:
            size = data.get("size")
        if size is None:
            size = _infer_size(groups)
        elif isinstance(size, bool) or not isinstance(size, int):
            raise PatternDatabaseError(f"'size' must be an integer, got {size!r}.")
        elif "size" in data and data["size"] != size:
            raise PatternDatabaseError(
                f"Document is for {data['size']}×{data['size']} boards, "
                f"expected {size}×{size}."
            )

        tables: list[dict[Fingerprint, int]] = []
        for i, table in enumerate(raw_tables):
            if not isinstance(table, Mapping):
                raise PatternDatabaseError(f"Table {i} must be an object.")
            tables.append(
                {decode_fingerprint(key, size): moves for key, moves in table.items()}
            )

        return cls(size, groups, tables)

    @classmethod
    def load(cls, path: str | Path, size: int | None = None) -> PatternDatabase:
        """Read a JSON resource; every failure surfaces as PatternDatabaseError."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PatternDatabaseError(
                f"Cannot read pattern database {path}: {exc.strerror or exc}"
            ) from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PatternDatabaseError(
                f"Pattern database {path} is not valid JSON: {exc}"
            ) from exc

        database = cls.from_dict(data, size)
        logger.info(
            "Loaded pattern database %s: %d×%d, %d groups, %d entries",
            path, database.size, database.size, len(database), database.entries,
        )
        return database

    # -- serialisation --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "groups": [sorted(g) for g in self.groups],
            "patternDbDict": [
                {encode_fingerprint(fp): moves for fp, moves in table.items()}
                for table in self.tables
            ],
        }

    def dump(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), separators=(",", ":")) + "\n")
        logger.info("Wrote pattern database %s (%d entries)", path, self.entries)


def _infer_size(groups: list[list[int]]) -> int:
    labels = [t for g in groups for t in g]
    if not labels:
        raise PatternDatabaseError("Cannot infer board size from empty groups.")
    return max(2, math.isqrt(max(max(labels), 0)) + 1)
