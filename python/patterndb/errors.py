"""Exception hierarchy shared by every layer of the solver."""

from __future__ import annotations


class SolverError(Exception):
    """Base class for errors raised by this package."""


class InvalidBoardError(SolverError, ValueError):
    """The board is malformed: wrong shape, bad values, or not a permutation."""


class DimensionMismatchError(InvalidBoardError):
    """The board size does not match the pattern database size."""


class UnsolvableBoardError(InvalidBoardError):
    """The board is a valid permutation of the wrong parity."""


class PatternDatabaseError(SolverError):
    """The pattern database is missing, unreadable, or malformed."""


class SearchCancelled(SolverError):
    """The search was stopped by a cancellation event or a deadline."""


class ConfigError(SolverError):
    """An environment setting could not be interpreted."""
