"""Optimal sliding-tile puzzle solver (IDA* + pattern databases)."""

__version__ = "0.1.0"
