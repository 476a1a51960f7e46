"""Run a callable on a thread with a large execution stack."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

T = TypeVar("T")

_stack_lock = threading.Lock()

# Overlapping workers share one raised limit; the last to finish restores it.
_limit_lock = threading.Lock()
_limit_users = 0
_saved_limit = 0


@contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    global _limit_users, _saved_limit
    with _limit_lock:
        if _limit_users == 0:
            _saved_limit = sys.getrecursionlimit()
        _limit_users += 1
        if sys.getrecursionlimit() < limit:
            sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        with _limit_lock:
            _limit_users -= 1
            if _limit_users == 0:
                sys.setrecursionlimit(_saved_limit)


def run_on_worker(
    fn: Callable[[], T],
    *,
    stack_size: int,
    recursion_limit: int,
    name: str = "patterndb-search",
) -> T:
    """Call ``fn`` on a fresh thread and block until it returns.

    The thread is created with ``stack_size`` bytes of stack and, while it
    runs, the interpreter recursion limit is raised to at least
    ``recursion_limit``. Exceptions raised by ``fn`` are re-raised in the
    caller.
    """
    outcome: dict[str, object] = {}

    def target() -> None:
        try:
            outcome["value"] = fn()
        except BaseException as exc:  # re-raised in the calling thread
            outcome["error"] = exc

    with _recursion_limit(recursion_limit):
        # threading.stack_size() is process-wide and only read at thread start.
        with _stack_lock:
            previous = threading.stack_size(stack_size)
            try:
                worker = threading.Thread(target=target, name=name, daemon=True)
                worker.start()
            finally:
                threading.stack_size(previous)
        worker.join()

    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return outcome["value"]  # type: ignore[return-value]
