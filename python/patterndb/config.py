"""Runtime settings, with defaults overridable from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from patterndb.errors import ConfigError

ROOT = Path(__file__).resolve().parent.parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_STACK_SIZE = 64 * 1024 * 1024
MIN_STACK_SIZE = 32 * 1024
DEFAULT_RECURSION_LIMIT = 10_000

_ENV_PREFIX = "PATTERNDB_"


@dataclass(frozen=True)
class Settings:
    """Knobs for loading databases and sizing the search worker."""

    data_dir: Path = field(default=DATA_DIR)
    worker_stack_size: int = DEFAULT_STACK_SIZE
    recursion_limit: int = DEFAULT_RECURSION_LIMIT
    timeout: float | None = None
    log_level: str = "WARNING"

    def database_path(self, size: int) -> Path:
        """Default resource location for a ``size``×``size`` database."""
        return self.data_dir / f"patternDb_{size}.json"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``PATTERNDB_*`` variables.

        Unset variables keep their defaults; unparsable ones raise
        :class:`ConfigError`.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        if (raw := env.get(_ENV_PREFIX + "DATA_DIR")) is not None:
            kwargs["data_dir"] = Path(raw).expanduser()
        if (raw := env.get(_ENV_PREFIX + "STACK_SIZE")) is not None:
            stack_size = _parse_positive_int("STACK_SIZE", raw)
            if stack_size < MIN_STACK_SIZE:
                raise ConfigError(
                    f"{_ENV_PREFIX}STACK_SIZE must be at least {MIN_STACK_SIZE} bytes, "
                    f"got {raw!r}"
                )
            kwargs["worker_stack_size"] = stack_size
        if (raw := env.get(_ENV_PREFIX + "RECURSION_LIMIT")) is not None:
            kwargs["recursion_limit"] = _parse_positive_int("RECURSION_LIMIT", raw)
        if (raw := env.get(_ENV_PREFIX + "TIMEOUT")) is not None:
            try:
                timeout = float(raw)
            except ValueError:
                raise ConfigError(
                    f"{_ENV_PREFIX}TIMEOUT must be a number, got {raw!r}"
                ) from None
            if timeout < 0:
                raise ConfigError(f"{_ENV_PREFIX}TIMEOUT must be >= 0, got {raw!r}")
            kwargs["timeout"] = timeout
        if (raw := env.get(_ENV_PREFIX + "LOG_LEVEL")) is not None:
            level = raw.upper()
            if not isinstance(logging.getLevelName(level), int):
                raise ConfigError(
                    f"{_ENV_PREFIX}LOG_LEVEL is not a logging level: {raw!r}"
                )
            kwargs["log_level"] = level

        return cls(**kwargs)  # type: ignore[arg-type]


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(
            f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}"
        ) from None
    if value <= 0:
        raise ConfigError(f"{_ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value
