# h5scope/config.py
"""
Runtime settings.

Read from the environment so a host process can point the shared reader at
another measurement/block without code changes:

- H5SCOPE_MEASUREMENT: measurement group id (default 00000001)
- H5SCOPE_BLOCK:       block group id (default 00000001)
- H5SCOPE_COLUMN:      column kept from 2-D datasets (default 0)
- H5SCOPE_LOG_LEVEL:   logging level used by the CLI (default WARNING)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping
import logging
import os

from h5scope.core.exceptions import ConfigError, InvalidPath, InvalidPolicy
from h5scope.core.layout import DEFAULT_BLOCK, DEFAULT_MEASUREMENT, PathLayout
from h5scope.core.policy import ColumnSelect


ENV_PREFIX = "H5SCOPE_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class Settings:
    measurement: str = DEFAULT_MEASUREMENT
    block: str = DEFAULT_BLOCK
    column: int = 0
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_level", str(self.log_level).upper())
        try:
            self.layout()
            self.policy()
        except (InvalidPath, InvalidPolicy) as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()

        raw_column = env.get(f"{ENV_PREFIX}COLUMN")
        if raw_column is None:
            column = defaults.column
        else:
            try:
                column = int(raw_column)
            except ValueError as e:
                raise ConfigError(f"{ENV_PREFIX}COLUMN must be an integer, got '{raw_column}'") from e

        return cls(
            measurement=env.get(f"{ENV_PREFIX}MEASUREMENT", defaults.measurement),
            block=env.get(f"{ENV_PREFIX}BLOCK", defaults.block),
            column=column,
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level),
        )

    def layout(self) -> PathLayout:
        return PathLayout(measurement=self.measurement, block=self.block)

    def policy(self) -> ColumnSelect:
        return ColumnSelect(self.column)


def configure_logging(level: str | int = "WARNING") -> None:
    """Send h5scope diagnostics to stderr (used by the command line entry point)."""
    if isinstance(level, str):
        level = level.upper()
        if level not in _LEVELS:
            raise ConfigError(f"log level must be one of {', '.join(_LEVELS)}, got '{level}'")
    logging.basicConfig(level=level, format=LOG_FORMAT)
