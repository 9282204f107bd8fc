# h5scope/core/policy.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

from .exceptions import InvalidPolicy


@runtime_checkable
class FlattenPolicy(Protocol):
    """Turns a 2-D block of rows read from a dataset into a 1-D array."""

    def flatten(self, block: np.ndarray) -> np.ndarray: ...


@dataclass(frozen=True, slots=True)
class ColumnSelect:
    """Keep a single column of every row (column 0 holds the min of a min/max pair)."""

    column: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.column, bool) or not isinstance(self.column, int) or self.column < 0:
            raise InvalidPolicy("ColumnSelect.column must be a non-negative int.")

    def flatten(self, block: np.ndarray) -> np.ndarray:
        block = np.asarray(block)
        if block.ndim != 2:
            raise InvalidPolicy(f"ColumnSelect expects a 2D block, got shape {block.shape}")
        if self.column >= block.shape[1]:
            raise InvalidPolicy(
                f"column {self.column} out of range for block with {block.shape[1]} columns"
            )
        return block[:, self.column]


@dataclass(frozen=True, slots=True)
class Interleave:
    """Keep every column, row by row: r0c0, r0c1, r1c0, r1c1, ..."""

    def flatten(self, block: np.ndarray) -> np.ndarray:
        block = np.asarray(block)
        if block.ndim != 2:
            raise InvalidPolicy(f"Interleave expects a 2D block, got shape {block.shape}")
        return block.reshape(-1)


FIRST_COLUMN = ColumnSelect(0)
