# h5scope/core/chunk.py
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .exceptions import InvalidChunk
from .metadata import ChannelMeta


@dataclass(frozen=True, slots=True)
class Chunk:
    """Immutable slice of a dataset: raw uint16 samples plus where they came from."""

    channel_id: str
    dataset: str
    start: int
    values: np.ndarray = field(repr=False)
    decimation: int = 1

    def __post_init__(self) -> None:
        v = np.asarray(self.values)

        if v.ndim != 1:
            raise InvalidChunk(f"`values` must be 1D, got shape {v.shape}")
        if v.dtype != np.uint16:
            raise InvalidChunk(f"`values` must be uint16, got {v.dtype}")
        if not isinstance(self.start, int) or self.start < 0:
            raise InvalidChunk("`start` must be a non-negative int.")
        if not isinstance(self.decimation, int) or self.decimation < 1:
            raise InvalidChunk("`decimation` must be a positive int.")

        object.__setattr__(self, "values", v)

    @property
    def n(self) -> int:
        return int(self.values.size)

    @property
    def stop(self) -> int:
        return self.start + self.n

    def sample_indices(self) -> np.ndarray:
        """Raw-rate sample index of every value (row index times decimation)."""
        return (np.arange(self.start, self.stop, dtype=np.int64)) * self.decimation

    def to_volts(self, meta: ChannelMeta) -> np.ndarray:
        return self.values.astype(np.float64) * meta.bin_to_volt_factor + meta.bin_to_volt_constant

    def tolist(self) -> list[int]:
        return self.values.tolist()
