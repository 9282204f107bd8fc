from __future__ import annotations

from os import PathLike, fspath
from typing import Callable, List, Protocol, Type, TypeVar
import logging

import h5py  # pivotal dependency for HDF5 file handling
import numpy as np

from h5scope.core.chunk import Chunk
from h5scope.core.exceptions import (
    ChannelNotFound,
    ChunkOutOfRange,
    CoreError,
    DatasetNotFound,
    ReaderClosed,
    UnsupportedRank,
)
from h5scope.core.layout import (
    NUMERIC_ATTRIBUTES,
    STRING_ATTRIBUTES,
    PathLayout,
    is_sample_dataset,
)
from h5scope.core.levels import decimation_factor, select_level
from h5scope.core.policy import FIRST_COLUMN, FlattenPolicy
from h5scope.core.result import Result, capture


logger = logging.getLogger(__name__)

T = TypeVar("T")

SAMPLE_DTYPE = np.uint16


class ChannelSource(Protocol):
    """Protocol for channel readers.

    Implementations expose the fixed measurement hierarchy of one open file.
    """

    def channel_ids(self) -> List[str]:
        ...

    def channel_attributes(self, channel_id: str) -> dict[str, str]:
        ...

    def available_datasets(self, channel_id: str) -> List[str]:
        ...

    def dataset_shape(self, channel_id: str, dataset_name: str) -> tuple[int, ...]:
        ...

    def read_chunk(
        self,
        channel_id: str,
        dataset_name: str,
        start: int,
        count: int,
    ) -> np.ndarray:
        ...


def _scalar(value):
    """Unwrap size-1 arrays, which is how some writers store scalar attributes."""
    if isinstance(value, np.ndarray):
        if value.size != 1:
            raise ValueError(f"expected a scalar attribute, got shape {value.shape}")
        return value.reshape(-1)[0]
    return value


def _attr_text(value) -> str:
    value = _scalar(value)
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, str):
        return str(value)
    raise TypeError(f"expected a string attribute, got {type(value).__name__}")


def _attr_number_text(value) -> str:
    """Render a numeric attribute so that float(result) gives the stored value back."""
    value = _scalar(value)
    if isinstance(value, (bool, np.bool_)) or not isinstance(
        value, (int, float, np.integer, np.floating)
    ):
        raise TypeError(f"expected a numeric attribute, got {type(value).__name__}")
    return repr(float(value))


class H5Reader:
    """Read-only accessor over one HDF5 measurement file.

    Every object is addressed through `layout` (by default
    ``measurements/00000001/channels/<id>/blocks/00000001/<dataset>``).

    Three ways to call it:
    - strict methods (`channel_ids`, `read_chunk`, ...) raise CoreError
      subclasses or the OSError h5py raises;
    - `attempt(method, *args)` returns a Result instead of raising;
    - lenient `get_*` methods log a diagnostic and return an empty value.
    """

    def __init__(
        self,
        layout: PathLayout | None = None,
        policy: FlattenPolicy | None = None,
    ):
        self.layout = layout if layout is not None else PathLayout()
        self.policy = policy if policy is not None else FIRST_COLUMN
        self._file: h5py.File | None = None
        self._path: str | None = None

    @classmethod
    def from_path(
        cls,
        path: str | PathLike,
        layout: PathLayout | None = None,
        policy: FlattenPolicy | None = None,
    ) -> "H5Reader":
        """Open `path` and return the reader; raises OSError if it cannot be opened."""
        reader = cls(layout=layout, policy=policy)
        reader._open(path)
        return reader

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _open(self, path: str | PathLike) -> None:
        self.close()
        path = fspath(path)
        self._file = h5py.File(path, "r")
        self._path = path
        logger.info(f"Opened HDF5 file: {path}")

    def open(self, path: str | PathLike) -> bool:
        """Open `path` read-only, replacing any open file.

        Returns False (and leaves the reader closed) if the file is missing,
        unreadable or not HDF5.
        """
        try:
            self._open(path)
        except (OSError, ValueError) as e:
            logger.error(f"Error opening file {path}: {e}")
            self._file = None
            self._path = None
            return False
        return True

    def close(self) -> None:
        if self._file is None:
            return
        self._file.close()
        logger.info(f"Closed HDF5 file: {self._path}")
        self._file = None
        self._path = None

    @property
    def is_open(self) -> bool:
        return self._file is not None and bool(self._file)

    @property
    def path(self) -> str | None:
        return self._path

    def __enter__(self) -> "H5Reader":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def _require_file(self) -> h5py.File:
        if not self.is_open:
            raise ReaderClosed("No HDF5 file is open.")
        return self._file  # type: ignore[return-value]

    def _group(self, path: str, missing: Type[CoreError]) -> h5py.Group:
        f = self._require_file()
        try:
            obj = f[path]
        except KeyError as e:
            raise missing(path) from e
        if not isinstance(obj, h5py.Group):
            raise missing(path)
        return obj

    def _dataset(self, channel_id: str, dataset_name: str) -> h5py.Dataset:
        f = self._require_file()
        path = self.layout.dataset_path(channel_id, dataset_name)
        try:
            obj = f[path]
        except KeyError as e:
            raise DatasetNotFound(path) from e
        if not isinstance(obj, h5py.Dataset):
            raise DatasetNotFound(path)
        return obj

    # ------------------------------------------------------------------
    # ChannelSource implementation
    # ------------------------------------------------------------------
    def channel_ids(self) -> List[str]:
        group = self._group(self.layout.channels_path, ChannelNotFound)
        channels = list(group.keys())
        logger.info(f"Found {len(channels)} channels")
        return channels

    def channel_attributes(self, channel_id: str) -> dict[str, str]:
        """Read the allow-listed attributes of a channel.

        Each attribute is read on its own; one that is missing or has an
        unexpected type is left out of the result.
        """
        group = self._group(self.layout.channel_path(channel_id), ChannelNotFound)
        attrs = group.attrs
        result: dict[str, str] = {}

        readers: list[tuple[tuple[str, ...], Callable[[object], str]]] = [
            (STRING_ATTRIBUTES, _attr_text),
            (NUMERIC_ATTRIBUTES, _attr_number_text),
        ]
        for names, convert in readers:
            for name in names:
                try:
                    if name in attrs:
                        result[name] = convert(attrs[name])
                except (OSError, TypeError, ValueError) as e:
                    logger.debug(f"Skipping attribute {name} of channel {channel_id}: {e}")
        return result

    def available_datasets(self, channel_id: str) -> List[str]:
        block = self._group(self.layout.block_path(channel_id), ChannelNotFound)
        datasets = [name for name in block.keys() if is_sample_dataset(name)]
        logger.info(f"Channel {channel_id} has {len(datasets)} datasets")
        return datasets

    def dataset_shape(self, channel_id: str, dataset_name: str) -> tuple[int, ...]:
        shape = tuple(int(d) for d in self._dataset(channel_id, dataset_name).shape)
        logger.debug(f"Dataset {dataset_name} shape: {shape}")
        return shape

    def read_chunk(
        self,
        channel_id: str,
        dataset_name: str,
        start: int,
        count: int,
    ) -> np.ndarray:
        """Read up to `count` rows starting at row `start`.

        The count is clamped to the rows left after `start`. Rank-2 blocks
        are reduced to one value per row (or more) by `self.policy`.
        """
        if start < 0 or count < 0:
            raise ChunkOutOfRange(f"start and count must be non-negative, got {start}, {count}")

        dataset = self._dataset(channel_id, dataset_name)
        dims = dataset.shape
        if len(dims) not in (1, 2):
            raise UnsupportedRank(f"{dataset_name} has rank {len(dims)}; only 1 and 2 are supported")
        if start > dims[0]:
            raise ChunkOutOfRange(f"start {start} beyond length {dims[0]} of {dataset_name}")

        actual = min(count, dims[0] - start)
        logger.info(f"Reading {actual} samples from {dataset_name} starting at {start}")
        if actual == 0:
            return np.empty(0, dtype=SAMPLE_DTYPE)

        stop = start + actual
        if len(dims) == 1:
            data = dataset[start:stop]
        else:
            data = self.policy.flatten(dataset[start:stop, :])

        return np.asarray(data).astype(SAMPLE_DTYPE, copy=False)

    def read(
        self,
        channel_id: str,
        dataset_name: str,
        start: int,
        count: int,
    ) -> Chunk:
        values = self.read_chunk(channel_id, dataset_name, start, count)
        return Chunk(
            channel_id=channel_id,
            dataset=dataset_name,
            start=int(start),
            values=values,
            decimation=decimation_factor(dataset_name) or 1,
        )

    def read_range(
        self,
        channel_id: str,
        start: int,
        stop: int,
        zoom_ratio: float,
        max_points: int | None = None,
    ) -> Chunk:
        """Read raw-rate samples [start, stop) from the level suited to `zoom_ratio`.

        The level is picked by `select_level`; the range is mapped onto its
        rows (start rounded down, stop rounded up) and optionally capped at
        `max_points` rows.
        """
        if start < 0 or stop < start:
            raise ChunkOutOfRange(f"invalid sample range [{start}, {stop})")
        if max_points is not None and max_points < 0:
            raise ChunkOutOfRange(f"max_points must be non-negative, got {max_points}")

        dataset_name = select_level(self.available_datasets(channel_id), zoom_ratio)
        if dataset_name is None:
            raise DatasetNotFound(self.layout.block_path(channel_id))

        factor = decimation_factor(dataset_name) or 1
        row_start = start // factor
        row_stop = -(-stop // factor)
        count = row_stop - row_start
        if max_points is not None:
            count = min(count, max_points)

        logger.info(
            f"Zoom {zoom_ratio:g} on channel {channel_id}: {dataset_name}, rows {row_start}+{count}"
        )
        return self.read(channel_id, dataset_name, row_start, count)

    # ------------------------------------------------------------------
    # Result / lenient views
    # ------------------------------------------------------------------
    def attempt(self, method: Callable[..., T], *args) -> Result[T]:
        """Run one of the strict methods and return its Result."""
        return capture(method, *args)

    def _lenient(self, what: str, default: T, method: Callable[..., T], *args) -> T:
        result = capture(method, *args)
        if not result.ok:
            logger.warning(f"Error reading {what}: {result.reason}")
        return result.unwrap_or(default)

    def get_channel_ids(self) -> List[str]:
        return self._lenient("channels", [], self.channel_ids)

    def get_channel_attributes(self, channel_id: str) -> dict[str, str]:
        return self._lenient(f"attributes for {channel_id}", {}, self.channel_attributes, channel_id)

    def get_available_datasets(self, channel_id: str) -> List[str]:
        return self._lenient(f"datasets for {channel_id}", [], self.available_datasets, channel_id)

    def get_dataset_shape(self, channel_id: str, dataset_name: str) -> tuple[int, ...]:
        return self._lenient(
            f"shape for {dataset_name}", (), self.dataset_shape, channel_id, dataset_name
        )

    def read_dataset_chunk(
        self,
        channel_id: str,
        dataset_name: str,
        start: int,
        count: int,
    ) -> np.ndarray:
        return self._lenient(
            "data chunk",
            np.empty(0, dtype=SAMPLE_DTYPE),
            self.read_chunk,
            channel_id,
            dataset_name,
            start,
            count,
        )
