# h5scope/api.py
"""
Process-wide entry points.

Seven plain functions over one shared reader, returning builtin values
(bool, list, dict) for a host process:

    open_file(path) -> bool
    get_channel_ids() -> list[str]
    get_channel_attributes(channel_id) -> dict[str, str]
    get_available_datasets(channel_id) -> list[str]
    get_dataset_shape(channel_id, dataset_name) -> list[int]
    read_dataset_chunk(channel_id, dataset_name, start_idx, count) -> list[int]
    close_file() -> None

Arguments of the wrong type raise TypeError straight away. Everything else
(missing file, missing channel, closed reader, unreadable data) is logged and
returned as False or an empty value.

The shared reader is not synchronized; callers serialize access. Use
h5scope.io.HandleTable to keep several files open.
"""
from __future__ import annotations

from numbers import Integral
from os import PathLike
import logging

from h5scope.config import Settings
from h5scope.core.exceptions import ConfigError
from h5scope.io.h5_reader import H5Reader


logger = logging.getLogger(__name__)

_reader: H5Reader | None = None


def default_reader() -> H5Reader:
    """Return the shared reader, creating it from the environment on first use."""
    global _reader
    if _reader is None:
        try:
            settings = Settings.from_env()
        except ConfigError as e:
            logger.error(f"Ignoring invalid H5SCOPE_* settings, using defaults: {e}")
            settings = Settings()
        _reader = H5Reader(layout=settings.layout(), policy=settings.policy())
    return _reader


def _require_str(value, what: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"String {what} expected, got {type(value).__name__}")
    return value


def _require_int(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"Integer {what} expected, got {type(value).__name__}")
    return int(value)


def open_file(path: str | PathLike) -> bool:
    if not isinstance(path, (str, PathLike)):
        raise TypeError(f"String filepath expected, got {type(path).__name__}")
    return default_reader().open(path)


def get_channel_ids() -> list[str]:
    return default_reader().get_channel_ids()


def get_channel_attributes(channel_id: str) -> dict[str, str]:
    channel_id = _require_str(channel_id, "channelId")
    return default_reader().get_channel_attributes(channel_id)


def get_available_datasets(channel_id: str) -> list[str]:
    channel_id = _require_str(channel_id, "channelId")
    return default_reader().get_available_datasets(channel_id)


def get_dataset_shape(channel_id: str, dataset_name: str) -> list[int]:
    channel_id = _require_str(channel_id, "channelId")
    dataset_name = _require_str(dataset_name, "datasetName")
    return list(default_reader().get_dataset_shape(channel_id, dataset_name))


def read_dataset_chunk(channel_id: str, dataset_name: str, start_idx: int, count: int) -> list[int]:
    channel_id = _require_str(channel_id, "channelId")
    dataset_name = _require_str(dataset_name, "datasetName")
    start_idx = _require_int(start_idx, "startIdx")
    count = _require_int(count, "count")
    data = default_reader().read_dataset_chunk(channel_id, dataset_name, start_idx, count)
    logger.debug(f"Read {data.size} values from {channel_id}/{dataset_name}")
    return data.tolist()


def close_file() -> None:
    default_reader().close()
