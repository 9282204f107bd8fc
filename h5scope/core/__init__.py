"""
Core domain objects for h5scope.

This module defines the HDF5-agnostic data model:
- PathLayout: the fixed measurement/channel/block/dataset hierarchy
- ChannelMeta / DatasetMeta: typed views of attributes and shapes
- Channel: channel id + metadata + its datasets
- Measurement: channels of one file
- Chunk: a bounded slice of raw samples
- Result: Success / NotFound / IoError / Invalid outcomes
- FlattenPolicy: how rank-2 blocks become 1-D arrays

The core layer is independent from I/O and storage libraries.
"""

from .layout import (
    PathLayout,
    CHANNEL_ATTRIBUTES,
    STRING_ATTRIBUTES,
    NUMERIC_ATTRIBUTES,
    is_sample_dataset,
)
from .metadata import ChannelMeta, DatasetMeta, MeasurementMeta
from .channel import Channel
from .measurement import Measurement
from .chunk import Chunk
from .levels import ZoomLevel, ZOOM_LEVELS, decimation_factor, select_level
from .policy import FlattenPolicy, ColumnSelect, Interleave, FIRST_COLUMN
from .result import Result, Success, NotFound, IoError, Invalid, capture
from .exceptions import (
    CoreError,
    InvalidChannel,
    InvalidMeasurement,
    InvalidChunk,
    InvalidPath,
    InvalidPolicy,
    ConfigError,
    ReaderClosed,
    UnsupportedRank,
    ChunkOutOfRange,
    ChannelNotFound,
    DatasetNotFound,
    UnknownHandle,
)


__all__ = [
    # layout
    "PathLayout",
    "CHANNEL_ATTRIBUTES",
    "STRING_ATTRIBUTES",
    "NUMERIC_ATTRIBUTES",
    "is_sample_dataset",

    # domain objects
    "Channel",
    "Measurement",
    "Chunk",

    # metadata
    "ChannelMeta",
    "DatasetMeta",
    "MeasurementMeta",

    # levels
    "ZoomLevel",
    "ZOOM_LEVELS",
    "decimation_factor",
    "select_level",

    # policies
    "FlattenPolicy",
    "ColumnSelect",
    "Interleave",
    "FIRST_COLUMN",

    # results
    "Result",
    "Success",
    "NotFound",
    "IoError",
    "Invalid",
    "capture",

    # exceptions
    "CoreError",
    "InvalidChannel",
    "InvalidMeasurement",
    "InvalidChunk",
    "InvalidPath",
    "InvalidPolicy",
    "ConfigError",
    "ReaderClosed",
    "UnsupportedRank",
    "ChunkOutOfRange",
    "ChannelNotFound",
    "DatasetNotFound",
    "UnknownHandle",
]
