# h5scope/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all h5scope exceptions."""


# ---- Validation / construction errors ----
class InvalidChannel(CoreError):
    """Raised when a Channel / ChannelMeta is constructed with invalid inputs."""


class InvalidMeasurement(CoreError):
    """Raised when a Measurement is constructed with invalid inputs."""


class InvalidChunk(CoreError):
    """Raised when a Chunk is constructed with invalid inputs."""


class InvalidPath(CoreError, ValueError):
    """Raised when a channel id or dataset name would escape the fixed layout."""


class InvalidPolicy(CoreError, ValueError):
    """Raised when a flattening policy cannot be applied to a block."""


class ConfigError(CoreError, ValueError):
    """Raised when settings read from the environment are malformed."""


# ---- Reader state ----
class ReaderClosed(CoreError):
    """Raised when an operation needs an open file and none is open."""


class UnsupportedRank(CoreError):
    """Raised when a dataset is neither 1-D nor 2-D."""


class ChunkOutOfRange(CoreError, IndexError):
    """Raised when a chunk request starts past the end of a dataset."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class ChannelNotFound(CoreError, KeyError):
    """Raised when a requested channel id is not present."""


class DatasetNotFound(CoreError, KeyError):
    """Raised when a requested dataset is not present under a channel block."""


class UnknownHandle(CoreError, KeyError):
    """Raised when a handle id is not (or no longer) registered."""
