# h5scope/core/result.py
"""
Outcome of a reader operation.

Strict reader methods raise; :func:`capture` turns those exceptions into one
of four values so a caller can decide whether to log, surface or ignore:

- Success(value)
- NotFound(reason): channel, dataset or group absent, or no file open
- IoError(reason): the HDF5 library or the OS failed
- Invalid(reason): the request itself cannot be served (range, rank, policy)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from .exceptions import (
    ChannelNotFound,
    ChunkOutOfRange,
    DatasetNotFound,
    InvalidPath,
    InvalidPolicy,
    ReaderClosed,
    UnsupportedRank,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class _Failure:
    reason: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap_or(self, default: T) -> T:
        return default


@dataclass(frozen=True, slots=True)
class NotFound(_Failure):
    pass


@dataclass(frozen=True, slots=True)
class IoError(_Failure):
    pass


@dataclass(frozen=True, slots=True)
class Invalid(_Failure):
    pass


Result = Union[Success[T], NotFound, IoError, Invalid]

_NOT_FOUND = (ChannelNotFound, DatasetNotFound, ReaderClosed, KeyError)
_INVALID = (ChunkOutOfRange, UnsupportedRank, InvalidPath, InvalidPolicy)


def _describe(exc: BaseException) -> str:
    # KeyError.__str__ wraps its argument in quotes
    if isinstance(exc, KeyError) and exc.args:
        return f"{type(exc).__name__}: {exc.args[0]}"
    return f"{type(exc).__name__}: {exc}"


def capture(fn: Callable[..., T], *args, **kwargs) -> Result[T]:
    """Call ``fn`` and fold the reader's expected failures into a Result.

    Anything that is not a lookup, request or I/O failure still propagates.
    """
    try:
        return Success(fn(*args, **kwargs))
    except _INVALID as e:
        return Invalid(_describe(e))
    except _NOT_FOUND as e:
        return NotFound(_describe(e))
    except (OSError, RuntimeError, TypeError, ValueError) as e:
        # h5py reports most library-level failures as OSError, ValueError
        # (closed ids) or TypeError (unreadable attribute types)
        return IoError(_describe(e))
