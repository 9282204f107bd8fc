from __future__ import annotations

from itertools import count
from os import PathLike
from typing import Iterator
import logging

from h5scope.core.exceptions import UnknownHandle
from h5scope.core.layout import PathLayout
from h5scope.core.policy import FlattenPolicy

from .h5_reader import H5Reader


logger = logging.getLogger(__name__)


class HandleTable:
    """Owns several open readers, each addressed by an opaque int handle.

    Handles are never reused, so a stale id fails with UnknownHandle instead
    of silently reaching a different file.
    """

    def __init__(
        self,
        layout: PathLayout | None = None,
        policy: FlattenPolicy | None = None,
    ):
        self.layout = layout
        self.policy = policy
        self._readers: dict[int, H5Reader] = {}
        self._ids = count(1)

    def open(
        self,
        path: str | PathLike,
        *,
        layout: PathLayout | None = None,
        policy: FlattenPolicy | None = None,
    ) -> int:
        """Open `path` and return its handle; raises OSError on failure."""
        reader = H5Reader.from_path(
            path,
            layout=layout if layout is not None else self.layout,
            policy=policy if policy is not None else self.policy,
        )
        handle = next(self._ids)
        self._readers[handle] = reader
        logger.debug(f"Registered handle {handle} for {reader.path}")
        return handle

    def get(self, handle: int) -> H5Reader:
        try:
            return self._readers[handle]
        except KeyError as e:
            raise UnknownHandle(handle) from e

    def close(self, handle: int) -> None:
        reader = self._readers.pop(handle, None)
        if reader is not None:
            reader.close()

    def close_all(self) -> None:
        for handle in list(self._readers):
            self.close(handle)

    @property
    def handles(self) -> list[int]:
        return list(self._readers)

    def __len__(self) -> int:
        return len(self._readers)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._readers))

    def __contains__(self, handle: object) -> bool:
        return handle in self._readers

    def __getitem__(self, handle: int) -> H5Reader:
        return self.get(handle)

    def __enter__(self) -> "HandleTable":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close_all()
