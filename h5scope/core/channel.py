# core/channel.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from .exceptions import DatasetNotFound, InvalidChannel
from .metadata import ChannelMeta, DatasetMeta
from .layout import RAW_DATASET


DEFAULT_UNIT = "V"


@dataclass(slots=True, frozen=True)
class Channel:
    id: str
    meta: ChannelMeta = field(default_factory=ChannelMeta)
    datasets: Mapping[str, DatasetMeta] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidChannel("Channel.id must be a non-empty string.")

        if not isinstance(self.meta, ChannelMeta):
            raise InvalidChannel("Channel.meta must be a ChannelMeta instance.")

        if not isinstance(self.datasets, Mapping):
            raise InvalidChannel("Channel.datasets must be a mapping (e.g., dict).")

        normalized: dict[str, DatasetMeta] = {}
        for key, ds in self.datasets.items():
            if not isinstance(ds, DatasetMeta):
                raise InvalidChannel("Channel.datasets values must be DatasetMeta instances.")
            if ds.name != key:
                raise InvalidChannel(
                    f"Dataset name mismatch: key '{key}' but DatasetMeta.name is '{ds.name}'."
                )
            normalized[key] = ds
        object.__setattr__(self, "datasets", normalized)

    # Convenience accessors
    @property
    def display_name(self) -> str:
        return self.meta.name or self.meta.channel_name or f"Channel {self.id}"

    @property
    def unit(self) -> str:
        return self.meta.unit or DEFAULT_UNIT

    @property
    def raw(self) -> DatasetMeta | None:
        return self.datasets.get(RAW_DATASET)

    @property
    def total_samples(self) -> int:
        raw = self.raw
        return 0 if raw is None else raw.total_samples

    def dataset(self, name: str) -> DatasetMeta:
        try:
            return self.datasets[name]
        except KeyError as e:
            raise DatasetNotFound(f"{self.id}/{name}") from e

    def with_meta(self, meta: ChannelMeta) -> "Channel":
        return Channel(id=self.id, meta=meta, datasets=dict(self.datasets))
