# h5scope/core/measurement.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping

from .exceptions import ChannelNotFound, InvalidMeasurement
from .metadata import MeasurementMeta
from .channel import Channel


@dataclass(frozen=True, slots=True)
class Measurement:
    """Metadata snapshot of one file: its channels in listing order, keyed by id."""

    name: str
    channels: Mapping[str, Channel] = field(default_factory=dict, repr=False)
    meta: MeasurementMeta = field(default_factory=MeasurementMeta, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidMeasurement("Measurement.name must be a non-empty string.")
        if not isinstance(self.meta, MeasurementMeta):
            raise InvalidMeasurement("Measurement.meta must be a MeasurementMeta instance.")
        if not isinstance(self.channels, Mapping):
            raise InvalidMeasurement("Measurement.channels must be a mapping of id -> Channel.")

        bad = [cid for cid, ch in self.channels.items() if not isinstance(ch, Channel) or ch.id != cid]
        if bad:
            raise InvalidMeasurement(f"Measurement.channels entries do not match their ids: {bad}")

        object.__setattr__(self, "channels", dict(self.channels))

    def __len__(self) -> int:
        return len(self.channels)

    def __iter__(self) -> Iterator[Channel]:
        return iter(self.channels.values())

    def __contains__(self, channel_id: object) -> bool:
        return channel_id in self.channels

    def __getitem__(self, channel_id: str) -> Channel:
        try:
            return self.channels[channel_id]
        except KeyError as e:
            raise ChannelNotFound(channel_id) from e

    @property
    def channel_ids(self) -> list[str]:
        return list(self.channels)

    @property
    def size_bytes(self) -> int:
        """Bytes of sample data stored across every dataset of every channel."""
        return sum(ds.size_bytes for ch in self.channels.values() for ds in ch.datasets.values())

    def find(self, key: str) -> Channel:
        """Look a channel up by id, falling back to its display name."""
        if key in self.channels:
            return self.channels[key]
        for ch in self.channels.values():
            if ch.display_name == key:
                return ch
        raise ChannelNotFound(key)
