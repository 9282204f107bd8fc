# h5scope/core/metadata.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .exceptions import InvalidChannel, InvalidMeasurement
from .levels import decimation_factor


SAMPLE_BYTES = 2  # uint16


def _parse_float(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class ChannelMeta:
    """
    Typed view of a channel's attribute map.

    - name / channel_name: the two naming attributes a file may carry
    - unit: physical unit after conversion
    - bin_to_volt_constant / bin_to_volt_factor: raw ADC bin -> volts
    - attrs: the attribute map exactly as read (strings)
    """
    name: str | None = None
    channel_name: str | None = None
    unit: str | None = None
    bin_to_volt_constant: float = 0.0
    bin_to_volt_factor: float = 1.0
    attrs: dict[str, str] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidChannel("ChannelMeta.attrs must be a dict.")

    @classmethod
    def from_attributes(cls, attrs: Mapping[str, str]) -> "ChannelMeta":
        return cls(
            name=attrs.get("name"),
            channel_name=attrs.get("ChannelName"),
            unit=attrs.get("physicalUnit"),
            bin_to_volt_constant=_parse_float(attrs.get("binToVoltConstant"), 0.0),
            bin_to_volt_factor=_parse_float(attrs.get("binToVoltFactor"), 1.0),
            attrs=dict(attrs),
        )


@dataclass(frozen=True, slots=True)
class DatasetMeta:
    """Shape-derived facts about one dataset of a channel block."""

    name: str
    shape: tuple[int, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidChannel("DatasetMeta.name must be a non-empty string.")
        shape = tuple(int(d) for d in self.shape)
        if any(d < 0 for d in shape):
            raise InvalidChannel(f"DatasetMeta.shape must be non-negative, got {shape}")
        object.__setattr__(self, "shape", shape)

    @property
    def rank(self) -> int:
        return len(self.shape)

    @property
    def total_samples(self) -> int:
        return self.shape[0] if self.shape else 0

    @property
    def columns(self) -> int:
        return self.shape[1] if self.rank > 1 else 1

    @property
    def size_bytes(self) -> int:
        n = SAMPLE_BYTES
        for d in self.shape:
            n *= d
        return n

    @property
    def decimation(self) -> int | None:
        return decimation_factor(self.name)


@dataclass(frozen=True, slots=True)
class MeasurementMeta:
    """
    Metadata attached to a Measurement (one opened file).
    """
    source: str | None = None
    layout: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidMeasurement("MeasurementMeta.attrs must be a dict.")
