# h5scope/core/layout.py
from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidPath


# Attribute allow-list read from each channel group.
STRING_ATTRIBUTES: tuple[str, ...] = ("name", "physicalUnit", "ChannelName")
NUMERIC_ATTRIBUTES: tuple[str, ...] = ("binToVoltConstant", "binToVoltFactor")
CHANNEL_ATTRIBUTES: tuple[str, ...] = STRING_ATTRIBUTES + NUMERIC_ATTRIBUTES

RAW_DATASET = "raw"
DATASET_PREFIX = "data"

DEFAULT_MEASUREMENT = "00000001"
DEFAULT_BLOCK = "00000001"


def is_sample_dataset(name: str) -> bool:
    """True for names that hold samples: ``raw`` and anything starting with ``data``."""
    return name == RAW_DATASET or name.startswith(DATASET_PREFIX)


def _check_component(value: str, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidPath(f"{what} must be a non-empty string.")
    if "/" in value or value in {".", ".."}:
        raise InvalidPath(f"{what} '{value}' must be a single path component.")
    return value


@dataclass(frozen=True, slots=True)
class PathLayout:
    """
    The one supported container schema.

    Every object lives under a single measurement and a single block:

        measurements/<measurement>/channels/<channel>/blocks/<block>/<dataset>

    A layout is resolved once per reader; channel ids and dataset names are
    single path components, so callers cannot walk outside the hierarchy.
    """

    measurement: str = DEFAULT_MEASUREMENT
    block: str = DEFAULT_BLOCK

    def __post_init__(self) -> None:
        _check_component(self.measurement, "PathLayout.measurement")
        _check_component(self.block, "PathLayout.block")

    @property
    def measurement_path(self) -> str:
        return f"measurements/{self.measurement}"

    @property
    def channels_path(self) -> str:
        return f"{self.measurement_path}/channels"

    def channel_path(self, channel_id: str) -> str:
        return f"{self.channels_path}/{_check_component(channel_id, 'channel id')}"

    def block_path(self, channel_id: str) -> str:
        return f"{self.channel_path(channel_id)}/blocks/{self.block}"

    def dataset_path(self, channel_id: str, dataset_name: str) -> str:
        return f"{self.block_path(channel_id)}/{_check_component(dataset_name, 'dataset name')}"
