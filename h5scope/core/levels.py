# h5scope/core/levels.py
"""
Decimation levels.

Besides the full-rate ``raw`` dataset, a block usually carries decimated
copies named ``data@<factor>`` (e.g. ``data@128`` keeps one min/max row per
128 raw samples). The helpers here parse those names and pick the level that
suits a given zoom ratio (total duration / visible duration).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
import re

from .layout import RAW_DATASET


_LEVEL_RE = re.compile(r"^data@(?P<factor>\d+)$")


@dataclass(frozen=True, slots=True)
class ZoomLevel:
    dataset: str
    min_zoom: float       # selected when zoom_ratio is strictly above this
    description: str


# Most detailed first.
ZOOM_LEVELS: tuple[ZoomLevel, ...] = (
    ZoomLevel(RAW_DATASET, 500.0, "High detail"),
    ZoomLevel("data@128", 50.0, "Medium zoom"),
    ZoomLevel("data@16384", 5.0, "Overview"),
    ZoomLevel("data@2097152", float("-inf"), "Far overview"),
)


def decimation_factor(dataset_name: str) -> int | None:
    """Return raw samples per stored row.

    Examples
    --------
    "raw"        -> 1
    "data@128"   -> 128
    "data"       -> None
    """
    if dataset_name == RAW_DATASET:
        return 1
    m = _LEVEL_RE.match(dataset_name)
    if not m:
        return None
    factor = int(m.group("factor"))
    return factor if factor > 0 else None


def select_level(available: Iterable[str], zoom_ratio: float) -> str | None:
    """Pick the dataset to read for ``zoom_ratio``.

    Falls back to the most decimated dataset present when the preferred level
    is missing. Returns None when nothing usable is available.
    """
    names = list(available)
    if not names:
        return None

    for level in ZOOM_LEVELS:
        if zoom_ratio > level.min_zoom:
            if level.dataset in names:
                return level.dataset
            break

    known = [(decimation_factor(n), n) for n in names]
    known = [(f, n) for f, n in known if f is not None]
    if not known:
        return names[0]
    return max(known)[1]
