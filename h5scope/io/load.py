# h5scope/io/load.py
from __future__ import annotations

from os import PathLike, fspath
from pathlib import Path

from h5scope.io.h5_reader import H5Reader
from h5scope.core import Channel, ChannelMeta, DatasetMeta, Measurement, MeasurementMeta, PathLayout


def load_measurement(path: str | PathLike, layout: PathLayout | None = None) -> Measurement:
    """Scan the metadata of every channel in `path` (no samples are read)."""
    with H5Reader.from_path(path, layout=layout) as reader:
        channels = {}
        for channel_id in reader.channel_ids():
            meta = ChannelMeta.from_attributes(reader.channel_attributes(channel_id))

            datasets = {}
            for name in reader.get_available_datasets(channel_id):
                shape = reader.get_dataset_shape(channel_id, name)
                if not shape:
                    continue
                datasets[name] = DatasetMeta(name=name, shape=shape)

            channels[channel_id] = Channel(id=channel_id, meta=meta, datasets=datasets)

        measurement_path = reader.layout.measurement_path

    return Measurement(
        name=Path(path).stem,
        channels=channels,
        meta=MeasurementMeta(source=fspath(path), layout=measurement_path),
    )
