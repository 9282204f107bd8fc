"""
h5scope: read-only access to channel data stored in HDF5 measurement files.

Files follow one fixed hierarchy:

    measurements/00000001/channels/<channel>/blocks/00000001/<dataset>

where each block holds a full-rate ``raw`` dataset and decimated
``data@<factor>`` copies of unsigned 16-bit samples.
"""

from .api import (
    open_file,
    get_channel_ids,
    get_channel_attributes,
    get_available_datasets,
    get_dataset_shape,
    read_dataset_chunk,
    close_file,
)
from .io import H5Reader, HandleTable, load_measurement

__version__ = "0.1.0"


__all__ = [
    "open_file",
    "get_channel_ids",
    "get_channel_attributes",
    "get_available_datasets",
    "get_dataset_shape",
    "read_dataset_chunk",
    "close_file",
    "H5Reader",
    "HandleTable",
    "load_measurement",
]
