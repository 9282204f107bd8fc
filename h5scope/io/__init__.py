from .h5_reader import H5Reader, ChannelSource
from .handles import HandleTable
from .load import load_measurement


__all__ = [
    "H5Reader",
    "ChannelSource",
    "HandleTable",
    "load_measurement",
]
