import h5py
import numpy as np
import pytest

from h5scope import api


BLOCK = "measurements/00000001/channels/{channel}/blocks/00000001"

RAW_CH1 = np.array([10, 20, 30, 40, 50], dtype=np.uint16)
MINMAX_CH1 = np.stack(
    [np.arange(100, dtype=np.uint16), np.arange(1000, 1100, dtype=np.uint16)],
    axis=1,
)
RAW_CH2 = np.arange(20, dtype=np.uint16) * 3


def _write_measurement(path):
    with h5py.File(path, "w") as f:
        ch1 = f.create_group("measurements/00000001/channels/CH1")
        ch1.attrs["name"] = "Voltage 1"
        ch1.attrs["physicalUnit"] = "V"
        ch1.attrs["ChannelName"] = np.bytes_(b"Sensor A")
        ch1.attrs["binToVoltConstant"] = 2.5
        ch1.attrs["binToVoltFactor"] = np.array([0.5])
        ch1.attrs["unlisted"] = "ignored"

        block1 = f.create_group(BLOCK.format(channel="CH1"))
        block1.create_dataset("raw", data=RAW_CH1)
        block1.create_dataset("data@128", data=MINMAX_CH1)
        block1.create_dataset("data@cube", data=np.zeros((2, 2, 2), dtype=np.uint16))
        block1.create_dataset("notes", data=np.zeros(3, dtype=np.uint16))

        ch2 = f.create_group("measurements/00000001/channels/CH2")
        ch2.attrs["name"] = "Current"
        ch2.attrs["physicalUnit"] = 42          # wrong type: omitted
        ch2.attrs["binToVoltFactor"] = "abc"    # wrong type: omitted

        block2 = f.create_group(BLOCK.format(channel="CH2"))
        block2.create_dataset("raw", data=RAW_CH2)
    return path


@pytest.fixture
def measurement_file(tmp_path):
    """HDF5 file with channels CH1 and CH2 in the standard layout."""
    return _write_measurement(tmp_path / "measurement.h5")


@pytest.fixture
def h5_file_factory(tmp_path):
    """
    Factory for ad-hoc HDF5 files.

    Usage:
        def test_something(h5_file_factory):
            path = h5_file_factory("x.h5", {"a/b": np.arange(3)})
    """
    def _create(name="custom.h5", datasets=None, groups=()):
        path = tmp_path / name
        with h5py.File(path, "w") as f:
            for group in groups:
                f.require_group(group)
            for ds_path, data in (datasets or {}).items():
                f.create_dataset(ds_path, data=data)
        return path

    return _create


@pytest.fixture
def shared_reader():
    """Make sure the process-wide reader starts and ends closed."""
    api.close_file()
    yield api.default_reader()
    api.close_file()
