# test/test_load.py
import numpy as np
import pytest

from h5scope.io.load import load_measurement
from h5scope.core import Measurement


def test_load_measurement(measurement_file):
    m = load_measurement(measurement_file)

    assert isinstance(m, Measurement)
    assert m.name == "measurement"
    assert m.channel_ids == ["CH1", "CH2"]
    assert m.size_bytes == 2 * (5 + 100 * 2 + 2 * 2 * 2 + 20)
    assert m.meta.source == str(measurement_file)
    assert m.meta.layout == "measurements/00000001"

    ch1 = m["CH1"]
    assert ch1.display_name == "Voltage 1"
    assert ch1.unit == "V"
    assert ch1.meta.bin_to_volt_constant == 2.5
    assert ch1.meta.bin_to_volt_factor == 0.5
    assert set(ch1.datasets) == {"raw", "data@128", "data@cube"}
    assert ch1.dataset("data@128").shape == (100, 2)
    assert ch1.total_samples == 5

    ch2 = m["CH2"]
    assert ch2.unit == "V"  # stored unit had the wrong type
    assert ch2.meta.bin_to_volt_factor == 1.0
    assert ch2.total_samples == 20


def test_load_skips_channels_without_block(h5_file_factory):
    path = h5_file_factory(
        groups=["measurements/00000001/channels/EMPTY"],
        datasets={
            "measurements/00000001/channels/FULL/blocks/00000001/raw": np.zeros(3, dtype=np.uint16)
        },
    )
    m = load_measurement(path)
    assert m.channel_ids == ["EMPTY", "FULL"]
    assert m["EMPTY"].datasets == {}
    assert m["FULL"].total_samples == 3


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_measurement(tmp_path / "missing.h5")
