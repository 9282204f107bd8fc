# test/test_cli.py
import json

import pytest

from h5scope.__main__ import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("H5SCOPE_MEASUREMENT", "H5SCOPE_BLOCK", "H5SCOPE_COLUMN", "H5SCOPE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_inspect_outputs_channels(measurement_file, capsys):
    assert main(["inspect", str(measurement_file)]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert [c["id"] for c in payload["channels"]] == ["CH1", "CH2"]
    ch1 = payload["channels"][0]
    assert ch1["name"] == "Voltage 1"
    assert ch1["datasets"]["data@128"]["shape"] == [100, 2]
    assert ch1["datasets"]["data@128"]["decimation"] == 128
    assert ch1["datasets"]["data@cube"]["decimation"] is None


def test_read_outputs_raw_and_volts(measurement_file, capsys):
    code = main(["read", str(measurement_file), "CH1", "raw", "--start", "1", "--count", "2", "--volts"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["raw"] == [20, 30]
    assert payload["count"] == 2
    assert payload["volts"] == [12.5, 17.5]


def test_read_out_of_range_fails(measurement_file, capsys):
    assert main(["read", str(measurement_file), "CH1", "raw", "--start", "99"]) == 1


def test_missing_file_fails(tmp_path):
    assert main(["inspect", str(tmp_path / "missing.h5")]) == 1


def test_bad_settings_exit_code(monkeypatch, measurement_file):
    monkeypatch.setenv("H5SCOPE_COLUMN", "x")
    assert main(["inspect", str(measurement_file)]) == 2


def test_bad_log_level_exit_code(monkeypatch, measurement_file, capsys):
    monkeypatch.setenv("H5SCOPE_LOG_LEVEL", "verbose")
    assert main(["inspect", str(measurement_file)]) == 2
    assert "VERBOSE" in capsys.readouterr().err


def test_inspect_reports_total_size(measurement_file, capsys):
    assert main(["inspect", str(measurement_file)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["size_bytes"] == 2 * (5 + 200 + 8 + 20)


def test_inspect_one_channel_by_display_name(measurement_file, capsys):
    assert main(["inspect", str(measurement_file), "--channel", "Voltage 1"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [c["id"] for c in payload["channels"]] == ["CH1"]


def test_inspect_unknown_channel_fails(measurement_file):
    assert main(["inspect", str(measurement_file), "--channel", "Nope"]) == 1


def test_read_with_zoom_picks_level(measurement_file, capsys):
    argv = ["read", str(measurement_file), "CH1", "--zoom", "100", "--start", "256", "--count", "744"]
    assert main(argv) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["dataset"] == "data@128"
    assert payload["decimation"] == 128
    assert payload["start"] == 2
    assert payload["first_sample"] == 256
    assert payload["raw"] == [2, 3, 4, 5, 6, 7]


def test_read_with_zoom_and_max_points(measurement_file, capsys):
    argv = ["read", str(measurement_file), "CH1", "--zoom", "100", "--count", "6400", "--max-points", "4"]
    assert main(argv) == 0
    assert json.loads(capsys.readouterr().out)["raw"] == [0, 1, 2, 3]


def test_read_needs_dataset_or_zoom(measurement_file):
    with pytest.raises(SystemExit) as exc:
        main(["read", str(measurement_file), "CH1"])
    assert exc.value.code == 2
