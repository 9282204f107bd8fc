# test/test_config.py
import pytest

from h5scope.config import Settings, configure_logging
from h5scope.core import ColumnSelect, ConfigError, PathLayout


def test_defaults_from_empty_env():
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.layout() == PathLayout()
    assert settings.policy() == ColumnSelect(0)
    assert settings.log_level == "WARNING"


def test_values_from_env():
    settings = Settings.from_env(
        {
            "H5SCOPE_MEASUREMENT": "00000002",
            "H5SCOPE_BLOCK": "00000005",
            "H5SCOPE_COLUMN": "1",
            "H5SCOPE_LOG_LEVEL": "debug",
        }
    )
    assert settings.layout().block_path("A") == "measurements/00000002/channels/A/blocks/00000005"
    assert settings.policy() == ColumnSelect(1)
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {"H5SCOPE_COLUMN": "first"},
        {"H5SCOPE_COLUMN": "-1"},
        {"H5SCOPE_MEASUREMENT": "a/b"},
        {"H5SCOPE_BLOCK": ""},
    ],
)
def test_invalid_env_raises_config_error(env):
    with pytest.raises(ConfigError):
        Settings.from_env(env)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("H5SCOPE_BLOCK", "00000009")
    assert Settings.from_env().block == "00000009"


def test_log_level_is_not_validated_by_settings():
    assert Settings.from_env({"H5SCOPE_LOG_LEVEL": "chatty"}).log_level == "CHATTY"


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ConfigError, match="CHATTY"):
        configure_logging("chatty")
