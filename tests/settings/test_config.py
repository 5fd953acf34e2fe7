import pytest

from callspy.settings._core import ValueSource
from callspy.settings.config import CallspyConfig
from tests.utils import override_env


def test_defaults():
    with override_env({}):
        config = CallspyConfig()

    assert config.debug is False
    assert config.log_stream_handler is True
    assert config.logging_rate == 60
    assert config.alias_suffix_bytes == 8
    assert config.spy_dunders is False
    assert config.value_source("CALLSPY_DEBUG") == ValueSource.DEFAULT


def test_environment_overrides():
    env = {
        "CALLSPY_DEBUG": "true",
        "CALLSPY_LOGGING_RATE": "0",
        "CALLSPY_ALIAS_SUFFIX_BYTES": "3",
        "CALLSPY_SPY_DUNDERS": "1",
    }
    with override_env(env):
        config = CallspyConfig()

        assert config.value_source("CALLSPY_DEBUG") == ValueSource.ENV_VAR

    assert config.debug is True
    assert config.logging_rate == 0
    assert config.alias_suffix_bytes == 3
    assert config.spy_dunders is True


def test_source_from_code_wins():
    with override_env({"CALLSPY_ALIAS_SUFFIX_BYTES": "3"}):
        config = CallspyConfig(source={"CALLSPY_ALIAS_SUFFIX_BYTES": "5"})

    assert config.alias_suffix_bytes == 5
    assert config.value_source("CALLSPY_ALIAS_SUFFIX_BYTES") == ValueSource.CODE


def test_unknown_value_source():
    assert CallspyConfig().value_source("CALLSPY_NOT_A_SETTING") == ValueSource.UNKNOWN


@pytest.mark.parametrize("value", ["0", "65"])
def test_alias_suffix_bytes_validation(value):
    with override_env({"CALLSPY_ALIAS_SUFFIX_BYTES": value}):
        with pytest.raises(ValueError):
            CallspyConfig()
