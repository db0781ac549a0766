import numpy as np
import pytest

from streambf import ConfigError, InterpreterConfig, load_config
from streambf.config import read_config_file


def test_defaults():
    config = InterpreterConfig().validate()
    assert config.cell_type == "int"
    assert config.initial_length == 300
    assert config.capacity == 30000
    assert config.strict_io is False
    assert config.step_limit is None
    assert config.dtype is np.int64


@pytest.mark.parametrize(
    "kwargs",
    [
        {"cell_type": "float"},
        {"initial_length": 0},
        {"initial_length": 100, "capacity": 10},
        {"step_limit": 0},
    ],
)
def test_validate_rejects(kwargs):
    with pytest.raises(ConfigError):
        InterpreterConfig(**kwargs).validate()


def test_from_env():
    config = InterpreterConfig.from_env(
        {
            "BF_CELL_TYPE": "Byte",
            "BF_TAPE_LENGTH": "10",
            "BF_TAPE_CAPACITY": "20",
            "BF_STRICT_IO": "yes",
            "BF_STEP_LIMIT": "5000",
        }
    )
    assert config == InterpreterConfig("byte", 10, 20, True, 5000)


def test_from_env_empty_gives_defaults():
    assert InterpreterConfig.from_env({}) == InterpreterConfig()


def test_from_env_bad_value():
    with pytest.raises(ConfigError):
        InterpreterConfig.from_env({"BF_TAPE_LENGTH": "lots"})
    with pytest.raises(ConfigError):
        InterpreterConfig.from_env({"BF_STRICT_IO": "maybe"})


def test_replace_ignores_none():
    config = InterpreterConfig().replace(cell_type="uint", step_limit=None)
    assert config.cell_type == "uint"
    assert config.step_limit is None


def test_load_config(tmp_path):
    path = tmp_path / "bf.yaml"
    path.write_text("cell_type: byte\nstrict_io: true\nstep_limit: 100\n")
    config = load_config(str(path))
    assert config == InterpreterConfig(cell_type="byte", strict_io=True, step_limit=100)


def test_load_empty_config(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == InterpreterConfig()


@pytest.mark.parametrize(
    "text",
    [
        "cell_width: 8\n",
        "- byte\n",
        "cell_type: [unclosed\n",
        "capacity: many\n",
    ],
)
def test_load_config_errors(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_read_config_file_returns_raw_mapping(tmp_path):
    path = tmp_path / "bf.yaml"
    path.write_text("step_limit: 100\n")
    assert read_config_file(str(path)) == {"step_limit": 100}


def test_read_config_file_rejects_non_string_keys(tmp_path):
    path = tmp_path / "bf.yaml"
    path.write_text("1: byte\n")
    with pytest.raises(ConfigError):
        read_config_file(str(path))


def test_file_settings_layer_over_environment(tmp_path):
    path = tmp_path / "bf.yaml"
    path.write_text("step_limit: 100\n")
    config = InterpreterConfig.from_env({"BF_CELL_TYPE": "byte"}).replace(**read_config_file(str(path)))
    assert config == InterpreterConfig(cell_type="byte", step_limit=100)
