"""Interpreter configuration: defaults, environment variables and YAML files."""

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

import numpy as np
import yaml

from .errors import ConfigError

# Cell type names mapped to the numpy dtype backing the data tape
CELL_TYPES: Dict[str, Any] = {
    "int": np.int64,
    "uint": np.uint64,
    "byte": np.uint8,
}

DEFAULT_TAPE_LENGTH = 300
DEFAULT_TAPE_CAPACITY = 30000

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class InterpreterConfig:
    cell_type: str = "int"
    initial_length: int = DEFAULT_TAPE_LENGTH
    capacity: int = DEFAULT_TAPE_CAPACITY
    strict_io: bool = False
    step_limit: Optional[int] = None

    def validate(self) -> "InterpreterConfig":
        """Check values and return self, raising ConfigError on bad input."""
        if self.cell_type not in CELL_TYPES:
            raise ConfigError(
                f"unknown cell type {self.cell_type!r}; expected one of {sorted(CELL_TYPES)}"
            )
        if self.initial_length <= 0:
            raise ConfigError("initial_length must be positive")
        if self.capacity < self.initial_length:
            raise ConfigError(
                f"capacity ({self.capacity}) is smaller than initial_length ({self.initial_length})"
            )
        if self.step_limit is not None and self.step_limit <= 0:
            raise ConfigError("step_limit must be positive")
        return self

    @property
    def dtype(self):
        return CELL_TYPES[self.cell_type]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def replace(self, **overrides) -> "InterpreterConfig":
        """Return a copy with the non-None overrides applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return from_mapping(data)

    @classmethod
    def from_env(cls, environ=None) -> "InterpreterConfig":
        """Build a config from BF_* environment variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        if "BF_CELL_TYPE" in environ:
            data["cell_type"] = environ["BF_CELL_TYPE"].strip().lower()
        if "BF_TAPE_LENGTH" in environ:
            data["initial_length"] = _parse_int("BF_TAPE_LENGTH", environ["BF_TAPE_LENGTH"])
        if "BF_TAPE_CAPACITY" in environ:
            data["capacity"] = _parse_int("BF_TAPE_CAPACITY", environ["BF_TAPE_CAPACITY"])
        if "BF_STRICT_IO" in environ:
            data["strict_io"] = _parse_bool("BF_STRICT_IO", environ["BF_STRICT_IO"])
        if environ.get("BF_STEP_LIMIT"):
            data["step_limit"] = _parse_int("BF_STEP_LIMIT", environ["BF_STEP_LIMIT"])
        return from_mapping(data)


def _parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def from_mapping(data: Dict[str, Any]) -> InterpreterConfig:
    """Create a validated config from a plain mapping."""
    known = {f.name for f in fields(InterpreterConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "cell_type":
            kwargs[key] = str(value).lower()
        elif key == "strict_io":
            kwargs[key] = _parse_bool(key, value)
        elif key == "step_limit":
            kwargs[key] = None if value is None else _parse_int(key, value)
        else:
            kwargs[key] = _parse_int(key, value)
    return InterpreterConfig(**kwargs).validate()


def read_config_file(path: str) -> Dict[str, Any]:
    """Read the raw settings mapping from a YAML file.

    The file holds a flat mapping with any of the InterpreterConfig keys:

        cell_type: byte
        initial_length: 300
        capacity: 30000
        strict_io: false
        step_limit: 100000

    An empty file gives an empty mapping.
    """
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"failed to parse config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    if not all(isinstance(k, str) for k in data):
        raise ConfigError(f"config file {path} must use string keys")
    return data


def load_config(path: str) -> InterpreterConfig:
    """Load a validated config from a YAML file, unset keys taking the defaults."""
    return from_mapping(read_config_file(path))
