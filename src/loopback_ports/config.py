"""Load port settings from environment and optional properties file."""

from __future__ import annotations

import os
from pathlib import Path

ENV_PREFIX = "LOOPBACK_PORTS_"
PORT_KEY = "LOOPBACK_PORTS_PORT"
AUTO_SWITCH_KEY = "LOOPBACK_PORTS_AUTO_SWITCH"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def load_properties_file(path: Path) -> dict[str, str]:
    """
    Load key=value from a .properties-like file (skip comments and empty lines).
    Used for LOOPBACK_PORTS_PORT and LOOPBACK_PORTS_AUTO_SWITCH; other keys are kept as-is.
    """
    result: dict[str, str] = {}
    if not path.exists():
        return result
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, _, value = line.partition("=")
            result[key.strip()] = value.strip()
    return result


def get_config(properties_path: Path | None = None) -> dict[str, str]:
    """Merge optional properties file and LOOPBACK_PORTS_* env; env takes precedence."""
    config: dict[str, str] = {}
    if properties_path:
        config.update(load_properties_file(properties_path))
    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX) and value:
            config[key] = value
    return config


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def get_port(config: dict[str, str]) -> int | None:
    """LOOPBACK_PORTS_PORT as int, None when unset. Raises ValueError if not an integer."""
    value = config.get(PORT_KEY)
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"{PORT_KEY} must be an integer, got {value!r}") from None


def get_auto_switch(config: dict[str, str]) -> bool | None:
    """LOOPBACK_PORTS_AUTO_SWITCH as bool, None when unset."""
    value = config.get(AUTO_SWITCH_KEY)
    if not value:
        return None
    try:
        return parse_bool(value)
    except ValueError:
        raise ValueError(f"{AUTO_SWITCH_KEY} must be a boolean, got {value!r}") from None
