"""Load loopback-ports.yaml: preferred port and auto-switch for `loopback-ports resolve`."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Any

import yaml

from .config import get_auto_switch, get_port, parse_bool

SETTINGS_FILENAME = "loopback-ports.yaml"

DEFAULT_PORT = 8080
DEFAULT_AUTO_SWITCH = True


def load_settings(path: Path) -> dict[str, Any]:
    """
    Load a settings YAML file. Recognised keys:
      - port: int
      - auto_switch: bool
    Missing file or empty => empty dict. Invalid YAML => raise.
    """
    if not path.exists():
        return {}
    raw = yaml.safe_load(path.read_text())
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name} must be a YAML object")
    return raw


def _settings_port(settings: dict[str, Any]) -> int | None:
    value = settings.get("port")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"port must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"port must be an integer, got {value!r}") from None


def _settings_auto_switch(settings: dict[str, Any]) -> bool | None:
    value = settings.get("auto_switch")
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return parse_bool(value)
    raise ValueError(f"auto_switch must be a boolean, got {value!r}")


def get_resolve_options(
    config: dict[str, str],
    settings: dict[str, Any],
    *,
    port: int | None = None,
    auto_switch: bool | None = None,
) -> tuple[int, bool]:
    """
    Return (preferred_port, auto_switch).
    Explicit arguments > env/properties config > settings file > defaults (8080, True).
    """
    if port is None:
        port = get_port(config)
    if port is None:
        port = _settings_port(settings)
    if port is None:
        port = DEFAULT_PORT
    if auto_switch is None:
        auto_switch = get_auto_switch(config)
    if auto_switch is None:
        auto_switch = _settings_auto_switch(settings)
    if auto_switch is None:
        auto_switch = DEFAULT_AUTO_SWITCH
    return port, auto_switch
