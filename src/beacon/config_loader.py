"""Load BeaconConfig from beacon.yaml, beacon.toml or pyproject.toml.

Merges file config with keyword overrides.  Overrides win.
"""

from __future__ import annotations

import tomllib
from dataclasses import fields
from typing import TYPE_CHECKING, Any

import yaml

from beacon._errors import ConfigError
from beacon.config import BeaconConfig

if TYPE_CHECKING:
    from pathlib import Path

_KNOWN_KEYS = frozenset(f.name for f in fields(BeaconConfig))


def load_config(root: Path, **overrides: Any) -> BeaconConfig:
    """Load BeaconConfig from *root*, merging a config file when present.

    Looks for beacon.yaml, beacon.yml, beacon.toml, then the
    ``[tool.beacon]`` table of pyproject.toml.  Keys may use dashes or
    underscores (``change-detection`` == ``change_detection``).

    Raises:
        ConfigError: If a config file cannot be parsed or holds unknown keys.

    """
    file_config = _read_beacon_config(root)
    merged = {**file_config, **overrides}
    unknown = sorted(set(merged) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown beacon config keys: {', '.join(unknown)}"
        raise ConfigError(msg)
    return BeaconConfig(**merged)


def _read_beacon_config(root: Path) -> dict[str, Any]:
    """Read beacon config from the first config file found in *root*."""
    for name in ("beacon.yaml", "beacon.yml"):
        path = root / name
        if path.is_file():
            return _flatten_beacon_section(_parse_yaml(path))
    toml_path = root / "beacon.toml"
    if toml_path.is_file():
        return _flatten_beacon_section(_parse_toml(toml_path))
    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        tool = _parse_toml(pyproject).get("tool", {})
        section = tool.get("beacon", {}) if isinstance(tool, dict) else {}
        if isinstance(section, dict):
            return _normalize_keys(section)
    return {}


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path.name}: {exc}"
        raise ConfigError(msg) from exc


def _flatten_beacon_section(data: dict[str, Any]) -> dict[str, Any]:
    """Extract beacon.* keys plus known top-level keys."""
    result: dict[str, Any] = {}
    section = data.get("beacon")
    if isinstance(section, dict):
        result.update(_normalize_keys(section))
    for key, value in _normalize_keys(data).items():
        if key != "beacon" and key in _KNOWN_KEYS:
            result[key] = value
    return result


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in data.items()}
