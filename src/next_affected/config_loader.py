"""Load NextAffectedConfig from the project directory, or write the default one.

Looks for ``next-affected.config.json`` first, then the YAML and TOML
variants.  A project without any config file gets the defaults.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path

import yaml

from next_affected._errors import ConfigError
from next_affected.config import CONFIG_FILE_NAME, NextAffectedConfig

_YAML_NAMES = ("next-affected.config.yaml", "next-affected.config.yml")
_TOML_NAME = "next-affected.config.toml"


def load_config(project_dir: Path) -> NextAffectedConfig:
    """Load the config for *project_dir*, falling back to defaults.

    Raises:
        ConfigError: If a config file exists but cannot be parsed.

    """
    project_dir = Path(project_dir)
    json_path = project_dir / CONFIG_FILE_NAME
    if json_path.is_file():
        return NextAffectedConfig.from_mapping(_parse_json(json_path))
    for name in _YAML_NAMES:
        path = project_dir / name
        if path.is_file():
            return NextAffectedConfig.from_mapping(_parse_yaml(path))
    toml_path = project_dir / _TOML_NAME
    if toml_path.is_file():
        return NextAffectedConfig.from_mapping(_parse_toml(toml_path))
    return NextAffectedConfig()


def init_config(directory: Path | None = None) -> tuple[Path, bool]:
    """Write the default config file into *directory* (cwd by default).

    Returns the config path and whether it was created.  An existing file is
    left untouched.
    """
    path = Path(directory or Path.cwd()) / CONFIG_FILE_NAME
    if path.exists():
        return path, False
    path.write_text(json.dumps(NextAffectedConfig().to_dict(), indent=2), encoding="utf-8")
    return path, True


def _parse_json(path: Path) -> dict[str, object]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    return _require_mapping(data, path)


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    return _require_mapping(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config, accepting an optional ``[next-affected]`` table."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    section = data.get("next-affected")
    if isinstance(section, dict):
        data = {**{k: v for k, v in data.items() if k != "next-affected"}, **section}
    return _require_mapping(data, path)


def _require_mapping(data: object, path: Path) -> dict[str, object]:
    if not isinstance(data, dict):
        msg = f"{path} must contain an object at the top level"
        raise ConfigError(msg)
    return data
