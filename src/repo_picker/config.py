"""YAML-based configuration for repo-picker.

Config lives at ``~/.config/repo-picker/config.yaml`` (respecting
``XDG_CONFIG_HOME``). Values in the file are deep-merged over
``DEFAULT_CONFIG``; a missing or broken file means defaults.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .fuzzy import DEFAULT_THRESHOLD
from .machine import KeyBindings
from .themes import Theme

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "root": "~",
    "marker": ".git",
    "output_file": "~/.cache/repo-picker/dir_path.txt",
    "threshold": DEFAULT_THRESHOLD,
    "include_hidden": False,
    "max_depth": None,
    "exclude": ["node_modules"],
    "keys": {
        "edit": "i",
        "quit": "q",
    },
    "theme": {},
}


def get_config_dir() -> Path:
    """Get the repo-picker config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "repo-picker"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load the config file merged over defaults."""
    config_path = path or get_config_path()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)
    except yaml.YAMLError as e:
        logger.warning("ignoring malformed config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)
    except OSError as e:
        logger.warning("cannot read config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(data, dict):
        return copy.deepcopy(DEFAULT_CONFIG)
    return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), data)


def save_config(cfg: dict[str, Any], path: Path | None = None) -> Path:
    """Write ``cfg`` as YAML and return the path written."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.safe_dump(cfg, f, default_flow_style=False, sort_keys=False)
    return config_path


def ensure_config(path: Path | None = None) -> Path:
    """Write the default config if none exists yet."""
    config_path = path or get_config_path()
    if not config_path.exists():
        save_config(copy.deepcopy(DEFAULT_CONFIG), config_path)
    return config_path


def _expand(raw: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(raw)))


def get_root(cfg: dict[str, Any]) -> Path:
    return _expand(str(cfg.get("root") or DEFAULT_CONFIG["root"]))


def get_output_path(cfg: dict[str, Any]) -> Path:
    return _expand(str(cfg.get("output_file") or DEFAULT_CONFIG["output_file"]))


def get_threshold(cfg: dict[str, Any]) -> int:
    value = cfg.get("threshold", DEFAULT_THRESHOLD)
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("invalid threshold %r, using %d", value, DEFAULT_THRESHOLD)
        return DEFAULT_THRESHOLD
    return value


def get_max_depth(cfg: dict[str, Any]) -> int | None:
    value = cfg.get("max_depth")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        logger.warning("invalid max_depth %r, scanning without a limit", value)
        return None
    return value


def get_exclude(cfg: dict[str, Any]) -> list[str]:
    value = cfg.get("exclude") or []
    if not isinstance(value, list):
        logger.warning("invalid exclude %r, expected a list", value)
        return list(DEFAULT_CONFIG["exclude"])
    return [str(name) for name in value]


def get_key_bindings(cfg: dict[str, Any]) -> KeyBindings:
    """Key bindings from config; anything but a single character falls back."""
    keys = cfg.get("keys") or {}
    defaults = DEFAULT_CONFIG["keys"]
    resolved = {}
    for name in ("edit", "quit"):
        value = keys.get(name, defaults[name]) if isinstance(keys, dict) else defaults[name]
        if not isinstance(value, str) or len(value) != 1 or not value.isprintable():
            logger.warning("invalid key binding %s=%r, using %r", name, value, defaults[name])
            value = defaults[name]
        resolved[name] = value
    if resolved["edit"] == resolved["quit"]:
        logger.warning("edit and quit keys are both %r, using defaults", resolved["edit"])
        return KeyBindings()
    return KeyBindings(**resolved)


def get_theme(cfg: dict[str, Any]) -> Theme:
    data = cfg.get("theme") or {}
    if not isinstance(data, dict):
        logger.warning("invalid theme section %r, using default theme", data)
        return Theme()
    return Theme.from_dict(data)
