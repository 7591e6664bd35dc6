"""
shprestore: Configuration

Loads config from:
  1. Defaults
  2. User config (CLI --config or ~/.shprestore/config.json)
  3. Workspace override (<workspace>/.shprestore/config.json)
  4. Environment variables (SHPRESTORE_OUTPUT_SUFFIX, SHPRESTORE_OUTPUT_DIR,
     SHPRESTORE_STRICT)
"""
from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    # Appended to the base name of every written file: roads.shp -> roads_restore.shp
    "output_suffix": "_restore",
    # None means "next to the geometry file"
    "output_dir": None,
    # Fail instead of warning when geometry records would need removing
    "strict": False,
    # Write outputs even when the counts already match
    "always_write": False,
}

_TRUTHY = {"1", "true", "yes", "on"}


def config_paths(config_path: Optional[Path] = None, workspace: Optional[Path] = None) -> list[Path]:
    """Candidate config files in load order (later wins)."""
    paths: list[Path] = []
    if config_path is not None:
        paths.append(Path(config_path))
    elif not os.environ.get("PYTEST_CURRENT_TEST"):
        # Tests stay hermetic: never pick up the real user config.
        home = os.environ.get("SHPRESTORE_HOME")
        base = Path(home) if home else Path.home() / ".shprestore"
        paths.append(base / "config.json")
    if workspace is not None:
        paths.append(Path(workspace) / ".shprestore" / "config.json")
    return paths


def load_config(config_path: Optional[Path] = None, workspace: Optional[Path] = None) -> dict:
    """Load layered config; unknown keys are kept so callers can extend it."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    for path in config_paths(config_path, workspace):
        if not path.exists():
            continue
        loaded = _read_json(path)
        if loaded:
            config = _merge(config, loaded)
            logger.debug("config loaded from %s", path)
    _apply_env_overrides(config)
    return config


def _read_json(path: Path) -> dict:
    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("could not read config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", path)
        return {}
    return data


def _merge(base: dict, override: dict) -> dict:
    """Deep merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict) -> None:
    suffix = os.environ.get("SHPRESTORE_OUTPUT_SUFFIX")
    if suffix:
        config["output_suffix"] = suffix

    output_dir = os.environ.get("SHPRESTORE_OUTPUT_DIR")
    if output_dir:
        config["output_dir"] = output_dir

    strict = os.environ.get("SHPRESTORE_STRICT")
    if strict is not None:
        config["strict"] = strict.strip().lower() in _TRUTHY
