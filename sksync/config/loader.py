# SKSYNC Configuration Loader
# Locate, read, validate and initialize the YAML configuration file

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from sksync.config.defaults import generate_default_config, get_default_config
from sksync.config.schema import SksyncConfig
from sksync.utils.paths import atomic_write

CONFIG_ENV = "SKSYNC_CONFIG"
SECTIONS = ("server", "local", "output")


def get_config_dir() -> Path:
    """Get the SKSYNC configuration directory."""
    return Path.home() / ".config" / "sksync"


def get_config_path() -> Path:
    """Config file location; $SKSYNC_CONFIG wins over ~/.config/sksync/config.yaml."""
    override = os.environ.get(CONFIG_ENV)
    return Path(override).expanduser() if override else get_config_dir() / "config.yaml"


def read_config_data(config_path: Path) -> dict[str, Any]:
    """
    Parse a config file into a plain mapping.

    An empty file yields an empty mapping.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the document root is not a mapping.
    """
    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")
    return data


def load_config(config_path: Optional[Path] = None) -> SksyncConfig:
    """
    Load configuration, filling missing keys from the defaults.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValidationError: If a value is invalid.
    """
    path = config_path or get_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}\nRun 'sksync config init' to create one.")
    return SksyncConfig.model_validate(_merge_with_defaults(read_config_data(path)))


def load_config_or_defaults(config_path: Optional[Path] = None) -> SksyncConfig:
    """Load the config file if present, otherwise return the defaults."""
    path = config_path or get_config_path()
    if path.exists():
        return load_config(path)
    return SksyncConfig.model_validate(get_default_config())


def ensure_config_exists(config_path: Optional[Path] = None, *, overwrite: bool = False) -> tuple[Path, bool]:
    """
    Write the commented default configuration unless a file is already there.

    Args:
        config_path: Target file (default location if None).
        overwrite: Replace an existing file with the defaults.

    Returns:
        Tuple of (config_path, was_written).
    """
    path = config_path or get_config_path()
    if path.exists() and not overwrite:
        return path, False
    atomic_write(path, generate_default_config())
    return path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Check a config file as written, without merging defaults.

    Every section must validate and a `server` section must be present.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    path = config_path or get_config_path()
    if not path.exists():
        return False, [f"Configuration file not found: {path}"]

    try:
        data = read_config_data(path)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]
    except ValueError as e:
        return False, [str(e)]
    if not data:
        return False, ["Configuration file is empty"]

    try:
        SksyncConfig.model_validate(data)
    except ValidationError as e:
        return False, [f"{' -> '.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]

    if "server" not in data:
        return False, ["Missing 'server' section"]
    return True, []


def _merge_with_defaults(data: dict[str, Any]) -> dict[str, Any]:
    merged = get_default_config()
    for section in SECTIONS:
        if isinstance(data.get(section), dict):
            merged[section].update(data[section])
    return merged
