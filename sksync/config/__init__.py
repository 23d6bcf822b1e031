# SKSYNC Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from sksync.config.defaults import DEFAULT_CONFIG, generate_default_config
from sksync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_config_or_defaults,
    read_config_data,
    validate_config_file,
)
from sksync.config.schema import LocalConfig, OutputConfig, ServerConfig, SksyncConfig

__all__ = [
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
    # Loader
    "ensure_config_exists",
    "get_config_path",
    "load_config",
    "load_config_or_defaults",
    "read_config_data",
    "validate_config_file",
    # Schema
    "LocalConfig",
    "OutputConfig",
    "ServerConfig",
    "SksyncConfig",
]
