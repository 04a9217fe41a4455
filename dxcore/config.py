"""
Configuration and logging setup for dxcore.

The model layer needs very little configuration: how verbose logging is,
whether log rendering may show unredacted values, and how the command
line formats its output. Settings come from, in increasing precedence:

1. Built-in defaults (get_default_config)
2. A config file (JSON, TOML or YAML)
3. Environment variables DXCORE_<SECTION>_<KEY>
"""

import json
import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger("dxcore")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']
LOG_FORMAT = "%(levelname)s: %(message)s"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Checks in order:
    1. DXCORE_CONFIG environment variable
    2. ~/.dxcore/ directory
    """
    if 'DXCORE_CONFIG' in os.environ:
        path = Path(os.environ['DXCORE_CONFIG'])
        if path.exists():
            return path

    dxcore_dir = Path.home() / '.dxcore'
    for filename in CONFIG_FILENAMES:
        path = dxcore_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path
    return dxcore_dir / 'config.json'


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "logging": {
            "level": "WARNING",
            "unsafe": False,     # Render full values instead of redacted ones
        },
        "output": {
            "format": "json",    # json or yaml
            "indent": 2,
        },
    }


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from file, then apply environment overrides."""
    if config_path is None:
        config_path = get_config_path()

    config = get_default_config()

    if config_path.exists():
        try:
            file_config = _read_config_file(config_path)
            if isinstance(file_config, dict):
                for key, value in list(file_config.items()):
                    if isinstance(config.get(key), dict) and not isinstance(value, dict):
                        logger.warning(f"Ignoring config section '{key}' in {config_path}: must be a mapping")
                        del file_config[key]
                config = merge_configs(config, file_config)
            elif file_config is not None:
                logger.warning(f"Ignoring config {config_path}: top level must be a mapping")
        except (OSError, ValueError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    return apply_env_overrides(config)


def _read_config_file(config_path: Path) -> Any:
    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)
    if suffix in ('.yaml', '.yml'):
        with open(config_path, 'r') as f:
            return yaml.safe_load(f)
    with open(config_path, 'r') as f:
        return json.load(f)


def merge_configs(base_config: Dict[str, Any], override_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config: Base configuration
        override_config: Configuration to merge/override with

    Returns:
        Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def _coerce_env_value(value: str) -> Any:
    if value.lower() in ('true', '1', 'yes', 'on'):
        return True
    if value.lower() in ('false', '0', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    return value


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern DXCORE_SECTION_KEY, for
    example DXCORE_LOGGING_UNSAFE=true or DXCORE_OUTPUT_FORMAT=yaml.
    Variables that do not name an existing setting are ignored.
    """
    env_prefix = "DXCORE_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        parts = env_key[len(env_prefix):].lower().split('_', 1)
        if len(parts) != 2:
            continue
        section, key = parts
        if isinstance(config.get(section), dict) and key in config[section]:
            config[section][key] = _coerce_env_value(value)

    return config


def is_unsafe_logging(config: Optional[Dict[str, Any]] = None) -> bool:
    """Whether log rendering may show unredacted values."""
    if config is None:
        config = load_config()
    return bool(config.get("logging", {}).get("unsafe", False))


def configure_logging(level: Optional[str] = None, config: Optional[Dict[str, Any]] = None) -> None:
    """
    Send dxcore log records to stderr.

    Called by the command line; library users configure logging
    themselves.
    """
    if level is None:
        if config is None:
            config = load_config()
        level = str(config.get("logging", {}).get("level", "WARNING"))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.handlers = [handler]
    logger.setLevel(level.upper())
    logger.propagate = False
