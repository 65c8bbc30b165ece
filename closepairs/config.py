"""
Configuration management for the Close Pairs visualizer.

Reads the application settings:
- Server settings (host, port, window title, auto-reload)
- Initial slider position and log level

Settings are read from config.json next to the executable/project root.
Environment variables (optionally loaded from a .env file) take precedence.
"""

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from closepairs.catalog import MAX_N
from closepairs.paths import get_config_path, get_env_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "CLOSEPAIRS_"

DEFAULTS: Dict[str, Any] = {
    "host": "127.0.0.1",
    "port": 8080,
    "title": "Close Point Algorithm Visualizer",
    "initial_n": 0,
    "reload": True,
    "log_level": "INFO",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_environment() -> bool:
    """Load variables from the .env file into os.environ (existing values win)."""
    return load_dotenv(get_env_path(), override=False)


def load_config() -> dict:
    """Load configuration from config.json."""
    config_path = get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config at {config_path}: expected a JSON object")
            return {}
        return data
    return {}


def validate_initial_n(value: Any) -> tuple[bool, str]:
    """
    Validate a starting vector count for the slider.

    Returns:
        (is_valid, message) tuple
    """
    if isinstance(value, bool):
        return False, "Initial n must be an integer"
    try:
        n = int(value)
    except (TypeError, ValueError):
        return False, "Initial n must be an integer"
    if isinstance(value, float) and not value.is_integer():
        return False, "Initial n must be an integer"
    if n < 0 or n > MAX_N:
        return False, f"Initial n must be between 0 and {MAX_N}"
    return True, f"Initial n is {n}"


def validate_port(value: Any) -> tuple[bool, str]:
    """
    Validate a TCP port number.

    Returns:
        (is_valid, message) tuple
    """
    if isinstance(value, bool):
        return False, "Port must be an integer"
    try:
        port = int(value)
    except (TypeError, ValueError):
        return False, "Port must be an integer"
    if not 1 <= port <= 65535:
        return False, "Port must be between 1 and 65535"
    return True, f"Port is {port}"


def _parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


def _raw_settings() -> Dict[str, Any]:
    """Merge defaults, config.json and environment (highest priority)."""
    merged = dict(DEFAULTS)
    # Frozen builds cannot reload source files
    if getattr(sys, 'frozen', False):
        merged["reload"] = False

    for key, value in load_config().items():
        if key in DEFAULTS:
            merged[key] = value
        else:
            logger.debug(f"Ignoring unknown config key '{key}'")

    for key in DEFAULTS:
        env_value = os.environ.get(ENV_PREFIX + key.upper())
        if env_value is not None and env_value != "":
            merged[key] = env_value
    return merged


def get_settings() -> Dict[str, Any]:
    """
    Resolve the effective settings.

    Priority:
    1. Environment variables (CLOSEPAIRS_HOST, CLOSEPAIRS_PORT, ...)
    2. Stored in config.json
    3. Built-in defaults

    Invalid values are logged and replaced by the default for that key.
    """
    raw = _raw_settings()
    settings = dict(raw)

    is_valid, message = validate_port(raw["port"])
    if is_valid:
        settings["port"] = int(raw["port"])
    else:
        logger.warning(f"{message} (got {raw['port']!r}); using {DEFAULTS['port']}")
        settings["port"] = DEFAULTS["port"]

    is_valid, message = validate_initial_n(raw["initial_n"])
    if is_valid:
        settings["initial_n"] = int(raw["initial_n"])
    else:
        logger.warning(f"{message} (got {raw['initial_n']!r}); using {DEFAULTS['initial_n']}")
        settings["initial_n"] = DEFAULTS["initial_n"]

    reload_flag = _parse_bool(raw["reload"])
    if reload_flag is None:
        logger.warning(f"Invalid reload flag {raw['reload']!r}; using {DEFAULTS['reload']}")
        reload_flag = DEFAULTS["reload"]
    settings["reload"] = reload_flag

    level = str(raw["log_level"]).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning(f"Unknown log level {raw['log_level']!r}; using {DEFAULTS['log_level']}")
        level = DEFAULTS["log_level"]
    settings["log_level"] = level

    settings["host"] = str(raw["host"]).strip() or DEFAULTS["host"]
    settings["title"] = str(raw["title"]).strip() or DEFAULTS["title"]
    return settings
