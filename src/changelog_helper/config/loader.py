"""
Configuration loader for changelog_helper.

Settings are read from an optional JSON file. By default this is
``config.json`` in the ``~/.changelog_helper/`` directory; a different
file can be passed explicitly, in which case it must exist. Every key is
optional and falls back to :data:`DEFAULT_CONFIG`.

If the file is malformed or a value has the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILE_NAME = "config.json"

# GitHub caps page size at 100.
MAX_PER_PAGE = 100

DEFAULT_CONFIG: Dict[str, Any] = {
    "repo_owner": "anthropics",
    "repo_name": "claude-code",
    "days": 7,
    "per_page": MAX_PER_PAGE,
    "request_timeout": 30,
    "output_path": "changelog.md",
    "project_name": "Claude Code",
    "token": None,
}

_STRING_KEYS = ("repo_owner", "repo_name", "output_path", "project_name")


class ConfigError(Exception):
    """Raised when the configuration file or a setting is invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the directory holding the user-level configuration."""
    return Path.home() / ".changelog_helper"


def validate_config(data: Dict[str, Any]) -> Dict[str, Any]:
    """Check the types and ranges of a merged configuration.

    Returns
    -------
    Dict[str, Any]
        ``data`` itself, for chaining.

    Raises
    ------
    ConfigError
        If a value is missing or invalid.
    """
    for key in _STRING_KEYS:
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'{key}' must be a non-empty string")

    for key in ("days", "per_page"):
        value = data.get(key)
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"'{key}' must be an integer")
        if value < 1:
            raise ConfigError(f"'{key}' must be at least 1")
    if data["per_page"] > MAX_PER_PAGE:
        raise ConfigError(f"'per_page' must be at most {MAX_PER_PAGE}")

    timeout = data.get("request_timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("'request_timeout' must be a positive number")

    token = data.get("token")
    if token is not None and not isinstance(token, str):
        raise ConfigError("'token' must be a string")

    return data


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the configuration and merge it over :data:`DEFAULT_CONFIG`.

    Args:
        config_path: Explicit configuration file. When given, the file
                     must exist. When omitted, the user-level file is read
                     if present and the defaults are used otherwise.

    Returns:
        A dictionary containing every key of :data:`DEFAULT_CONFIG`.

    Raises:
        ConfigError: If the file is missing (explicit path only),
                     malformed, or holds invalid values.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = _get_config_directory() / CONFIG_FILE_NAME

    config: Dict[str, Any] = dict(DEFAULT_CONFIG)

    if not config_path.exists():
        if explicit:
            logger.error("Configuration file '%s' does not exist", config_path)
            raise ConfigError(f"Missing configuration file: {config_path}")
        logger.debug("No configuration file at %s, using defaults", config_path)
        return validate_config(config)

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    unknown = sorted(set(data) - set(DEFAULT_CONFIG))
    if unknown:
        logger.debug("Ignoring unknown configuration keys: %s", unknown)

    config.update({key: value for key, value in data.items() if key in DEFAULT_CONFIG})
    logger.debug("Loaded configuration from: %s", config_path)
    return validate_config(config)
