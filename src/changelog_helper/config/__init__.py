"""
Configuration loading for changelog_helper.

See :mod:`changelog_helper.config.loader` for the recognised keys.
"""

from .loader import DEFAULT_CONFIG, ConfigError, load_config  # noqa: F401
