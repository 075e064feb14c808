"""
Settings package for rtype-maped.

Configuration is kept in Qt's QSettings so it lives in the platform's
native per-user store.

Usage:
    from rtype_maped.settings import AppSettings

    settings = AppSettings()
    settings.paths.server_config_path = "config/game/rtype.json"
    result = settings.validate()
"""

from .core import AppSettings
from .logging import LoggingSettings
from .paths import PathSettings
from .types import ConfigVersion, ConfigError, ValidationResult

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "PathSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
]
