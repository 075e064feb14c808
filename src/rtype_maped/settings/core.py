"""
Application settings entry point for rtype-maped.
"""

import logging
from typing import Optional

from PySide6.QtCore import QSettings

from .logging import LoggingSettings
from .paths import PathSettings
from .types import ConfigError, ConfigVersion, SettingsGroup, ValidationResult
from .validation import validate_paths

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Settings persisted through QSettings, grouped per profile.

    Keys live under `<profile>/paths/...`, `<profile>/logging/...` and
    `<profile>/app/...` of the rtype/rtype_maped store.
    """

    def __init__(self, profile: str = "default", settings: Optional[QSettings] = None):
        """
        Args:
            profile: Settings profile name (default: "default")
            settings: Backing QSettings; the per-user native store if omitted

        Raises:
            ConfigError: the backing store reports an access or format error
        """
        self.settings = settings if settings is not None else QSettings("rtype", "rtype_maped")
        if self.settings.status() != QSettings.Status.NoError:
            raise ConfigError(f"Cannot access settings storage: {self.settings.fileName()}")

        self.profile = profile
        self.settings.beginGroup(profile)

        self.paths = PathSettings(self.settings)
        self.logging = LoggingSettings(self.settings)
        self._app = SettingsGroup(self.settings, "app")

        self._ensure_version()
        logger.debug(f"Settings profile '{profile}' stored at {self.file_path}")

    def _ensure_version(self) -> None:
        current = ConfigVersion.CURRENT.value
        stored = self._app.get_str("version")
        if not stored:
            self._app.set("version", current)
            self._app.set("first_run", True)
            logger.info("First run detected, initializing configuration")
        elif stored != current:
            # No key layout change exists yet; only the stamp moves
            logger.info(f"Migrating configuration from {stored} to {current}")
            self._app.set("migrated_from", stored)
            self._app.set("version", current)

    @property
    def version(self) -> str:
        return self._app.get_str("version", ConfigVersion.CURRENT.value)

    @property
    def is_first_run(self) -> bool:
        return self._app.get_bool("first_run", True)

    def set_first_run_complete(self) -> None:
        self._app.set("first_run", False)

    @property
    def file_path(self) -> str:
        """File (or registry path) backing this store."""
        return self.settings.fileName()

    def validate(self) -> ValidationResult:
        return validate_paths(self.paths)

    def sync(self) -> None:
        self.settings.sync()
