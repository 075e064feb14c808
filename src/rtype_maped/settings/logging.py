"""
Console and file logging options.
"""

import logging
from pathlib import Path

from .types import SettingsGroup

logger = logging.getLogger(__name__)

LOG_FILE_PATH = "logs/rtype_maped.csv"

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(SettingsGroup):
    """Stored under `logging/`.

    The console handler honours `console_log_level`; the file handler, when
    enabled, always records DEBUG.
    """

    GROUP = "logging"

    @property
    def console_logging(self) -> bool:
        return self.get_bool("console_enabled", True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self.set("console_enabled", value)

    @property
    def console_log_level(self) -> str:
        return self.get_str("console_level", "INFO")

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        level = value.upper()
        if level not in VALID_LEVELS:
            logger.warning(
                f"Invalid console log level: {value}, keeping {self.console_log_level}"
            )
            return
        self.set("console_level", level)

    @property
    def console_use_colors(self) -> bool:
        return self.get_bool("console_use_colors", True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self.set("console_use_colors", value)

    @property
    def file_logging(self) -> bool:
        return self.get_bool("file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self.set("file_enabled", value)

    @property
    def log_file_path(self) -> Path:
        """CSV log file, relative paths resolve against the working directory."""
        return Path(self.get_str("file_path", LOG_FILE_PATH))

    @log_file_path.setter
    def log_file_path(self, value: str | Path) -> None:
        self.set("file_path", str(value) if value else LOG_FILE_PATH)
