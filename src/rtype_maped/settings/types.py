"""
Shared settings types: versions, errors, validation results and the
typed QSettings group accessor the subsystems build on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class ConfigVersion(Enum):
    """Layout versions of the stored configuration."""
    V1_0 = "1.0"
    CURRENT = V1_0


class ConfigError(Exception):
    """Raised when the settings storage cannot be opened."""


@dataclass
class ValidationResult:
    """Problems found in the stored configuration.

    Warnings describe degraded but usable setups; any error makes the
    configuration unusable for export.
    """
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class SettingsGroup:
    """Typed reads and synced writes for the keys of one QSettings group.

    QSettings hands values back as whatever its backend stored: INI files
    return booleans and one-element lists as strings, so every read coerces.
    """

    GROUP = ""

    def __init__(self, settings: "QSettings", group: Optional[str] = None):
        self.settings = settings
        self.group = self.GROUP if group is None else group

    def key(self, name: str) -> str:
        return f"{self.group}/{name}" if self.group else name

    def get_str(self, name: str, default: str = "") -> str:
        value = self.settings.value(self.key(name), default)
        return default if value is None else str(value)

    def get_bool(self, name: str, default: bool = False) -> bool:
        value = self.settings.value(self.key(name), default)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return default if value is None else bool(value)

    def get_list(self, name: str) -> List[str]:
        value = self.settings.value(self.key(name), [])
        if isinstance(value, str):
            return [value] if value else []
        if isinstance(value, list):
            return ["" if item is None else str(item) for item in cast(list[object], value)]
        return []

    def set(self, name: str, value: object) -> None:
        self.settings.setValue(self.key(name), value)
        self.settings.sync()
