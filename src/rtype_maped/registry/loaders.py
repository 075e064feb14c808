"""
File loaders for game configuration documents.

Reads a game configuration JSON file with orjson. Read and parse errors are
returned to the caller instead of raised, so registry lookups degrade to an
empty mapping rather than aborting an encode or decode.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import orjson

from .models import GameConfigObject


@dataclass
class ConfigReadResult:
    """Outcome of reading a game configuration file."""

    path: Path
    data: Optional[GameConfigObject] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


class GameConfigFileLoader:
    """Loads and parses game configuration JSON files."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def read(self, config_path: str | Path) -> ConfigReadResult:
        """Read a configuration file and return its root object.

        The root must be a JSON object; anything else is reported as an error.

        Args:
            config_path: Path to the configuration file

        Returns:
            ConfigReadResult with either `data` or `error` set
        """
        path = Path(config_path)

        try:
            with path.open("rb") as f:  # orjson works with bytes
                data = orjson.loads(f.read())
        except OSError as e:
            return ConfigReadResult(path, error=f"Cannot open game config {path}: {e}")
        except orjson.JSONDecodeError as e:
            return ConfigReadResult(path, error=f"Invalid JSON in game config {path}: {e}")

        if not isinstance(data, dict):
            return ConfigReadResult(
                path,
                error=f"Game config {path} must contain a JSON object, got {type(data).__name__}",
            )

        self.logger.debug(f"Read game config {path} ({len(data)} top-level keys)")
        return ConfigReadResult(path, data=data)
