"""
Config file locations, export directory and recent levels.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..levels.models import DEFAULT_GAME_CONFIG_PATH
from ..levels.schemas import ClientDialect, ServerDialect
from .types import SettingsGroup

logger = logging.getLogger(__name__)

MAX_RECENT_FILES = 10
DEFAULT_MAPS_OUTPUT_DIR = "maps"


class PathSettings(SettingsGroup):
    """Stored under `paths/`. Empty values reset a path to its default."""

    GROUP = "paths"

    @property
    def game_config_path(self) -> str:
        """Game config new levels resolve their types against."""
        return self.get_str("game_config", DEFAULT_GAME_CONFIG_PATH)

    @game_config_path.setter
    def game_config_path(self, value: str) -> None:
        self.set("game_config", value or DEFAULT_GAME_CONFIG_PATH)

    @property
    def server_config_path(self) -> str:
        """Server game config referenced by exported server levels."""
        return self.get_str("server_config", ServerDialect.DEFAULT_CONFIG_PATH)

    @server_config_path.setter
    def server_config_path(self, value: str) -> None:
        self.set("server_config", value or ServerDialect.DEFAULT_CONFIG_PATH)

    @property
    def client_config_path(self) -> str:
        """Client game config referenced by exported client levels."""
        return self.get_str("client_config", ClientDialect.DEFAULT_CONFIG_PATH)

    @client_config_path.setter
    def client_config_path(self, value: str) -> None:
        self.set("client_config", value or ClientDialect.DEFAULT_CONFIG_PATH)

    @property
    def maps_output_dir(self) -> Path:
        """Directory exported runtime levels are written to."""
        return Path(self.get_str("maps_output", DEFAULT_MAPS_OUTPUT_DIR))

    @maps_output_dir.setter
    def maps_output_dir(self, value: Optional[Union[str, Path]]) -> None:
        self.set("maps_output", str(value) if value else DEFAULT_MAPS_OUTPUT_DIR)

    @property
    def recent_files(self) -> List[str]:
        """Recently saved or opened levels, newest first."""
        return self.get_list("recent_files")

    def add_recent_file(self, file_path: Union[str, Path]) -> None:
        entry = str(file_path)
        recent = [path for path in self.recent_files if path != entry]
        recent.insert(0, entry)
        self.set("recent_files", recent[:MAX_RECENT_FILES])

    def clear_recent_files(self) -> None:
        self.set("recent_files", [])

    def prune_recent_files(self) -> List[str]:
        """Drop entries whose file is gone. Returns the dropped entries."""
        recent = self.recent_files
        kept = [path for path in recent if Path(path).exists()]
        dropped = [path for path in recent if path not in kept]
        if dropped:
            self.set("recent_files", kept)
            logger.debug(f"Pruned {len(dropped)} missing recent file(s)")
        return dropped
