"""
File access for level files.

The only place level files touch the filesystem. Content crosses this
boundary as UTF-8 bytes, the form orjson reads and writes. Each call stands
alone and reports failure as a value; nothing is retried.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class LoadResult:
    """Bytes read from a file, or the reason it could not be read."""

    path: Path
    data: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


@dataclass
class SaveResult:
    """Outcome of writing a file."""

    path: Path
    ok: bool
    error: Optional[str] = None


class PersistenceGateway:
    """Reads and writes level files as bytes."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load(self, path: str | Path) -> LoadResult:
        """Read a whole file."""
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            self.logger.error(f"Error loading {file_path}: {e}")
            return LoadResult(file_path, error=str(e))

        self.logger.debug(f"Loaded {len(data)} bytes from {file_path}")
        return LoadResult(file_path, data=data)

    def save(self, path: str | Path, content: str | bytes) -> SaveResult:
        """Write a file, creating parent directories as needed.

        Text content is encoded as UTF-8; bytes are written unchanged.
        """
        file_path = Path(path)
        data = content.encode("utf-8") if isinstance(content, str) else content
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        except OSError as e:
            self.logger.error(f"Error saving {file_path}: {e}")
            return SaveResult(file_path, ok=False, error=str(e))

        self.logger.info(f"Saved {file_path}")
        return SaveResult(file_path, ok=True)
