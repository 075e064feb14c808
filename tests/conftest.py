"""Shared fixtures for rtype-maped tests."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterator

import orjson
import pytest
from PySide6.QtCore import QSettings

from rtype_maped.settings import AppSettings

ConfigWriter = Callable[..., Path]


@pytest.fixture
def write_game_config(tmp_path: Path) -> ConfigWriter:
    """Return a helper that writes a game config with the given type refs.

    `refs` maps entity name -> ref; a value of None writes an entity without
    a `type.ref`. Extra top-level keys can be passed as keyword arguments.
    """

    def _write(
        refs: Dict[str, Any], name: str = "game.json", **extra: Any
    ) -> Path:
        entities: Dict[str, Any] = {}
        for entity_name, ref in refs.items():
            entities[entity_name] = {"type": {"ref": ref}} if ref is not None else {}
        path = tmp_path / name
        path.write_bytes(orjson.dumps({"entities": entities, **extra}))
        return path

    return _write


@pytest.fixture
def qsettings(tmp_path: Path) -> QSettings:
    """INI-backed QSettings isolated in the test directory."""
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def app_settings(qsettings: QSettings) -> AppSettings:
    return AppSettings(settings=qsettings)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo root logger changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
