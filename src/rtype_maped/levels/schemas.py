"""Schemas for the three level dialects.

Each dialect has its own key set and its own fixed content. Field readers
apply defaults one field at a time, so a file with a single bad field keeps
every other value it carries.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..diagnostics import Diagnostics, DiagnosticKind


class EditorDialect:
    """Keys of the editor dialect (read/write, round-trippable)."""

    GAME = "game"
    MAP = "map"
    WAVES = "waves"

    MAP_ID = "id"
    MAP_SCROLL_SPEED = "scrollSpeed"
    MAP_WIDTH = "width"
    MAP_HEIGHT = "height"
    MAP_BACKGROUND_NAME = "backgroundName"
    MAP_BACKGROUND_REPEAT_COUNT = "backgroundRepeatCount"

    WAVE_X = "x"
    WAVE_Y = "y"
    WAVE_NAME = "name"
    WAVE_REF = "ref"

    UNKNOWN_TYPE_PREFIX = "UNKNOWN_"
    """Prefix of the placeholder type synthesized for unresolvable refs."""


class LegacyDialect:
    """Keys of the legacy entity-list shape (read-only)."""

    WIDTH = "width"
    HEIGHT = "height"
    ENTITIES = "entities"

    ENTITY_ID = "id"
    ENTITY_TYPE = "type"
    ENTITY_X = "x"
    ENTITY_Y = "y"


class ServerDialect:
    """Server dialect (write-only, authoritative gameplay)."""

    DEFAULT_CONFIG_PATH = "config/game/rtype.json"

    SYSTEMS = (
        "ScrollSystem",
        "WaveSystem",
        "AISystem",
        "MovementSystem",
        "HitboxSystem",
        "WeaponSystem",
        "CleanupSystem",
    )
    """Gameplay systems the server activates. Independent of map content."""

    GAME = "game"
    SYSTEMS_KEY = "systems"
    SPAWN_POINTS = "spawn_points"
    STARTUP = "startup"
    LEVEL_DATA = "level_data"
    REF = "ref"
    POSITION = "position"


class ClientDialect:
    """Client dialect (write-only, bootstrap/rendering metadata).

    Carries no positions or entity instances; the client receives those from
    the server at runtime.
    """

    DEFAULT_CONFIG_PATH = "config/game/client-rtype.json"

    SYSTEMS = (
        "GameInteractionSystem",
        "ScrollSystem",
        "MovementSystem",
        "HitboxSystem",
        "ClearScreenSystem",
        "DrawingStartSystem",
        "BackgroundRenderingSystem",
        "CameraStartSystem",
        "HitboxRenderingSystem",
        "RectRenderingSystem",
        "SpriteRenderingSystem",
        "TextRenderingSystem",
        "CameraEndSystem",
        "DrawingEndSystem",
    )

    GAME = "game"
    SYSTEMS_KEY = "systems"
    SPRITES = "sprites"
    STARTUP = "startup"


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
"""Integers written to any dialect must fit a signed 64-bit value."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class FieldReader:
    """Reads typed fields from a JSON object with per-field defaults.

    A missing field silently takes its default. A present field of the wrong
    JSON type also takes its default, and is reported as FIELD_DEFAULTED.

    Attributes:
        logger: Logger the diagnostics are written to
        diagnostics: Collector receiving FIELD_DEFAULTED reports
        context: Human readable location used in messages (e.g. "map", "wave 3")
    """

    logger: logging.Logger
    diagnostics: Diagnostics
    context: str

    def _defaulted(self, key: str, value: Any, expected: str, default: Any) -> None:
        self.diagnostics.report(
            self.logger,
            DiagnosticKind.FIELD_DEFAULTED,
            f"{self.context}: '{key}' must be {expected}, got {value!r}; using {default!r}",
        )

    def get_int(self, obj: Mapping[str, Any], key: str, default: int) -> int:
        """Integer field. Floats are truncated toward zero."""
        if key not in obj or obj[key] is None:
            return default
        value = obj[key]
        if _is_int(value) and fits_int64(value):
            return value
        if isinstance(value, float) and fits_int64(int(value)):
            return int(value)
        self._defaulted(key, value, "a 64-bit integer", default)
        return default

    def get_float(self, obj: Mapping[str, Any], key: str, default: float) -> float:
        """Float field. Integers are widened."""
        if key not in obj or obj[key] is None:
            return default
        value = obj[key]
        if _is_number(value):
            return float(value)
        self._defaulted(key, value, "a number", default)
        return default

    def get_str(self, obj: Mapping[str, Any], key: str, default: str) -> str:
        if key not in obj or obj[key] is None:
            return default
        value = obj[key]
        if isinstance(value, str):
            return value
        self._defaulted(key, value, "a string", default)
        return default

    @staticmethod
    def optional_str(obj: Mapping[str, Any], key: str) -> Optional[str]:
        """Return a string field or None, without reporting anything."""
        value = obj.get(key)
        return value if isinstance(value, str) else None
