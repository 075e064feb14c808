"""
Data models for level documents.

A LevelDocument is the canonical in-memory form of a level. It is built from
defaults or by decoding an editor file, mutated by the editing session, and
encoded on demand into the editor, server and client dialects. It is NOT
persisted on its own.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .schemas import fits_int64

DEFAULT_GAME_CONFIG_PATH = "./assets/configs/rtype.json"
DEFAULT_MAP_ID = 1
DEFAULT_SCROLL_SPEED = 2.0
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_BACKGROUND_REPEAT_COUNT = 1
MAX_BACKGROUND_REPEAT_COUNT = 10

DEFAULT_ASSET_SIZE = 32
"""Side of the hit box used when an entity type has no asset info."""

_BACKGROUND_NUMBER = re.compile(r"^[^_.]*_([^.]*)\.")
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


@dataclass
class AssetInfo:
    """Descriptive sprite metadata for one asset key.

    Not authoritative for gameplay; only used for display and hit testing.
    """

    sprite_path: str = ""
    width: int = DEFAULT_ASSET_SIZE
    height: int = DEFAULT_ASSET_SIZE


AssetRegistry = Dict[str, AssetInfo]
"""Maps asset key (entity type name) to its AssetInfo."""


@dataclass
class PlacedEntity:
    """One entity placed on the level.

    Attributes:
        id: Local identifier, unique within a live document
        type: Entity type name, resolved against the type registry on encode
        x: Horizontal world position
        y: Vertical world position
    """

    id: int
    type: str
    x: float = 0.0
    y: float = 0.0


@dataclass
class LevelDocument:
    """A complete level layout.

    Entity order is significant: it is the draw order, and wave-shaped editor
    files assign ids in this order on decode.

    Example:
        >>> doc = LevelDocument()
        >>> enemy = doc.place_entity("enemy_basic", 120.0, 300.0)
        >>> doc.move_entity(enemy.id, 140.0, 300.0)
        True
        >>> doc.entity_at(140.0, 300.0) == enemy.id
        True
    """

    id: int = DEFAULT_MAP_ID
    scroll_speed: float = DEFAULT_SCROLL_SPEED
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    background_name: str = ""
    background_repeat_count: int = DEFAULT_BACKGROUND_REPEAT_COUNT
    game_config_path: str = DEFAULT_GAME_CONFIG_PATH
    entities: List[PlacedEntity] = field(default_factory=list)
    assets: AssetRegistry = field(default_factory=dict)

    # === EDITING OPERATIONS ===

    def next_entity_id(self) -> int:
        """Return the id the next placed entity would receive."""
        if not self.entities:
            return 0
        return max(e.id for e in self.entities) + 1

    def place_entity(self, entity_type: str, x: float, y: float) -> PlacedEntity:
        """Append a new entity on top of the draw order.

        Raises:
            ValueError: x or y is NaN or infinite
        """
        x, y = _finite_position(x, y)
        entity = PlacedEntity(self.next_entity_id(), entity_type, x, y)
        self.entities.append(entity)
        return entity

    def get_entity(self, entity_id: int) -> Optional[PlacedEntity]:
        """Return the entity with the given id, or None."""
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def move_entity(self, entity_id: int, x: float, y: float) -> bool:
        """Move an entity. Returns False if the id is unknown.

        Raises:
            ValueError: x or y is NaN or infinite
        """
        x, y = _finite_position(x, y)
        entity = self.get_entity(entity_id)
        if entity is None:
            return False
        entity.x = x
        entity.y = y
        return True

    def remove_entity(self, entity_id: int) -> bool:
        """Remove an entity. Returns False if the id is unknown."""
        entity = self.get_entity(entity_id)
        if entity is None:
            return False
        self.entities.remove(entity)
        return True

    def entity_at(self, x: float, y: float) -> Optional[int]:
        """Hit test a world position against placed entities.

        Entities are tested topmost first. Each one occupies a square of side
        max(width, height) of its asset info, centered on its position.

        Returns:
            Id of the topmost entity under the point, or None
        """
        for entity in reversed(self.entities):
            size = DEFAULT_ASSET_SIZE
            asset = self.assets.get(entity.type)
            if asset is not None:
                size = max(asset.width, asset.height)

            left = entity.x - size / 2
            top = entity.y - size / 2
            if left <= x < left + size and top <= y < top + size:
                return entity.id
        return None

    def set_background_repeat_count(self, count: int) -> int:
        """Set how many times the background repeats, clamped to 1..10."""
        self.background_repeat_count = max(
            DEFAULT_BACKGROUND_REPEAT_COUNT, min(MAX_BACKGROUND_REPEAT_COUNT, count)
        )
        return self.background_repeat_count

    def set_background(self, name: str) -> None:
        """Select a background and derive the map id from its file name."""
        self.background_name = name
        self.id = level_id_from_background(name)


def _finite_position(x: float, y: float) -> Tuple[float, float]:
    """Coerce a position to floats. NaN and infinity raise ValueError."""
    fx, fy = float(x), float(y)
    if not (math.isfinite(fx) and math.isfinite(fy)):
        raise ValueError(f"Entity position must be finite, got ({x}, {y})")
    return fx, fy


def level_id_from_background(background_name: str) -> int:
    """Derive a map id from a background file name.

    Backgrounds are named `<prefix>_<number>.<ext>`, e.g. `stage_3.png` -> 3.
    Anything that does not fit that pattern maps to the default id.
    """
    match = _BACKGROUND_NUMBER.match(background_name)
    if not match:
        return DEFAULT_MAP_ID
    # Leading integer only: "3b" -> 3, "b3" -> default
    number = _LEADING_INT.match(match.group(1))
    if not number or not fits_int64(int(number.group(0))):
        return DEFAULT_MAP_ID
    return int(number.group(0))
