"""
Data models for the entity type registry.

The registry is owned by the game configuration files; this package only
reads it. Plain dicts are kept for the mappings themselves, wrapped in small
result objects that carry the diagnostics produced while building them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, TypeAlias

from ..diagnostics import Diagnostics

TypeRefs: TypeAlias = Dict[str, int]
"""Forward mapping: entity type name -> reference."""

RefNames: TypeAlias = Dict[int, str]
"""Inverse mapping: reference -> entity type name."""

GameConfigObject: TypeAlias = Dict[str, Any]
"""A parsed game configuration document."""

NO_REF = -1
"""Sentinel reference meaning "no resolvable reference"."""

# Keys used inside a game configuration document
ENTITIES_KEY = "entities"
TYPE_KEY = "type"
REF_KEY = "ref"
SPRITES_KEY = "sprites"
RENDER_KEY = "render"
RECT_KEY = "rect"


@dataclass
class RegistryLoadResult:
    """Forward registry loaded from one source.

    Attributes:
        source: Path the registry was read from
        refs: name -> reference mapping (empty on failure)
        loaded: False when the source could not be read or parsed
        diagnostics: Problems reported while loading
    """

    source: Path
    refs: TypeRefs = field(default_factory=dict)
    loaded: bool = True
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class InverseResult:
    """Inverse registry with the duplicate-reference overrides that built it."""

    names: RefNames = field(default_factory=dict)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
