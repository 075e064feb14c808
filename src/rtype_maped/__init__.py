"""
rtype-maped: level serialization for the R-Type map editor

Translates level layouts between the editor, server and client JSON dialects
and resolves entity types against the game's type registry.
"""

__version__ = "0.1.0"
__author__ = "R-Type map editor contributors"

# Core service imports
from .registry import TypeRegistryResolver
from .levels import (
    DialectEncoder,
    DialectDecoder,
    PersistenceGateway,
    LevelExporter,
    AssetRegistryLoader,
)
from .utils.logging_config import setup_logging

# Main data models
from .levels.models import LevelDocument, PlacedEntity, AssetInfo
from .diagnostics import Diagnostic, DiagnosticKind, Diagnostics

__all__ = [
    # Services
    "TypeRegistryResolver",
    "DialectEncoder",
    "DialectDecoder",
    "PersistenceGateway",
    "LevelExporter",
    "AssetRegistryLoader",

    # Logging
    "setup_logging",

    # Data models
    "LevelDocument",
    "PlacedEntity",
    "AssetInfo",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
]
