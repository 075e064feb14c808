"""
Entity type registry.

Reads the name -> reference mapping from a game configuration and builds
its inverse with deterministic duplicate resolution.
"""

from .models import (
    TypeRefs,
    RefNames,
    GameConfigObject,
    RegistryLoadResult,
    InverseResult,
    NO_REF,
)
from .loaders import GameConfigFileLoader, ConfigReadResult
from .resolver import TypeRegistryResolver

__all__ = [
    # Resolver
    "TypeRegistryResolver",
    # Type aliases
    "TypeRefs",
    "RefNames",
    "GameConfigObject",
    # Results
    "RegistryLoadResult",
    "InverseResult",
    "ConfigReadResult",
    # Constants
    "NO_REF",
    # Component classes
    "GameConfigFileLoader",
]
