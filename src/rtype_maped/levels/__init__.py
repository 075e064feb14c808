"""Level documents and their JSON dialects."""

from .models import (
    AssetInfo,
    AssetRegistry,
    PlacedEntity,
    LevelDocument,
    level_id_from_background,
    DEFAULT_GAME_CONFIG_PATH,
)
from .schemas import EditorDialect, LegacyDialect, ServerDialect, ClientDialect
from .encoder import DialectEncoder, EncodeResult
from .decoder import DialectDecoder, DecodeResult
from .persistence import PersistenceGateway, LoadResult, SaveResult
from .assets import AssetRegistryLoader, AssetLoadResult
from .exporter import LevelExporter, ExportReport

__all__ = [
    "AssetInfo",
    "AssetRegistry",
    "PlacedEntity",
    "LevelDocument",
    "level_id_from_background",
    "DEFAULT_GAME_CONFIG_PATH",
    "EditorDialect",
    "LegacyDialect",
    "ServerDialect",
    "ClientDialect",
    "DialectEncoder",
    "EncodeResult",
    "DialectDecoder",
    "DecodeResult",
    "PersistenceGateway",
    "LoadResult",
    "SaveResult",
    "AssetRegistryLoader",
    "AssetLoadResult",
    "LevelExporter",
    "ExportReport",
]
