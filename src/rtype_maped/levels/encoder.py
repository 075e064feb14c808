"""
Encoding level documents into the editor, server and client dialects.

The three outputs are independent: none is derived from another, and only
the editor dialect is meant to be read back.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import orjson

from ..diagnostics import Diagnostics, DiagnosticKind
from ..registry.models import NO_REF
from ..registry.resolver import TypeRegistryResolver
from .models import DEFAULT_GAME_CONFIG_PATH, LevelDocument, PlacedEntity
from .schemas import ClientDialect, EditorDialect, ServerDialect, fits_int64

JSON_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE


@dataclass
class EncodeResult:
    """Encoded dialect text plus the diagnostics produced while encoding."""

    text: str
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def dump_json(payload: Dict[str, Any]) -> str:
    """Serialize a payload with stable key order and number formatting."""
    return orjson.dumps(payload, option=JSON_OPTIONS).decode("utf-8")


class DialectEncoder:
    """Produces the three level dialects from one LevelDocument.

    Type references are resolved through a TypeRegistryResolver, which
    re-reads the relevant game configuration on every encode.
    """

    def __init__(self, resolver: Optional[TypeRegistryResolver] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.resolver = resolver or TypeRegistryResolver()

    def _position(
        self, entity: PlacedEntity, diagnostics: Diagnostics
    ) -> Tuple[float, float]:
        """Entity coordinates as floats; NaN and infinity are written as 0.0."""
        coords = []
        for axis, value in (("x", entity.x), ("y", entity.y)):
            value = float(value)
            if not math.isfinite(value):
                diagnostics.report(
                    self.logger,
                    DiagnosticKind.FIELD_DEFAULTED,
                    f"Entity {entity.id} ('{entity.type}') has non-finite {axis}={value}, "
                    f"writing 0.0",
                )
                value = 0.0
            coords.append(value)
        return coords[0], coords[1]

    def encode_editor(self, doc: LevelDocument) -> EncodeResult:
        """Encode the round-trippable editor dialect.

        Each wave carries its type `name`, which is what decoding relies on.
        The `ref` is informational: when the type is not in the registry it
        falls back to the entity's local id.
        """
        game_config = doc.game_config_path or DEFAULT_GAME_CONFIG_PATH
        diagnostics = Diagnostics()

        registry = self.resolver.load_forward(game_config)
        diagnostics.extend(registry.diagnostics)

        waves: List[Dict[str, Any]] = []
        for entity in doc.entities:
            ref = registry.refs.get(entity.type)
            if ref is None:
                ref = entity.id if fits_int64(entity.id) else NO_REF
                diagnostics.report(
                    self.logger,
                    DiagnosticKind.UNRESOLVED_TYPE,
                    f"Unknown entity type '{entity.type}', using {ref} as ref",
                )
            x, y = self._position(entity, diagnostics)
            waves.append(
                {
                    EditorDialect.WAVE_X: x,
                    EditorDialect.WAVE_Y: y,
                    EditorDialect.WAVE_NAME: entity.type,
                    EditorDialect.WAVE_REF: ref,
                }
            )

        payload = {
            EditorDialect.GAME: game_config,
            EditorDialect.MAP: {
                EditorDialect.MAP_ID: int(doc.id),
                EditorDialect.MAP_SCROLL_SPEED: float(doc.scroll_speed),
                EditorDialect.MAP_WIDTH: int(doc.width),
                EditorDialect.MAP_HEIGHT: int(doc.height),
                EditorDialect.MAP_BACKGROUND_NAME: doc.background_name,
                EditorDialect.MAP_BACKGROUND_REPEAT_COUNT: int(
                    doc.background_repeat_count
                ),
            },
            EditorDialect.WAVES: waves,
        }

        self.logger.debug(
            f"Encoded editor level {doc.id} with {len(waves)} wave(s) against {game_config}"
        )
        return EncodeResult(dump_json(payload), diagnostics)

    def encode_server(
        self,
        doc: LevelDocument,
        server_config_path: str | Path = ServerDialect.DEFAULT_CONFIG_PATH,
    ) -> EncodeResult:
        """Encode the authoritative server dialect.

        Every entity produces exactly one `level_data` record. An entity whose
        type is not in the server registry gets ref -1 but keeps its position.
        """
        server_config = str(server_config_path)
        diagnostics = Diagnostics()

        registry = self.resolver.load_forward(server_config)
        diagnostics.extend(registry.diagnostics)

        level_data: List[Dict[str, Any]] = []
        for entity in doc.entities:
            ref = registry.refs.get(entity.type, NO_REF)
            if ref == NO_REF:
                diagnostics.report(
                    self.logger,
                    DiagnosticKind.UNRESOLVED_TYPE,
                    f"Entity type '{entity.type}' (id {entity.id}) has no ref in "
                    f"{server_config}, writing {NO_REF}",
                )
            x, y = self._position(entity, diagnostics)
            level_data.append(
                {ServerDialect.REF: ref, ServerDialect.POSITION: {"x": x, "y": y}}
            )

        payload = {
            ServerDialect.GAME: server_config,
            ServerDialect.SYSTEMS_KEY: list(ServerDialect.SYSTEMS),
            ServerDialect.SPAWN_POINTS: [],
            ServerDialect.STARTUP: [],
            ServerDialect.LEVEL_DATA: level_data,
        }
        return EncodeResult(dump_json(payload), diagnostics)

    def encode_client(
        self,
        doc: LevelDocument,
        client_config_path: str | Path = ClientDialect.DEFAULT_CONFIG_PATH,
    ) -> EncodeResult:
        """Encode the client bootstrap dialect.

        Only the config path and the fixed rendering pipeline are written; the
        document's entities are not used.
        """
        payload = {
            ClientDialect.GAME: str(client_config_path),
            ClientDialect.SYSTEMS_KEY: list(ClientDialect.SYSTEMS),
            ClientDialect.SPRITES: {},
            ClientDialect.STARTUP: [],
        }
        self.logger.debug(
            f"Encoded client level {doc.id} ({len(doc.entities)} entities omitted)"
        )
        return EncodeResult(dump_json(payload))
