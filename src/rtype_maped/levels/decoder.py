"""
Decoding editor-dialect text into level documents.

Two historical shapes are accepted:

* wave shape (current): a `waves` array of `{x, y, name, ref}` records;
  entity ids are reassigned 0..n-1 in file order;
* legacy entity shape: an `entities` array of `{id, type, x, y}` records;
  ids are kept verbatim.

Decoding never raises. Text that cannot be parsed into a JSON object yields
a default LevelDocument and a PARSE_FAILED diagnostic.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import orjson

from ..diagnostics import Diagnostics, DiagnosticKind
from ..registry.models import NO_REF, RefNames
from ..registry.resolver import TypeRegistryResolver
from .models import LevelDocument, PlacedEntity
from .schemas import EditorDialect, FieldReader, LegacyDialect


@dataclass
class DecodeResult:
    """Decoded document plus the diagnostics produced while decoding."""

    document: LevelDocument
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def parsed(self) -> bool:
        """False when the text could not be parsed and defaults were used."""
        return not self.diagnostics.of_kind(DiagnosticKind.PARSE_FAILED)


class DialectDecoder:
    """Parses editor-dialect text back into a LevelDocument."""

    def __init__(self, resolver: Optional[TypeRegistryResolver] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.resolver = resolver or TypeRegistryResolver()

    def decode_editor(self, text: str | bytes) -> DecodeResult:
        """Decode editor-dialect text.

        Args:
            text: Editor dialect JSON as str or bytes

        Returns:
            DecodeResult; never raises for malformed input
        """
        diagnostics = Diagnostics()

        try:
            data = orjson.loads(text)
        except (orjson.JSONDecodeError, TypeError) as e:
            diagnostics.report(
                self.logger,
                DiagnosticKind.PARSE_FAILED,
                f"Error parsing level JSON: {e}",
                level=logging.ERROR,
            )
            return DecodeResult(LevelDocument(), diagnostics)

        if not isinstance(data, dict):
            diagnostics.report(
                self.logger,
                DiagnosticKind.PARSE_FAILED,
                f"Level JSON root must be an object, got {type(data).__name__}",
                level=logging.ERROR,
            )
            return DecodeResult(LevelDocument(), diagnostics)

        doc = LevelDocument()
        reader = FieldReader(self.logger, diagnostics, "level")
        doc.game_config_path = reader.get_str(
            data, EditorDialect.GAME, doc.game_config_path
        )
        self._read_metadata(data, doc, diagnostics)

        waves = data.get(EditorDialect.WAVES)
        legacy_entities = data.get(LegacyDialect.ENTITIES)
        if isinstance(waves, list):
            doc.entities = self._read_waves(waves, doc.game_config_path, diagnostics)
        elif isinstance(legacy_entities, list):
            doc.entities = self._read_legacy_entities(legacy_entities, diagnostics)

        self.logger.debug(
            f"Decoded level {doc.id} with {len(doc.entities)} entities "
            f"({len(diagnostics)} diagnostic(s))"
        )
        return DecodeResult(doc, diagnostics)

    def _read_metadata(
        self, data: Dict[str, Any], doc: LevelDocument, diagnostics: Diagnostics
    ) -> None:
        """Fill map metadata, each field falling back to its own default."""
        meta = data.get(EditorDialect.MAP)
        if isinstance(meta, dict):
            reader = FieldReader(self.logger, diagnostics, EditorDialect.MAP)
            doc.id = reader.get_int(meta, EditorDialect.MAP_ID, doc.id)
            doc.scroll_speed = reader.get_float(
                meta, EditorDialect.MAP_SCROLL_SPEED, doc.scroll_speed
            )
            doc.width = reader.get_int(meta, EditorDialect.MAP_WIDTH, doc.width)
            doc.height = reader.get_int(meta, EditorDialect.MAP_HEIGHT, doc.height)
            doc.background_name = reader.get_str(
                meta, EditorDialect.MAP_BACKGROUND_NAME, doc.background_name
            )
            doc.background_repeat_count = reader.get_int(
                meta,
                EditorDialect.MAP_BACKGROUND_REPEAT_COUNT,
                doc.background_repeat_count,
            )
        else:
            # Legacy files carry only the canvas size at the top level
            reader = FieldReader(self.logger, diagnostics, "level")
            doc.width = reader.get_int(data, LegacyDialect.WIDTH, doc.width)
            doc.height = reader.get_int(data, LegacyDialect.HEIGHT, doc.height)

    def _read_waves(
        self, waves: List[Any], game_config: str, diagnostics: Diagnostics
    ) -> List[PlacedEntity]:
        """Build entities from wave records, assigning ids in file order."""
        entities: List[PlacedEntity] = []
        ref_names: Optional[RefNames] = None

        for index, wave in enumerate(waves):
            if not isinstance(wave, dict):
                wave = {}
            reader = FieldReader(self.logger, diagnostics, f"wave {index}")
            x = reader.get_float(wave, EditorDialect.WAVE_X, 0.0)
            y = reader.get_float(wave, EditorDialect.WAVE_Y, 0.0)

            entity_type = FieldReader.optional_str(wave, EditorDialect.WAVE_NAME)
            if entity_type is None:
                ref = reader.get_int(wave, EditorDialect.WAVE_REF, NO_REF)
                if ref_names is None:
                    # Registry is only read once a wave actually needs it
                    inverse = self.resolver.load_inverse(game_config)
                    diagnostics.extend(inverse.diagnostics)
                    ref_names = inverse.names
                entity_type = ref_names.get(ref)
                if entity_type is None:
                    entity_type = f"{EditorDialect.UNKNOWN_TYPE_PREFIX}{ref}"
                    diagnostics.report(
                        self.logger,
                        DiagnosticKind.UNRESOLVED_REF,
                        f"wave {index}: ref {ref} not found in {game_config}, "
                        f"using '{entity_type}'",
                    )

            entities.append(PlacedEntity(len(entities), entity_type, x, y))

        return entities

    def _read_legacy_entities(
        self, records: List[Any], diagnostics: Diagnostics
    ) -> List[PlacedEntity]:
        """Build entities from legacy records, keeping their ids."""
        entities: List[PlacedEntity] = []

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                record = {}
            reader = FieldReader(self.logger, diagnostics, f"entity {index}")
            entities.append(
                PlacedEntity(
                    id=reader.get_int(record, LegacyDialect.ENTITY_ID, 0),
                    type=reader.get_str(record, LegacyDialect.ENTITY_TYPE, ""),
                    x=reader.get_float(record, LegacyDialect.ENTITY_X, 0.0),
                    y=reader.get_float(record, LegacyDialect.ENTITY_Y, 0.0),
                )
            )

        return entities
