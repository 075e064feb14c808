"""
Entity type reference resolution.

Maps entity type names to the integer references used by the server and
client runtimes, and back. The registry belongs to the game configuration;
references are only ever looked up, never assigned here.

There is no cache: every call re-reads the configuration, so a hand-edited
config is picked up on the next encode or decode. Two lookups
issued back to back may therefore observe different registry states.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..diagnostics import Diagnostics, DiagnosticKind
from .loaders import GameConfigFileLoader
from .models import (
    ENTITIES_KEY,
    NO_REF,
    REF_KEY,
    TYPE_KEY,
    InverseResult,
    RegistryLoadResult,
    TypeRefs,
)


class TypeRegistryResolver:
    """Loads the forward registry and builds its inverse.

    Duplicate references are resolved by a sorted merge: entries are ordered
    by name ascending and inserted keyed by reference, later entries
    overwriting earlier ones. The lexicographically greatest name therefore
    wins, and every overwrite is reported.
    """

    def __init__(self, loader: Optional[GameConfigFileLoader] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.loader = loader or GameConfigFileLoader()

    def load_forward(self, source_path: str | Path) -> RegistryLoadResult:
        """Read name -> reference pairs from a game configuration.

        Every entry of the `entities` object whose `type` object carries an
        integer `ref` other than -1 contributes one pair. Entries without a
        ref are skipped silently.

        Args:
            source_path: Path to the game configuration JSON

        Returns:
            RegistryLoadResult; `refs` is empty and `loaded` False when the
            source could not be read
        """
        diagnostics = Diagnostics()
        read = self.loader.read(source_path)

        if not read.ok:
            diagnostics.report(
                self.logger,
                DiagnosticKind.REGISTRY_LOAD_FAILED,
                read.error or f"Cannot load type registry from {source_path}",
            )
            return RegistryLoadResult(
                source=read.path, loaded=False, diagnostics=diagnostics
            )

        refs: TypeRefs = {}
        entities = read.data.get(ENTITIES_KEY) if read.data else None
        if isinstance(entities, dict):
            for name, entity in entities.items():
                ref = self._extract_ref(entity)
                if ref is not None:
                    refs[str(name)] = ref

        self.logger.debug(f"Loaded {len(refs)} type refs from {read.path}")
        return RegistryLoadResult(source=read.path, refs=refs, diagnostics=diagnostics)

    @staticmethod
    def _extract_ref(entity: Any) -> Optional[int]:
        """Return the `type.ref` integer of an entity definition, if any."""
        if not isinstance(entity, dict):
            return None
        type_obj = entity.get(TYPE_KEY)
        if not isinstance(type_obj, dict):
            return None
        ref = type_obj.get(REF_KEY, NO_REF)
        # bool is an int subclass but never a valid reference
        if not isinstance(ref, int) or isinstance(ref, bool) or ref == NO_REF:
            return None
        return ref

    def invert(self, forward: TypeRefs) -> InverseResult:
        """Build the reference -> name lookup.

        Args:
            forward: name -> reference mapping

        Returns:
            InverseResult with one DUPLICATE_REF diagnostic per overwrite
        """
        diagnostics = Diagnostics()
        names: Dict[int, str] = {}

        for name, ref in sorted(forward.items(), key=lambda item: item[0]):
            previous = names.get(ref)
            if previous is not None:
                diagnostics.report(
                    self.logger,
                    DiagnosticKind.DUPLICATE_REF,
                    f"Duplicate ref {ref}: keeping '{name}' over '{previous}'",
                )
            names[ref] = name

        return InverseResult(names=names, diagnostics=diagnostics)

    def load_inverse(self, source_path: str | Path) -> InverseResult:
        """Load a registry and invert it in one step.

        Diagnostics from both stages are combined, load problems first.
        """
        forward = self.load_forward(source_path)
        inverse = self.invert(forward.refs)
        combined = Diagnostics()
        combined.extend(forward.diagnostics)
        combined.extend(inverse.diagnostics)
        return InverseResult(names=inverse.names, diagnostics=combined)
