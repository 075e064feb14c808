"""
Diagnostics reported by the serialization core.

Soft failures never raise out of the registry, encoder or decoder. Each one
is logged and also returned to the caller as a Diagnostic so it can be
inspected or shown in a UI.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class DiagnosticKind(Enum):
    """Categories of non-fatal problems."""

    REGISTRY_LOAD_FAILED = "registry_load_failed"
    """Type registry source missing or unparseable."""

    DUPLICATE_REF = "duplicate_ref"
    """Two entity names share one reference; one of them was discarded."""

    UNRESOLVED_TYPE = "unresolved_type"
    """Entity type name not present in the registry."""

    UNRESOLVED_REF = "unresolved_ref"
    """Numeric reference not present in the inverted registry."""

    FIELD_DEFAULTED = "field_defaulted"
    """A field had the wrong JSON type and its default was used instead."""

    PARSE_FAILED = "parse_failed"
    """Level document text could not be parsed at all."""


@dataclass(frozen=True)
class Diagnostic:
    """A single reported problem."""

    kind: DiagnosticKind
    message: str


@dataclass
class Diagnostics:
    """Ordered collection of diagnostics that logs as it collects."""

    items: List[Diagnostic] = field(default_factory=list)

    def report(
        self,
        logger: logging.Logger,
        kind: DiagnosticKind,
        message: str,
        level: int = logging.WARNING,
    ) -> Diagnostic:
        """Log a message and keep it as a diagnostic."""
        diagnostic = Diagnostic(kind, message)
        self.items.append(diagnostic)
        logger.log(level, message)
        return diagnostic

    def extend(self, other: "Diagnostics | List[Diagnostic]") -> None:
        """Append already-reported diagnostics without logging them again."""
        if isinstance(other, Diagnostics):
            self.items.extend(other.items)
        else:
            self.items.extend(other)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        """Return the diagnostics of one kind, in report order."""
        return [d for d in self.items if d.kind is kind]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)
