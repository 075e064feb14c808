"""Saving and opening levels as files.

Ties the encoder, decoder and persistence gateway together for the editor's
save, open and export actions.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from ..diagnostics import Diagnostics, DiagnosticKind
from .decoder import DecodeResult, DialectDecoder
from .encoder import DialectEncoder
from .models import LevelDocument
from .persistence import PersistenceGateway, SaveResult
from .schemas import ClientDialect, ServerDialect

if TYPE_CHECKING:
    from ..settings import AppSettings


@dataclass
class ExportReport:
    """Results of writing the server and client files for one level.

    The two writes are independent; one may fail while the other succeeds.
    """

    server: SaveResult
    client: SaveResult
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def ok(self) -> bool:
        return self.server.ok and self.client.ok


class LevelExporter:
    """Save/open/export actions for level documents.

    Server and client config paths come from the constructor arguments, then
    from settings, then from the dialect defaults.
    """

    def __init__(
        self,
        settings: Optional["AppSettings"] = None,
        encoder: Optional[DialectEncoder] = None,
        decoder: Optional[DialectDecoder] = None,
        gateway: Optional[PersistenceGateway] = None,
        server_config_path: Optional[str] = None,
        client_config_path: Optional[str] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.encoder = encoder or DialectEncoder()
        self.decoder = decoder or DialectDecoder()
        self.gateway = gateway or PersistenceGateway()

        if server_config_path is None:
            server_config_path = (
                settings.paths.server_config_path
                if settings
                else ServerDialect.DEFAULT_CONFIG_PATH
            )
        if client_config_path is None:
            client_config_path = (
                settings.paths.client_config_path
                if settings
                else ClientDialect.DEFAULT_CONFIG_PATH
            )
        self.server_config_path = server_config_path
        self.client_config_path = client_config_path

    @staticmethod
    def server_file_name(level_id: int) -> str:
        return f"level_{level_id}-server.json"

    @staticmethod
    def client_file_name(level_id: int) -> str:
        return f"level_{level_id}-client.json"

    def export_runtime_levels(
        self, doc: LevelDocument, output_dir: Optional[str | Path] = None
    ) -> ExportReport:
        """Write the server and client dialects for a level.

        Args:
            doc: Level to export
            output_dir: Target directory (default: settings maps directory,
                else `maps`)

        Returns:
            ExportReport with one SaveResult per file
        """
        if output_dir is None:
            output_dir = self.settings.paths.maps_output_dir if self.settings else "maps"
        target = Path(output_dir)

        diagnostics = Diagnostics()
        server = self.encoder.encode_server(doc, self.server_config_path)
        client = self.encoder.encode_client(doc, self.client_config_path)
        diagnostics.extend(server.diagnostics)
        diagnostics.extend(client.diagnostics)

        server_result = self.gateway.save(
            target / self.server_file_name(doc.id), server.text
        )
        client_result = self.gateway.save(
            target / self.client_file_name(doc.id), client.text
        )

        for result, label in ((server_result, "server"), (client_result, "client")):
            if result.ok:
                self.logger.info(f"Saved {label} level to {result.path}")
            else:
                self.logger.error(f"Failed to save {label} level to {result.path}")

        return ExportReport(server_result, client_result, diagnostics)

    def save_editor_file(self, doc: LevelDocument, path: str | Path) -> SaveResult:
        """Encode a level in the editor dialect and write it."""
        encoded = self.encoder.encode_editor(doc)
        result = self.gateway.save(path, encoded.text)
        if result.ok and self.settings:
            self.settings.paths.add_recent_file(result.path)
        return result

    def open_editor_file(self, path: str | Path) -> DecodeResult:
        """Read and decode an editor-dialect file.

        An unreadable file gives a default document with a PARSE_FAILED
        diagnostic, the same as unparseable content.
        """
        loaded = self.gateway.load(path)
        if not loaded.ok or loaded.data is None:
            diagnostics = Diagnostics()
            diagnostics.report(
                self.logger,
                DiagnosticKind.PARSE_FAILED,
                f"Cannot read level file {loaded.path}: {loaded.error}",
                level=logging.ERROR,
            )
            return DecodeResult(LevelDocument(), diagnostics)

        result = self.decoder.decode_editor(loaded.data)
        if self.settings and result.parsed:
            self.settings.paths.add_recent_file(loaded.path)
        self.logger.info(
            f"Loaded map from {loaded.path} with {len(result.document.entities)} entities"
        )
        return result
