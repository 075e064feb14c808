"""
Integration tests for writing and reading editor levels end to end.
"""

from pathlib import Path

import orjson

from rtype_maped.diagnostics import DiagnosticKind
from rtype_maped.levels import (
    AssetRegistryLoader,
    DialectDecoder,
    DialectEncoder,
    LevelDocument,
    LevelExporter,
)


class TestEditorRoundTrip:
    """Encode then decode through the editor dialect."""

    def test_types_and_positions_survive(self, write_game_config) -> None:
        config = write_game_config({"player": 1, "enemy_basic": 3})
        doc = LevelDocument(
            id=9,
            scroll_speed=3.5,
            width=2048,
            height=720,
            background_name="space_9.png",
            background_repeat_count=3,
            game_config_path=str(config),
        )
        doc.place_entity("player", 100, 300)
        doc.place_entity("enemy_basic", 900.5, 120.25)
        doc.place_entity("not_in_registry", 50, 60)

        encoded = DialectEncoder().encode_editor(doc)
        decoded = DialectDecoder().decode_editor(encoded.text)

        assert decoded.parsed
        assert decoded.document == doc
        assert [e.id for e in decoded.document.entities] == [0, 1, 2]
        assert len(encoded.diagnostics.of_kind(DiagnosticKind.UNRESOLVED_TYPE)) == 1

    def test_ids_are_renumbered(self, write_game_config) -> None:
        """Sparse ids from editing come back dense."""
        config = write_game_config({"player": 1})
        doc = LevelDocument(game_config_path=str(config))
        for x in range(4):
            doc.place_entity("player", x * 10, 0)
        doc.remove_entity(1)
        doc.remove_entity(2)

        text = DialectEncoder().encode_editor(doc).text
        entities = DialectDecoder().decode_editor(text).document.entities

        assert [(e.id, e.x) for e in entities] == [(0, 0.0), (1, 30.0)]

    def test_encoding_is_stable(self, write_game_config) -> None:
        config = write_game_config({"player": 1})
        doc = LevelDocument(game_config_path=str(config))
        doc.place_entity("player", 1, 2)
        encoder = DialectEncoder()

        first = encoder.encode_editor(doc).text
        second = encoder.encode_editor(
            DialectDecoder().decode_editor(first).document
        ).text

        assert first == second


class TestLegacyMigration:
    """Opening a legacy file and saving it in the wave shape."""

    def test_legacy_file_saved_as_waves(self, tmp_path: Path, write_game_config) -> None:
        config = write_game_config({"WALL": 5})
        legacy = tmp_path / "legacy.json"
        legacy.write_bytes(
            orjson.dumps(
                {
                    "game": str(config),
                    "width": 640,
                    "height": 480,
                    "entities": [
                        {"id": 12, "type": "WALL", "x": 10, "y": 20},
                        {"id": 40, "type": "WALL", "x": 30, "y": 40},
                    ],
                }
            )
        )
        exporter = LevelExporter()

        opened = exporter.open_editor_file(legacy)
        assert [e.id for e in opened.document.entities] == [12, 40]

        saved = exporter.save_editor_file(opened.document, tmp_path / "migrated.json")
        payload = orjson.loads(saved.path.read_bytes())

        assert "entities" not in payload
        assert payload["waves"] == [
            {"x": 10.0, "y": 20.0, "name": "WALL", "ref": 5},
            {"x": 30.0, "y": 40.0, "name": "WALL", "ref": 5},
        ]
        reopened = exporter.open_editor_file(saved.path).document
        assert [(e.id, e.type) for e in reopened.entities] == [(0, "WALL"), (1, "WALL")]


class TestExportWithAssets:
    """Runtime export of a level built against a client sprite table."""

    def test_export_and_hit_test(self, tmp_path: Path, write_game_config) -> None:
        server_config = write_game_config({"boss": 20}, name="server.json")
        client_config = tmp_path / "client.json"
        client_config.write_bytes(
            orjson.dumps(
                {
                    "sprites": {"boss": "boss.png"},
                    "entities": {"boss": {"render": {"rect": {"w": 96, "h": 96}}}},
                }
            )
        )

        assets = AssetRegistryLoader().load_assets(client_config, base_dir=tmp_path)
        doc = LevelDocument(id=6, assets=assets.assets)
        boss = doc.place_entity("boss", 500, 300)
        assert doc.entity_at(545, 300) == boss.id

        report = LevelExporter(
            server_config_path=str(server_config),
            client_config_path=str(client_config),
        ).export_runtime_levels(doc, tmp_path / "maps")

        assert report.ok
        server = orjson.loads(report.server.path.read_bytes())
        assert server["level_data"] == [{"ref": 20, "position": {"x": 500.0, "y": 300.0}}]
        assert not report.diagnostics
