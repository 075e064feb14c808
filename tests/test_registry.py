"""Tests for the type registry resolver."""

import logging
from pathlib import Path

from rtype_maped.diagnostics import DiagnosticKind
from rtype_maped.registry import NO_REF, TypeRegistryResolver


class TestLoadForward:
    """Reading name -> ref pairs from a game config."""

    def test_reads_refs(self, write_game_config) -> None:
        """Entities carrying type.ref are recorded."""
        path = write_game_config({"enemy_basic": 3, "player": 1})

        result = TypeRegistryResolver().load_forward(path)

        assert result.loaded
        assert result.refs == {"enemy_basic": 3, "player": 1}
        assert not result.diagnostics

    def test_entities_without_ref_are_skipped(self, write_game_config) -> None:
        """Missing ref, sentinel ref and non-integer ref contribute nothing."""
        path = write_game_config(
            {"wall": None, "ghost": NO_REF, "flag": True, "label": "7", "boss": 9}
        )

        result = TypeRegistryResolver().load_forward(path)

        assert result.refs == {"boss": 9}
        assert not result.diagnostics

    def test_non_object_entities_are_ignored(self, tmp_path: Path) -> None:
        """An `entities` value that is not an object yields an empty mapping."""
        path = tmp_path / "game.json"
        path.write_text('{"entities": [1, 2, 3]}', encoding="utf-8")

        result = TypeRegistryResolver().load_forward(path)

        assert result.loaded
        assert result.refs == {}

    def test_missing_source_fails_soft(self, tmp_path: Path) -> None:
        """A missing config gives an empty mapping and one diagnostic."""
        result = TypeRegistryResolver().load_forward(tmp_path / "absent.json")

        assert not result.loaded
        assert result.refs == {}
        assert len(result.diagnostics.of_kind(DiagnosticKind.REGISTRY_LOAD_FAILED)) == 1

    def test_malformed_source_fails_soft(self, tmp_path: Path) -> None:
        """Unparseable JSON gives an empty mapping and one diagnostic."""
        path = tmp_path / "broken.json"
        path.write_text('{"entities": {"a": ', encoding="utf-8")

        result = TypeRegistryResolver().load_forward(path)

        assert not result.loaded
        assert result.refs == {}
        assert len(result.diagnostics) == 1

    def test_non_object_root_fails_soft(self, tmp_path: Path) -> None:
        """A JSON array root is reported like a parse failure."""
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        result = TypeRegistryResolver().load_forward(path)

        assert not result.loaded
        assert result.diagnostics.items[0].kind is DiagnosticKind.REGISTRY_LOAD_FAILED

    def test_source_is_reread_on_every_call(self, write_game_config) -> None:
        """No caching: edits to the config are seen by the next call."""
        resolver = TypeRegistryResolver()
        path = write_game_config({"enemy": 1})
        assert resolver.load_forward(path).refs == {"enemy": 1}

        write_game_config({"enemy": 4, "turret": 5})

        assert resolver.load_forward(path).refs == {"enemy": 4, "turret": 5}


class TestInvert:
    """Building the ref -> name lookup."""

    def test_greatest_name_wins_duplicate(self) -> None:
        """B sorts after A, so B keeps ref 1."""
        result = TypeRegistryResolver().invert({"A": 1, "B": 1, "C": 2})

        assert result.names == {1: "B", 2: "C"}
        duplicates = result.diagnostics.of_kind(DiagnosticKind.DUPLICATE_REF)
        assert len(duplicates) == 1
        assert "'B'" in duplicates[0].message
        assert "'A'" in duplicates[0].message
        assert "1" in duplicates[0].message

    def test_winner_independent_of_insertion_order(self) -> None:
        """The result depends on names only, not on dict order."""
        resolver = TypeRegistryResolver()

        first = resolver.invert({"c": 5, "a": 5, "b": 5})
        second = resolver.invert({"a": 5, "b": 5, "c": 5})

        assert first.names == second.names == {5: "c"}
        assert len(first.diagnostics) == 2

    def test_no_duplicates_no_diagnostics(self) -> None:
        result = TypeRegistryResolver().invert({"x": 1, "y": 2})

        assert result.names == {1: "x", 2: "y"}
        assert not result.diagnostics

    def test_empty_mapping(self) -> None:
        result = TypeRegistryResolver().invert({})

        assert result.names == {}
        assert not result.diagnostics

    def test_overwrite_is_logged(self, caplog) -> None:
        """Each overwrite is also written to the log."""
        with caplog.at_level(logging.WARNING, logger="rtype_maped"):
            TypeRegistryResolver().invert({"A": 1, "B": 1})

        assert any("Duplicate ref 1" in r.getMessage() for r in caplog.records)


class TestLoadInverse:
    """Loading and inverting in one step."""

    def test_combines_diagnostics(self, write_game_config) -> None:
        path = write_game_config({"bee": 2, "ant": 2})

        result = TypeRegistryResolver().load_inverse(path)

        assert result.names == {2: "bee"}
        assert len(result.diagnostics.of_kind(DiagnosticKind.DUPLICATE_REF)) == 1

    def test_missing_source(self, tmp_path: Path) -> None:
        result = TypeRegistryResolver().load_inverse(tmp_path / "absent.json")

        assert result.names == {}
        assert [d.kind for d in result.diagnostics] == [
            DiagnosticKind.REGISTRY_LOAD_FAILED
        ]
