"""Tests for the level document model and its editing operations."""

import pytest

from rtype_maped.levels.models import (
    AssetInfo,
    LevelDocument,
    PlacedEntity,
    level_id_from_background,
)


class TestDefaults:
    """Default-initialized documents."""

    def test_level_document_defaults(self) -> None:
        doc = LevelDocument()

        assert doc.id == 1
        assert doc.scroll_speed == 2.0
        assert (doc.width, doc.height) == (800, 600)
        assert doc.background_name == ""
        assert doc.background_repeat_count == 1
        assert doc.game_config_path == "./assets/configs/rtype.json"
        assert doc.entities == []
        assert doc.assets == {}

    def test_documents_do_not_share_collections(self) -> None:
        first, second = LevelDocument(), LevelDocument()
        first.place_entity("player", 0, 0)

        assert second.entities == []

    def test_asset_info_default_size(self) -> None:
        assert AssetInfo("sprites/ship.png") == AssetInfo("sprites/ship.png", 32, 32)


class TestEditingOperations:
    """Placement, move, delete and hit testing."""

    def test_place_assigns_increasing_ids(self) -> None:
        doc = LevelDocument()

        first = doc.place_entity("player", 10, 20)
        second = doc.place_entity("enemy", 30, 40)

        assert (first.id, second.id) == (0, 1)
        assert doc.entities == [first, second]
        assert isinstance(first.x, float)

    def test_next_id_continues_after_loaded_ids(self) -> None:
        """Numbering resumes above the highest existing id."""
        doc = LevelDocument(entities=[PlacedEntity(7, "WALL"), PlacedEntity(3, "DOOR")])

        assert doc.next_entity_id() == 8
        assert doc.place_entity("WALL", 0, 0).id == 8

    def test_move_entity(self) -> None:
        doc = LevelDocument()
        entity = doc.place_entity("player", 0, 0)

        assert doc.move_entity(entity.id, 50, 60)
        assert (entity.x, entity.y) == (50.0, 60.0)
        assert not doc.move_entity(99, 1, 1)

    @pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_positions_are_rejected(self, bad: float) -> None:
        doc = LevelDocument()
        entity = doc.place_entity("player", 1, 2)

        with pytest.raises(ValueError):
            doc.place_entity("player", bad, 0)
        with pytest.raises(ValueError):
            doc.move_entity(entity.id, 0, bad)

        assert doc.entities == [entity]
        assert (entity.x, entity.y) == (1.0, 2.0)

    def test_remove_entity(self) -> None:
        doc = LevelDocument()
        kept = doc.place_entity("player", 0, 0)
        removed = doc.place_entity("enemy", 0, 0)

        assert doc.remove_entity(removed.id)
        assert doc.entities == [kept]
        assert not doc.remove_entity(removed.id)

    def test_entity_at_prefers_topmost(self) -> None:
        """Overlapping entities resolve to the last one drawn."""
        doc = LevelDocument()
        doc.place_entity("rock", 100, 100)
        top = doc.place_entity("rock", 105, 105)

        assert doc.entity_at(102, 102) == top.id

    def test_entity_at_uses_asset_size(self) -> None:
        doc = LevelDocument(assets={"boss": AssetInfo("boss.png", 128, 64)})
        boss = doc.place_entity("boss", 200, 200)
        small = doc.place_entity("drone", 400, 400)

        # 128px box around the boss: 136..264
        assert doc.entity_at(260, 200) == boss.id
        assert doc.entity_at(265, 200) is None
        # 32px default box around the drone: 384..416
        assert doc.entity_at(415, 385) == small.id
        assert doc.entity_at(417, 400) is None

    def test_entity_at_empty(self) -> None:
        assert LevelDocument().entity_at(0, 0) is None

    @pytest.mark.parametrize("requested, expected", [(0, 1), (-3, 1), (4, 4), (10, 10), (11, 10)])
    def test_background_repeat_count_is_clamped(self, requested: int, expected: int) -> None:
        doc = LevelDocument()

        assert doc.set_background_repeat_count(requested) == expected
        assert doc.background_repeat_count == expected

    def test_set_background_derives_level_id(self) -> None:
        doc = LevelDocument()
        doc.set_background("stage_3.png")

        assert doc.background_name == "stage_3.png"
        assert doc.id == 3


class TestLevelIdFromBackground:
    """Map id derived from background file names."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("stage_3.png", 3),
            ("level_12.jpg", 12),
            ("bg_3b.png", 3),
            ("bg.png", 1),
            ("bg_x.png", 1),
            ("bg_.png", 1),
            ("a.b_3.png", 1),
            ("bg_99999999999999999999.png", 1),
            ("stage_3", 1),
            ("", 1),
        ],
    )
    def test_level_id_from_background(self, name: str, expected: int) -> None:
        assert level_id_from_background(name) == expected
