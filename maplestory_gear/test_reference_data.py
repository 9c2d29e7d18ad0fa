"""
Unit tests for reference_data.py - loading the JSON catalogs.

Covers the packaged data/ directory and custom directories built in tmp_path.
"""
import json
import logging

import pytest

from maplestory_gear.calculator import compose_stats
from maplestory_gear.constants import EquipmentSlot, EquipType, StarforceVariant
from maplestory_gear.equipment import EnhancementConfig
from maplestory_gear.reference_data import (
    DEFAULT_DATA_DIR,
    ReferenceTables,
    get_data_dir,
    load_item_catalog,
    load_reference_tables,
)
from maplestory_gear.starforce import DEFAULT_STARFORCE_TABLES, lookup_starforce_stats
from maplestory_gear.stat_names import BOSS_DAMAGE, INT_LUK_FLAT


def write_data_dir(path, flames=None, potential=None, set_effects=None, starforce=None):
    """Write a minimal set of reference files into path."""
    docs = {
        "flames.json": flames if flames is not None else {"flameTypes": []},
        "potential.json": potential if potential is not None else {"weapon": {"lines": []}, "armor": {"lines": []}},
        "set_effects.json": set_effects if set_effects is not None else {"sets": {}},
    }
    if starforce is not None:
        docs["starforce.json"] = starforce
    for name, doc in docs.items():
        (path / name).write_text(json.dumps(doc), encoding="utf-8")
    return str(path)


class TestPackagedData:
    """The reference data shipped with the package."""

    def test_load_reference_tables(self):
        tables = load_reference_tables(DEFAULT_DATA_DIR)
        assert len(tables.flame_types) == 12
        assert "a_str" in tables.potential_lines
        assert "w_boss" in tables.potential_lines
        assert "absolab" in tables.sets
        assert tables.starforce is DEFAULT_STARFORCE_TABLES

    def test_flame_catalog(self):
        tables = load_reference_tables(DEFAULT_DATA_DIR)
        stats = {t.stat for t in tables.flame_types}
        assert INT_LUK_FLAT in stats
        boss = next(t for t in tables.flame_types if t.stat == BOSS_DAMAGE)
        assert boss.is_percent
        assert boss.equip_types == (EquipType.WEAPON,)

    def test_potential_categories(self):
        tables = load_reference_tables(DEFAULT_DATA_DIR)
        assert tables.potential_lines["w_boss"].equip_type == EquipType.WEAPON
        assert tables.potential_lines["a_str"].equip_type == EquipType.ARMOR

    def test_tables_are_read_only(self):
        tables = load_reference_tables(DEFAULT_DATA_DIR)
        with pytest.raises(TypeError):
            tables.sets["new_set"] = None
        with pytest.raises(TypeError):
            tables.potential_lines["new_line"] = None

    def test_nested_tables_are_read_only(self):
        tables = load_reference_tables(DEFAULT_DATA_DIR)
        with pytest.raises(TypeError):
            tables.sets["absolab"].cumulative[2] = None
        with pytest.raises(TypeError):
            tables.potential_lines["a_str"].ranks["mythic"] = (1, 2)
        with pytest.raises(TypeError):
            tables.starforce.class_stats[EquipType.ARMOR]["160-199"] = (0,) * 31
        with pytest.raises(TypeError):
            tables.starforce.attack[EquipType.WEAPON] = {}

    def test_item_catalog(self):
        items = load_item_catalog(DEFAULT_DATA_DIR)
        rod = items["absolab_shining_rod"]
        assert rod.equip_type == EquipType.WEAPON
        assert rod.has_weapon_attack and rod.has_magic_attack
        assert items["tyrant_cape"].starforce_variant == StarforceVariant.SUPERIOR
        assert items["guardian_angel_ring"].max_stars == 22
        with pytest.raises(TypeError):
            items["x"] = rod

    def test_catalog_is_consistent(self):
        """Every item uses a known slot, and every set it names exists."""
        tables = load_reference_tables(DEFAULT_DATA_DIR)
        slots = {s.value for s in EquipmentSlot}
        for item in load_item_catalog(DEFAULT_DATA_DIR).values():
            assert item.slot in slots, item.item_id
            if item.set_id:
                assert item.set_id in tables.sets, item.item_id

    def test_compose_packaged_item(self):
        tables = load_reference_tables(DEFAULT_DATA_DIR)
        hat = load_item_catalog(DEFAULT_DATA_DIR)["absolab_mage_hat"]
        stats = compose_stats(hat, EnhancementConfig(stars=17, set_piece_count=2), tables)
        assert stats.int_flat == 45 + 66
        assert stats.magic_attack_flat == 40 + 21 + 20
        assert stats.max_hp == 255 + 1500


class TestDataDir:
    """MAPLE_GEAR_DATA_DIR handling."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("MAPLE_GEAR_DATA_DIR", raising=False)
        assert get_data_dir() == DEFAULT_DATA_DIR

    def test_env_override(self, monkeypatch, tmp_path):
        write_data_dir(tmp_path, set_effects={"sets": {"only": {"maxPieces": 3, "cumulative": {}}}})
        monkeypatch.setenv("MAPLE_GEAR_DATA_DIR", str(tmp_path))
        assert get_data_dir() == str(tmp_path)
        assert list(load_reference_tables().sets) == ["only"]


class TestCustomData:
    """Loading from a directory built in the test."""

    def test_custom_starforce(self, tmp_path):
        data_dir = write_data_dir(tmp_path, starforce={"armor": {"160-199": [0, 100]}})
        tables = load_reference_tables(data_dir)
        assert tables.starforce is not DEFAULT_STARFORCE_TABLES
        stats = lookup_starforce_stats(160, 1, "armor", False, False, "hat", tables=tables.starforce)
        assert stats.str_flat == 100
        assert stats.attack_flat == 0

    def test_bad_entries_skipped(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING)
        data_dir = write_data_dir(
            tmp_path,
            flames={"flameTypes": [{"stat": "critRate"}, {"stat": "str"}, "junk"]},
        )
        tables = load_reference_tables(data_dir)
        assert [t.stat for t in tables.flame_types] == ["str_flat"]
        assert "skipping flame type" in caplog.text

    def test_flame_with_null_equip_types_skipped(self, caplog):
        caplog.set_level(logging.WARNING)
        tables = ReferenceTables.from_data(flames={"flameTypes": [
            {"stat": "str", "equipTypes": None},
            {"stat": "dex", "equipTypes": ["armor"]},
        ]})
        assert [t.stat for t in tables.flame_types] == ["dex_flat"]
        assert "skipping flame type" in caplog.text

    def test_potential_with_list_ranks_skipped(self, caplog):
        caplog.set_level(logging.WARNING)
        tables = ReferenceTables.from_data(potential={"armor": {"lines": [
            {"id": "bad", "stat": "str", "ranks": [[9, 9]]},
            {"id": "good", "stat": "str", "ranks": {"unique": [9, 9]}},
        ]}})
        assert list(tables.potential_lines) == ["good"]
        assert "skipping armor line" in caplog.text

    def test_set_with_non_object_bonus(self, caplog):
        caplog.set_level(logging.WARNING)
        tables = ReferenceTables.from_data(set_effects={"sets": {
            "x": {"maxPieces": 4, "cumulative": {"2": 5, "3": {"hp": 100}}},
            "y": {"maxPieces": 4, "cumulative": [1, 2]},
        }})
        assert list(tables.sets["x"].cumulative) == [3]
        assert len(tables.sets["y"].cumulative) == 0
        assert "skipping bad bonus" in caplog.text
        assert "cumulative must be an object" in caplog.text

    def test_wrong_collection_types(self, caplog):
        caplog.set_level(logging.WARNING)
        tables = ReferenceTables.from_data(
            flames={"flameTypes": {"str": {}}},
            potential={"weapon": [], "armor": {"lines": None}},
            set_effects={"sets": []},
        )
        assert tables.flame_types == ()
        assert len(tables.potential_lines) == 0
        assert len(tables.sets) == 0
        assert "flameTypes must be a list" in caplog.text
        assert "weapon must be a dict" in caplog.text
        assert "sets must be a dict" in caplog.text

    def test_bad_starforce_shapes_ignored(self, tmp_path):
        data_dir = write_data_dir(tmp_path, starforce={"armor": [1, 2], "weapon": {"160-199": 5}, "superior": 7})
        tables = load_reference_tables(data_dir)
        stats = lookup_starforce_stats(160, 17, "armor", False, False, "hat", tables=tables.starforce)
        assert stats.str_flat == 0
        assert stats.max_hp == 255

    def test_duplicate_potential_id_first_wins(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING)
        data_dir = write_data_dir(tmp_path, potential={
            "weapon": {"lines": [{"id": "dup", "stat": "bossDmg", "ranks": {"unique": [30, 30]}}]},
            "armor": {"lines": [{"id": "dup", "stat": "str", "ranks": {"unique": [9, 9]}}]},
        })
        tables = load_reference_tables(data_dir)
        assert tables.potential_lines["dup"].stat == BOSS_DAMAGE
        assert "duplicate line id" in caplog.text

    def test_missing_top_level_key(self, tmp_path):
        data_dir = write_data_dir(tmp_path, flames={"flames": []})
        with pytest.raises(ValueError, match="flameTypes"):
            load_reference_tables(data_dir)

    def test_invalid_json(self, tmp_path):
        data_dir = write_data_dir(tmp_path)
        (tmp_path / "set_effects.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="invalid JSON"):
            load_reference_tables(data_dir)

    def test_top_level_not_object(self, tmp_path):
        data_dir = write_data_dir(tmp_path)
        (tmp_path / "potential.json").write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            load_reference_tables(data_dir)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_reference_tables(str(tmp_path))

    def test_item_catalog_skips_entries_without_id(self, tmp_path):
        (tmp_path / "gear.json").write_text(json.dumps({"gear": [
            {"name": "No Id"},
            {"id": "hat", "slot": "hat", "baseStats": {"str": 10}},
        ]}), encoding="utf-8")
        items = load_item_catalog(str(tmp_path))
        assert list(items) == ["hat"]
        assert items["hat"].base_stats.str_flat == 10

    def test_item_catalog_requires_gear_key(self, tmp_path):
        (tmp_path / "gear.json").write_text(json.dumps({"items": []}), encoding="utf-8")
        with pytest.raises(ValueError, match="gear"):
            load_item_catalog(str(tmp_path))


class TestReferenceTables:
    """ReferenceTables construction."""

    def test_empty_defaults(self):
        tables = ReferenceTables()
        assert tables.flame_types == ()
        assert len(tables.potential_lines) == 0
        assert len(tables.sets) == 0
        assert tables.starforce is DEFAULT_STARFORCE_TABLES

    def test_from_data_none(self):
        tables = ReferenceTables.from_data()
        assert tables.flame_types == ()
        assert tables.starforce is DEFAULT_STARFORCE_TABLES
