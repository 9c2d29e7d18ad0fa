"""
Unit tests for star force lookups.

Reference points (160-199 bracket, 30-star tables):
- Armor ★17: class stats 66, attack 21
- Weapon ★17: class stats 66, attack 18
- Armor ★22: attack 106
- Superior ★15: all stats 365

Tests:
1. Level brackets
2. Table shapes
3. Armor / weapon / superior lookups
4. Star clamping and HP ramp
5. Custom and missing tables
"""
import unittest

from maplestory_gear.constants import EquipType, StarforceVariant, MAX_STARS_NORMAL, MAX_STARS_SUPERIOR
from maplestory_gear.starforce import (
    ARMOR_ATTACK,
    ARMOR_CLASS_STATS,
    DEFAULT_STARFORCE_TABLES,
    LEVEL_BRACKETS,
    SUPERIOR_ALL_STATS,
    WEAPON_ATTACK,
    WEAPON_CLASS_STATS,
    StarforceTables,
    clamp_stars,
    get_hp_bonus,
    get_level_bracket,
    get_max_stars_for_variant,
    lookup_starforce_stats,
)


def armor(stars, level=160, slot="hat", **kwargs):
    return lookup_starforce_stats(level, stars, "armor", False, False, slot, **kwargs)


def weapon(stars, watk=True, matt=False, level=160, **kwargs):
    return lookup_starforce_stats(level, stars, "weapon", watk, matt, "weapon", **kwargs)


def superior(stars, level=150, slot="cape"):
    return lookup_starforce_stats(level, stars, "armor", True, True, slot, "superior")


class TestLevelBrackets(unittest.TestCase):
    """Level -> bracket label."""

    def test_bracket_bounds(self):
        self.assertEqual(get_level_bracket(128), "128-137")
        self.assertEqual(get_level_bracket(137), "128-137")
        self.assertEqual(get_level_bracket(138), "138-149")
        self.assertEqual(get_level_bracket(150), "150-159")
        self.assertEqual(get_level_bracket(160), "160-199")
        self.assertEqual(get_level_bracket(199), "160-199")
        self.assertEqual(get_level_bracket(200), "200-249")
        self.assertEqual(get_level_bracket(250), "200-249")

    def test_low_level_uses_lowest_bracket(self):
        self.assertEqual(get_level_bracket(100), "128-137")
        self.assertEqual(get_level_bracket(None), "128-137")


class TestTableShapes(unittest.TestCase):
    """Every normal table covers ★0-★30; superior covers ★0-★15."""

    def test_normal_tables_have_31_entries(self):
        for tables in (ARMOR_CLASS_STATS, ARMOR_ATTACK, WEAPON_CLASS_STATS, WEAPON_ATTACK):
            for _, label in LEVEL_BRACKETS:
                self.assertEqual(len(tables[label]), MAX_STARS_NORMAL + 1, label)

    def test_superior_table(self):
        self.assertEqual(len(SUPERIOR_ALL_STATS), MAX_STARS_SUPERIOR + 1)
        self.assertEqual(SUPERIOR_ALL_STATS[0], 0)
        self.assertEqual(SUPERIOR_ALL_STATS[15], 365)

    def test_tables_are_cumulative(self):
        """Cumulative tables never go down."""
        for tables in (ARMOR_CLASS_STATS, WEAPON_CLASS_STATS, WEAPON_ATTACK):
            for label, values in tables.items():
                self.assertEqual(list(values), sorted(values), label)


class TestArmorLookup(unittest.TestCase):
    """Armor and accessories."""

    def test_hat_star_17(self):
        """Level 160 hat ★17: 66 all stats, 21 attack on both types, 255 HP."""
        stats = lookup_starforce_stats(160, 17, "armor", False, True, "hat")
        self.assertEqual(stats.str_flat, 66)
        self.assertEqual(stats.dex_flat, 66)
        self.assertEqual(stats.int_flat, 66)
        self.assertEqual(stats.luk_flat, 66)
        self.assertEqual(stats.attack_flat, 21)
        self.assertEqual(stats.magic_attack_flat, 21)
        self.assertEqual(stats.max_hp, 255)
        self.assertEqual(stats.defense, 0)

    def test_star_0_is_zero(self):
        self.assertTrue(armor(0).is_zero())

    def test_star_22(self):
        self.assertEqual(armor(22).attack_flat, 106)
        self.assertEqual(armor(22).str_flat, 145)

    def test_armor_ignores_base_attack_flags(self):
        """Armor always grants both attack types."""
        self.assertEqual(
            lookup_starforce_stats(160, 17, "armor", False, False, "hat"),
            lookup_starforce_stats(160, 17, "armor", True, True, "hat"),
        )

    def test_bracket_changes_values(self):
        self.assertEqual(armor(17, level=200).attack_flat, 25)
        self.assertEqual(armor(17, level=150).attack_flat, 15)

    def test_unknown_equip_type_is_armor(self):
        self.assertEqual(
            lookup_starforce_stats(160, 17, "accessory", False, False, "ring"),
            lookup_starforce_stats(160, 17, EquipType.ARMOR, False, False, "ring"),
        )


class TestWeaponLookup(unittest.TestCase):
    """Weapons only get the attack types they already have."""

    def test_physical_weapon(self):
        stats = weapon(17)
        self.assertEqual(stats.str_flat, 66)
        self.assertEqual(stats.attack_flat, 18)
        self.assertEqual(stats.magic_attack_flat, 0)
        self.assertEqual(stats.max_hp, 0)

    def test_magic_weapon(self):
        stats = weapon(17, watk=False, matt=True)
        self.assertEqual(stats.attack_flat, 0)
        self.assertEqual(stats.magic_attack_flat, 18)

    def test_hybrid_weapon(self):
        stats = weapon(17, watk=True, matt=True)
        self.assertEqual(stats.attack_flat, 18)
        self.assertEqual(stats.magic_attack_flat, 18)

    def test_no_base_attack(self):
        stats = weapon(17, watk=False, matt=False)
        self.assertEqual(stats.attack_flat, 0)
        self.assertEqual(stats.magic_attack_flat, 0)
        self.assertEqual(stats.str_flat, 66)


class TestSuperiorLookup(unittest.TestCase):
    """Superior gear: primary stats only, capped at ★15."""

    def test_star_15(self):
        stats = superior(15)
        self.assertEqual(stats.str_flat, 365)
        self.assertEqual(stats.luk_flat, 365)

    def test_clamp_idempotent(self):
        self.assertEqual(superior(15), superior(999))
        self.assertEqual(superior(15), superior(16))

    def test_no_attack_defense_or_hp(self):
        for stars in range(0, 20):
            stats = superior(stars)
            self.assertEqual(stats.attack_flat, 0)
            self.assertEqual(stats.magic_attack_flat, 0)
            self.assertEqual(stats.defense, 0)
            self.assertEqual(stats.max_hp, 0)

    def test_level_does_not_matter(self):
        self.assertEqual(superior(10, level=150), superior(10, level=200))

    def test_weapon_category_ignored(self):
        stats = lookup_starforce_stats(150, 5, "weapon", True, True, "weapon", StarforceVariant.SUPERIOR)
        self.assertEqual(stats, superior(5))


class TestClamping(unittest.TestCase):
    """Star caps."""

    def test_over_max_equals_max(self):
        for level in (128, 140, 150, 160, 200):
            self.assertEqual(armor(999, level=level), armor(MAX_STARS_NORMAL, level=level))
            self.assertEqual(weapon(999, level=level), weapon(MAX_STARS_NORMAL, level=level))

    def test_negative_and_junk_stars(self):
        self.assertTrue(armor(-5).is_zero())
        self.assertTrue(armor("lots").is_zero())
        self.assertTrue(armor(float("nan")).is_zero())

    def test_max_stars_override(self):
        self.assertEqual(armor(25, max_stars=22), armor(22))

    def test_get_max_stars_for_variant(self):
        self.assertEqual(get_max_stars_for_variant("normal"), 30)
        self.assertEqual(get_max_stars_for_variant(StarforceVariant.SUPERIOR), 15)
        self.assertEqual(get_max_stars_for_variant("unheard-of"), 30)
        self.assertEqual(get_max_stars_for_variant("superior", 10), 10)

    def test_clamp_stars(self):
        self.assertEqual(clamp_stars(12.7, 30), 12)
        self.assertEqual(clamp_stars(40, 30), 30)
        self.assertEqual(clamp_stars(None, 30), 0)


class TestHpBonus(unittest.TestCase):
    """HP ramp for armor star force."""

    def test_ramp(self):
        self.assertEqual(get_hp_bonus(0, "hat"), 0)
        self.assertEqual(get_hp_bonus(1, "hat"), 5)
        self.assertEqual(get_hp_bonus(2, "hat"), 30)
        self.assertEqual(get_hp_bonus(11, "hat"), 255)
        self.assertEqual(get_hp_bonus(21, "hat"), 255)

    def test_lookup_hp(self):
        self.assertEqual(armor(1).max_hp, 5)
        self.assertEqual(armor(11).max_hp, 255)
        self.assertEqual(armor(21).max_hp, 255)

    def test_no_hp_slots(self):
        for slot in ("gloves", "shoes", "face", "eye"):
            for stars in range(0, MAX_STARS_NORMAL + 1):
                self.assertEqual(armor(stars, slot=slot).max_hp, 0, (slot, stars))


class TestCustomTables(unittest.TestCase):
    """Tables are passed in, not read from module state."""

    def test_missing_tables_contribute_zero(self):
        stats = armor(17, tables=StarforceTables())
        self.assertEqual(stats.str_flat, 0)
        self.assertEqual(stats.attack_flat, 0)
        # HP comes from the ramp, not a table
        self.assertEqual(stats.max_hp, 255)

    def test_missing_bracket_falls_back_to_160(self):
        tables = StarforceTables.from_dict({"armor": {"160-199": [0, 7, 14]}, "armorAtk": {}})
        self.assertEqual(armor(2, level=200, tables=tables).str_flat, 14)
        self.assertEqual(armor(2, level=130, tables=tables).str_flat, 14)

    def test_past_end_of_table_is_zero(self):
        tables = StarforceTables.from_dict({"armor": {"160-199": [0, 7, 14]}})
        self.assertEqual(armor(5, tables=tables).str_flat, 0)

    def test_superior_from_dict(self):
        tables = StarforceTables.from_dict({"superior": {"150": [0, 10, 20]}})
        stats = lookup_starforce_stats(150, 2, "armor", False, False, "cape", "superior", tables=tables)
        self.assertEqual(stats.str_flat, 20)

    def test_default_tables_are_read_only(self):
        """Writing through the shared tables fails and the module tables keep their values."""
        with self.assertRaises(TypeError):
            DEFAULT_STARFORCE_TABLES.class_stats[EquipType.ARMOR]["160-199"] = (0,) * 31
        with self.assertRaises(TypeError):
            DEFAULT_STARFORCE_TABLES.attack[EquipType.ARMOR] = {}
        self.assertEqual(ARMOR_CLASS_STATS["160-199"][17], 66)
        self.assertEqual(armor(17).str_flat, 66)

    def test_tables_copied_from_caller(self):
        """Changing the dict a table set was built from does not change the table set."""
        source = {"160-199": [0, 7, 14]}
        tables = StarforceTables(class_stats={EquipType.ARMOR: source})
        source["160-199"] = [0, 0, 0]
        self.assertEqual(armor(2, tables=tables).str_flat, 14)

    def test_default_tables_unchanged_by_lookup(self):
        before = DEFAULT_STARFORCE_TABLES.attack_table(EquipType.ARMOR, "160-199")
        armor(30)
        self.assertIs(DEFAULT_STARFORCE_TABLES.attack_table(EquipType.ARMOR, "160-199"), before)


if __name__ == '__main__':
    unittest.main()
