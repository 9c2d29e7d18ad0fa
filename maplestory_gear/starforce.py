"""
MapleStory Gear Compare - Star Force Stat Tables
================================================
Cumulative stat and attack bonuses granted by star force enhancement.

Source: MapleStory Wiki, Star Force Enhancement/Stat Tables (GMS).
Level brackets: 128-137, 138-149, 150-159, 160-199, 200-249.
Normal gear goes to 30 stars; Superior gear is capped at 15.

Table layout: index N holds the cumulative bonus at ★N (index 0 = no stars).
Class stats stop growing after ★22; stars 23+ only add attack.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence, Tuple

from maplestory_gear.constants import (
    EquipType,
    StarforceVariant,
    MAX_STARS_BY_VARIANT,
    NO_HP_SLOTS,
    STARFORCE_HP_BASE,
    STARFORCE_HP_PER_STAR,
    STARFORCE_HP_CAP,
    clamp,
    equip_type_from_string,
    variant_from_string,
)
from maplestory_gear.stats import StatVector, safe_number


# =============================================================================
# LEVEL BRACKETS
# =============================================================================

# (lower bound, bracket label), highest first
LEVEL_BRACKETS: Tuple[Tuple[int, str], ...] = (
    (200, "200-249"),
    (160, "160-199"),
    (150, "150-159"),
    (138, "138-149"),
    (128, "128-137"),
)

LOWEST_BRACKET = "128-137"

# Used when a category has no table for the requested bracket
FALLBACK_BRACKET = "160-199"


def get_level_bracket(level) -> str:
    """
    Get the star force bracket for an item level.

    Picks the highest bracket whose lower bound is <= level.
    Levels below every bracket use the lowest one.
    """
    lvl = safe_number(level)
    for lower_bound, label in LEVEL_BRACKETS:
        if lvl >= lower_bound:
            return label
    return LOWEST_BRACKET


# =============================================================================
# STAR FORCE DATA (30-star revision)
# =============================================================================

# Cumulative class stats (all four primary stats) for armor/accessories
ARMOR_CLASS_STATS: Dict[str, Tuple[int, ...]] = {
    "128-137": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 47, 54, 61, 68, 75, 75, 75, 75, 75, 75, 75, 75, 75, 75, 75),
    "138-149": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 49, 58, 67, 76, 85, 94, 103, 103, 103, 103, 103, 103, 103, 103, 103),
    "150-159": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 47, 54, 61, 68, 75, 94, 103, 103, 103, 103, 103, 103, 103, 103, 103),
    "160-199": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 53, 66, 79, 92, 105, 130, 145, 145, 145, 145, 145, 145, 145, 145, 145),
    "200-249": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 55, 70, 85, 100, 115, 142, 159, 159, 159, 159, 159, 159, 159, 159, 159),
}

# Cumulative Attack / Magic Attack for armor/accessories (both get the same value)
ARMOR_ATTACK: Dict[str, Tuple[int, ...]] = {
    "128-137": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 7, 15, 24, 34, 45, 45, 45, 45, 45, 45, 157, 180, 204, 229, 255),
    "138-149": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 8, 17, 27, 38, 50, 63, 78, 95, 114, 135, 168, 192, 217, 243, 270),
    "150-159": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 7, 15, 24, 34, 45, 63, 78, 95, 114, 135, 179, 204, 230, 257, 285),
    "160-199": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 10, 21, 33, 46, 60, 87, 106, 127, 150, 175, 201, 228, 256, 285, 315),
    "200-249": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 12, 25, 39, 54, 70, 99, 120, 143, 168, 195, 223, 252, 282, 313, 345),
}

# Cumulative class stats for weapons
WEAPON_CLASS_STATS: Dict[str, Tuple[int, ...]] = {
    "128-137": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 47, 54, 61, 68, 75, 75, 75, 75, 75, 75, 75, 75, 75, 75, 75),
    "138-149": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 49, 58, 67, 76, 85, 94, 103, 103, 103, 103, 103, 103, 103, 103, 103),
    "150-159": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 51, 62, 73, 84, 95, 118, 131, 131, 131, 131, 131, 131, 131, 131, 131),
    "160-199": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 53, 66, 79, 92, 105, 130, 145, 145, 145, 145, 145, 145, 145, 145, 145),
    "200-249": (0, 2, 4, 6, 8, 10, 13, 16, 19, 22, 25, 28, 31, 34, 37, 40, 55, 70, 85, 100, 115, 142, 159, 159, 159, 159, 159, 159, 159, 159, 159),
}

# Cumulative Attack / Magic Attack for weapons. Wiki lists 0-25★; 26-30★ are the GMS 30-star extension.
WEAPON_ATTACK: Dict[str, Tuple[int, ...]] = {
    "128-137": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 6, 13, 20, 28, 37, 37, 37, 37, 37, 37, 157, 180, 204, 229, 255),
    "138-149": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 7, 15, 24, 34, 45, 56, 68, 81, 95, 110, 168, 192, 217, 243, 270),
    "150-159": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 8, 17, 26, 36, 47, 64, 78, 95, 110, 125, 179, 204, 230, 257, 285),
    "160-199": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 9, 18, 28, 39, 51, 85, 102, 136, 171, 207, 233, 260, 288, 317, 347),
    "200-249": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 13, 26, 40, 54, 69, 102, 120, 143, 168, 195, 223, 252, 282, 313, 345),
}

# Superior gear (Level 150+): cumulative all stats per star, max ★15
SUPERIOR_ALL_STATS: Tuple[int, ...] = (0, 19, 39, 61, 86, 115, 140, 165, 190, 215, 240, 265, 290, 315, 340, 365)


@dataclass(frozen=True)
class StarforceTables:
    """
    All star force lookup tables for one schema revision.

    Passed explicitly into every lookup so tests and callers can swap tables
    without touching module state.
    """
    class_stats: Mapping[EquipType, Mapping[str, Tuple[int, ...]]] = field(default_factory=dict)
    attack: Mapping[EquipType, Mapping[str, Tuple[int, ...]]] = field(default_factory=dict)
    superior: Tuple[int, ...] = ()

    def __post_init__(self):
        # Read-only copies all the way down
        for name in ("class_stats", "attack"):
            tables = {
                equip_type: MappingProxyType({label: tuple(values) for label, values in brackets.items()})
                for equip_type, brackets in getattr(self, name).items()
            }
            object.__setattr__(self, name, MappingProxyType(tables))
        object.__setattr__(self, "superior", tuple(self.superior))

    def class_stat_table(self, equip_type: EquipType, bracket: str) -> Sequence[int]:
        """Class stat table for a category/bracket, falling back to 160-199."""
        return _bracket_table(self.class_stats.get(equip_type, {}), bracket)

    def attack_table(self, equip_type: EquipType, bracket: str) -> Sequence[int]:
        """Attack table for a category/bracket, falling back to 160-199."""
        return _bracket_table(self.attack.get(equip_type, {}), bracket)

    @classmethod
    def from_dict(cls, data: Dict) -> 'StarforceTables':
        """
        Build tables from the JSON layout:
        {"armor": {...}, "armorAtk": {...}, "weapon": {...}, "weaponAtk": {...},
         "superior": {"150": [...]}}
        """
        def brackets(key: str) -> Dict[str, Tuple[int, ...]]:
            tables = data.get(key) or {}
            if not isinstance(tables, dict):
                return {}
            return {
                label: tuple(safe_number(v) for v in values)
                for label, values in tables.items()
                if isinstance(values, list)
            }

        superior = data.get("superior") or {}
        if isinstance(superior, dict):
            # One table regardless of level; take the first listed
            superior = next(iter(superior.values()), ())
        if not isinstance(superior, (list, tuple)):
            superior = ()
        return cls(
            class_stats={EquipType.ARMOR: brackets("armor"), EquipType.WEAPON: brackets("weapon")},
            attack={EquipType.ARMOR: brackets("armorAtk"), EquipType.WEAPON: brackets("weaponAtk")},
            superior=tuple(safe_number(v) for v in superior),
        )


def _bracket_table(tables: Mapping[str, Tuple[int, ...]], bracket: str) -> Sequence[int]:
    table = tables.get(bracket)
    if table is None:
        table = tables.get(FALLBACK_BRACKET, ())
    return table


def _table_value(table: Sequence[int], index: int) -> float:
    """Cumulative value at index. Anything past the table is 0."""
    if 0 <= index < len(table):
        return table[index]
    return 0


DEFAULT_STARFORCE_TABLES = StarforceTables(
    class_stats={EquipType.ARMOR: ARMOR_CLASS_STATS, EquipType.WEAPON: WEAPON_CLASS_STATS},
    attack={EquipType.ARMOR: ARMOR_ATTACK, EquipType.WEAPON: WEAPON_ATTACK},
    superior=SUPERIOR_ALL_STATS,
)


# =============================================================================
# CAPS
# =============================================================================

def get_max_stars_for_variant(variant, override: Optional[int] = None) -> int:
    """
    Get the star cap for a variant.

    Args:
        variant: "normal" or "superior" (or StarforceVariant)
        override: Item-specific max star count, wins when set

    Returns:
        30 for normal, 15 for superior, or the override
    """
    if override is not None:
        return max(0, int(safe_number(override)))
    return MAX_STARS_BY_VARIANT[variant_from_string(variant)]


def clamp_stars(stars, max_stars: int) -> int:
    """Clamp a star count to [0, max_stars]. Junk input is 0."""
    return int(clamp(stars, 0, max_stars))


def get_hp_bonus(stars: int, slot: str) -> int:
    """
    HP granted by armor star force.

    ★0 gives nothing; ★1 gives 5 and each star adds 25, capped at 255.
    Gloves, shoes, face and eye accessories never get HP.
    """
    if slot in NO_HP_SLOTS or stars < 1:
        return 0
    return min(STARFORCE_HP_CAP, STARFORCE_HP_BASE + (stars - 1) * STARFORCE_HP_PER_STAR)


# =============================================================================
# LOOKUP
# =============================================================================

def lookup_starforce_stats(
    level,
    stars,
    equip_type,
    has_weapon_attack: bool,
    has_magic_attack: bool,
    slot: str,
    variant=StarforceVariant.NORMAL,
    tables: StarforceTables = DEFAULT_STARFORCE_TABLES,
    max_stars: Optional[int] = None,
) -> StatVector:
    """
    Get the stats granted by star force on one item.

    Args:
        level: Item level requirement (selects the bracket)
        stars: Current star count, clamped to the variant cap
        equip_type: "weapon" or "armor" (accessories are armor)
        has_weapon_attack: Item has base weapon attack (weapons only)
        has_magic_attack: Item has base magic attack (weapons only)
        slot: Equipment slot, decides HP eligibility for armor
        variant: "normal" or "superior"
        tables: Star force tables to read from
        max_stars: Item-specific star cap override

    Returns:
        StatVector with the cumulative star force bonus
    """
    variant = variant_from_string(variant)
    equip_type = equip_type_from_string(equip_type)
    stars = clamp_stars(stars, get_max_stars_for_variant(variant, max_stars))

    if variant == StarforceVariant.SUPERIOR:
        return StatVector.primary_stats(_table_value(tables.superior, stars))

    bracket = get_level_bracket(level)
    class_stat = _table_value(tables.class_stat_table(equip_type, bracket), stars)
    attack = _table_value(tables.attack_table(equip_type, bracket), stars)

    if equip_type == EquipType.WEAPON:
        # Hybrid weapons with both base attack types get both
        return StatVector.primary_stats(
            class_stat,
            attack_flat=attack if has_weapon_attack else 0,
            magic_attack_flat=attack if has_magic_attack else 0,
        )

    return StatVector.primary_stats(
        class_stat,
        attack_flat=attack,
        magic_attack_flat=attack,
        max_hp=get_hp_bonus(stars, slot),
    )


__all__ = [
    'LEVEL_BRACKETS',
    'FALLBACK_BRACKET',
    'StarforceTables',
    'DEFAULT_STARFORCE_TABLES',
    'get_level_bracket',
    'get_max_stars_for_variant',
    'clamp_stars',
    'get_hp_bonus',
    'lookup_starforce_stats',
]
