"""
MapleStory Gear Compare - Standardized Stat Definitions
=======================================================
Central definition of the stat keys every gear calculation produces.

All sources (base stats, star force, flames, potential, set effects) use these
standard stat keys for consistency.

Naming Conventions:
- Flat stats: {stat}_flat (e.g., dex_flat, attack_flat)
- Percentage stats: {stat}_pct (e.g., damage_pct, all_stat_pct)
- Original tool keys (str, watk, bossDmg, ...) are accepted through STAT_ALIASES
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from maplestory_gear.stats import StatVector


class StatCategory(Enum):
    """Categories of stats for grouping in UI."""
    MAIN_STAT = "main_stat"
    ATTACK = "attack"
    DEFENSE = "defense"
    DAMAGE = "damage"


class StatType(Enum):
    """How the stat is applied in calculations."""
    FLAT = "flat"           # Added directly (e.g., +50 STR)
    PERCENT = "percent"     # Percentage bonus (e.g., +9% all stat)


@dataclass(frozen=True)
class StatDefinition:
    """Definition of a stat with all metadata."""
    key: str                          # Internal key (e.g., "str_flat")
    label: str                        # Badge label (e.g., "STR")
    display_name: str                 # Display name (e.g., "STR (Flat)")
    category: StatCategory
    stat_type: StatType
    original_key: str = ""            # Key used by gear/flame/potential JSON

    @property
    def is_percent(self) -> bool:
        return self.stat_type == StatType.PERCENT


# =============================================================================
# STAT KEY CONSTANTS (use these for consistency)
# =============================================================================

# Main Stats - Flat
STR_FLAT = "str_flat"
DEX_FLAT = "dex_flat"
INT_FLAT = "int_flat"
LUK_FLAT = "luk_flat"

# Attack Stats
ATTACK_FLAT = "attack_flat"
MAGIC_ATTACK_FLAT = "magic_attack_flat"

# Defense Stats
DEFENSE = "defense"
MAX_HP = "max_hp"

# Percent Stats
BOSS_DAMAGE = "boss_damage"
DEF_PEN = "def_pen"
DAMAGE_PCT = "damage_pct"
ALL_STAT_PCT = "all_stat_pct"
MAX_HP_PCT = "max_hp_pct"
MAX_MP_PCT = "max_mp_pct"

# Flame-only pseudo key: adds to both INT and LUK
INT_LUK_FLAT = "int_luk_flat"


# =============================================================================
# STAT DEFINITIONS REGISTRY
# =============================================================================

STAT_DEFINITIONS: Dict[str, StatDefinition] = {
    STR_FLAT: StatDefinition(STR_FLAT, "STR", "STR (Flat)", StatCategory.MAIN_STAT, StatType.FLAT, "str"),
    DEX_FLAT: StatDefinition(DEX_FLAT, "DEX", "DEX (Flat)", StatCategory.MAIN_STAT, StatType.FLAT, "dex"),
    INT_FLAT: StatDefinition(INT_FLAT, "INT", "INT (Flat)", StatCategory.MAIN_STAT, StatType.FLAT, "int"),
    LUK_FLAT: StatDefinition(LUK_FLAT, "LUK", "LUK (Flat)", StatCategory.MAIN_STAT, StatType.FLAT, "luk"),
    ATTACK_FLAT: StatDefinition(ATTACK_FLAT, "WATK", "Weapon Attack", StatCategory.ATTACK, StatType.FLAT, "watk"),
    MAGIC_ATTACK_FLAT: StatDefinition(MAGIC_ATTACK_FLAT, "MATT", "Magic Attack", StatCategory.ATTACK, StatType.FLAT, "matt"),
    DEFENSE: StatDefinition(DEFENSE, "DEF", "Defense", StatCategory.DEFENSE, StatType.FLAT, "def"),
    MAX_HP: StatDefinition(MAX_HP, "HP", "Max HP", StatCategory.DEFENSE, StatType.FLAT, "hp"),
    BOSS_DAMAGE: StatDefinition(BOSS_DAMAGE, "Boss%", "Boss Damage %", StatCategory.DAMAGE, StatType.PERCENT, "bossDmg"),
    DEF_PEN: StatDefinition(DEF_PEN, "IED%", "Ignore Defense %", StatCategory.DAMAGE, StatType.PERCENT, "ied"),
    DAMAGE_PCT: StatDefinition(DAMAGE_PCT, "Dmg%", "Damage %", StatCategory.DAMAGE, StatType.PERCENT, "dmg"),
    ALL_STAT_PCT: StatDefinition(ALL_STAT_PCT, "All%", "All Stat %", StatCategory.MAIN_STAT, StatType.PERCENT, "allStat"),
    MAX_HP_PCT: StatDefinition(MAX_HP_PCT, "HP%", "Max HP %", StatCategory.DEFENSE, StatType.PERCENT, "hpPercent"),
    MAX_MP_PCT: StatDefinition(MAX_MP_PCT, "MP%", "Max MP %", StatCategory.DEFENSE, StatType.PERCENT, "mpPercent"),
}

# Canonical order of every StatVector
STAT_KEYS: Tuple[str, ...] = tuple(STAT_DEFINITIONS)

PRIMARY_STAT_KEYS: Tuple[str, ...] = (STR_FLAT, DEX_FLAT, INT_FLAT, LUK_FLAT)

# Lowercased alias -> canonical key
STAT_ALIASES: Dict[str, str] = {
    defn.original_key.lower(): key for key, defn in STAT_DEFINITIONS.items()
}
STAT_ALIASES.update({
    "intluk": INT_LUK_FLAT,
    "int_luk": INT_LUK_FLAT,
    "attack": ATTACK_FLAT,
    "magic_attack": MAGIC_ATTACK_FLAT,
    "boss_dmg": BOSS_DAMAGE,
    "ignore_defense": DEF_PEN,
    "damage": DAMAGE_PCT,
    "all_stat": ALL_STAT_PCT,
    "hp_pct": MAX_HP_PCT,
    "mp_pct": MAX_MP_PCT,
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def normalize_stat_key(stat_key) -> Optional[str]:
    """
    Resolve a stat key from any source to its canonical form.

    Returns a StatVector key, INT_LUK_FLAT for the combined flame stat,
    or None if the key is unknown.
    """
    if not isinstance(stat_key, str) or not stat_key:
        return None
    if stat_key in STAT_DEFINITIONS or stat_key == INT_LUK_FLAT:
        return stat_key
    return STAT_ALIASES.get(stat_key.strip().lower().replace(" ", "_"))


def get_stat_definition(stat_key: str) -> Optional[StatDefinition]:
    """Get the definition for a stat key."""
    return STAT_DEFINITIONS.get(stat_key)


def get_stat_label(stat_key: str) -> str:
    """Get the short badge label for a stat key."""
    defn = STAT_DEFINITIONS.get(stat_key)
    if defn:
        return defn.label
    return stat_key


def get_display_name(stat_key: str) -> str:
    """Get the display name for a stat key."""
    defn = STAT_DEFINITIONS.get(stat_key)
    if defn:
        return defn.display_name
    # Fallback: convert key to title case
    return stat_key.replace("_", " ").title()


def is_percentage_stat(stat_key: str) -> bool:
    defn = STAT_DEFINITIONS.get(stat_key)
    return bool(defn and defn.is_percent)


def format_number(value: float) -> str:
    """Whole numbers without decimals, everything else to 2 places."""
    rounded = round(float(value), 2)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def format_stat_diff(
    diff: "StatVector",
    only_non_zero: bool = False,
    stat_keys: Optional[Iterable[str]] = None,
    value_suffix: str = "",
) -> List[str]:
    """
    Render a stat vector as badge strings, e.g. ["STR: +10", "HP: -25"].

    Args:
        diff: Vector to render
        only_non_zero: Skip stats whose value is 0
        stat_keys: Stats to include, in order (default: all)
        value_suffix: Appended to each value, e.g. "%" for potential diffs
    """
    keys = list(stat_keys) if stat_keys else list(STAT_KEYS)
    values = diff.to_dict()

    badges = []
    for key in keys:
        if key not in STAT_DEFINITIONS:
            continue
        value = values.get(key, 0.0)
        if only_non_zero and value == 0:
            continue
        # Sign follows what is printed, so 0.004 shows as "0", not "+0"
        sign = "+" if round(value, 2) > 0 else ""
        badges.append(f"{get_stat_label(key)}: {sign}{format_number(value)}{value_suffix}")
    return badges
