"""
MapleStory Gear Compare - Flames (Bonus Stats)
==============================================
Flames are up to 4 bonus stat lines rolled onto an item. Values are taken as
entered by the player; no tier table is looked up.

Special stats:
- int_luk_flat (original "intLuk"): one line that adds to both INT and LUK
- all_stat_pct: goes into the All Stat % bucket, not onto any primary stat
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from maplestory_gear.constants import EquipType, MAX_FLAME_LINES, VALIDATION, clamp, equip_type_from_string
from maplestory_gear.stat_names import (
    ALL_STAT_PCT,
    INT_FLAT,
    INT_LUK_FLAT,
    LUK_FLAT,
    STAT_KEYS,
    normalize_stat_key,
)
from maplestory_gear.stats import StatVector, safe_number

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class FlameType:
    """One selectable flame stat from flames.json."""
    stat: str                       # Canonical stat key
    name: str = ""
    is_percent: bool = False
    equip_types: Tuple[EquipType, ...] = (EquipType.WEAPON, EquipType.ARMOR)
    flame_id: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> Optional['FlameType']:
        """Parse a flames.json entry. Returns None if the stat or equipTypes is unusable."""
        stat = normalize_stat_key(data.get("stat"))
        raw_types = data.get("equipTypes", ["weapon", "armor"])
        if stat is None or not isinstance(raw_types, list):
            return None
        equip_types = tuple(
            EquipType(t) for t in raw_types
            if isinstance(t, str) and t in ("weapon", "armor")
        )
        return cls(
            stat=stat,
            name=data.get("name", stat),
            is_percent=data.get("percent") is True,
            equip_types=equip_types,
            flame_id=data.get("id", stat),
        )


@dataclass
class FlameLine:
    """A single flame line on an item: stat + player-entered value."""
    stat: str
    value: float = 0.0

    def to_dict(self) -> Dict:
        return {"stat": self.stat, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict) -> 'FlameLine':
        return cls(stat=data.get("stat", ""), value=data.get("value", 0.0))


# =============================================================================
# AGGREGATION
# =============================================================================

def aggregate_flame_stats(flame_lines: Optional[Iterable[FlameLine]]) -> StatVector:
    """
    Sum the stats from up to 4 flame lines.

    Unknown stats and non-numeric values are skipped rather than raising,
    so a half-filled line never breaks the rest of the item.
    """
    totals: Dict[str, float] = {}

    for i, line in enumerate(flame_lines or []):
        if i >= MAX_FLAME_LINES:
            break
        if line is None or not line.stat:
            continue
        value = safe_number(line.value)
        if value == 0:
            continue

        stat = normalize_stat_key(line.stat)
        if stat == INT_LUK_FLAT:
            totals[INT_FLAT] = totals.get(INT_FLAT, 0.0) + value
            totals[LUK_FLAT] = totals.get(LUK_FLAT, 0.0) + value
        elif stat in STAT_KEYS:
            # all_stat_pct lands in its own bucket like any other key
            totals[stat] = totals.get(stat, 0.0) + value
        else:
            logger.debug(f"aggregate_flame_stats: ignoring unknown flame stat {line.stat!r}")

    return StatVector(**totals)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def is_flame_percent(stat: str, flame_types: Sequence[FlameType]) -> bool:
    """Whether a flame stat is entered as a percentage."""
    key = normalize_stat_key(stat)
    return any(t.stat == key and t.is_percent for t in flame_types)


def clamp_flame_value(stat: str, value, flame_types: Sequence[FlameType]) -> float:
    """Clamp a flame value to 0-100 for percent stats, 0-9999 for flat stats."""
    range_key = "flame_percent" if is_flame_percent(stat, flame_types) else "flame_flat"
    low, high = VALIDATION[range_key]
    return clamp(value, low, high)


def get_flame_types_for(equip_type, flame_types: Sequence[FlameType]) -> List[FlameType]:
    """Flame stats that can roll on a category."""
    equip_type = equip_type_from_string(equip_type)
    return [t for t in flame_types if equip_type in t.equip_types]


def get_allowed_flame_stats(beneficial_stats: Iterable[str], flame_types: Sequence[FlameType]) -> List[str]:
    """
    Flame stats worth showing for a class.

    All Stat % is always useful. INT+LUK only counts when both INT and LUK
    are beneficial; everything else must be beneficial itself.
    """
    beneficial = set(beneficial_stats)
    allowed = []
    for t in flame_types:
        if t.stat == ALL_STAT_PCT:
            allowed.append(t.stat)
        elif t.stat == INT_LUK_FLAT:
            if INT_FLAT in beneficial and LUK_FLAT in beneficial:
                allowed.append(t.stat)
        elif t.stat in beneficial:
            allowed.append(t.stat)
    return allowed


__all__ = [
    'FlameType',
    'FlameLine',
    'aggregate_flame_stats',
    'is_flame_percent',
    'clamp_flame_value',
    'get_flame_types_for',
    'get_allowed_flame_stats',
]
