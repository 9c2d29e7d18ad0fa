"""
MapleStory Gear Compare - Potential Lines
=========================================
Up to 3 potential lines per item, each picked from the potential catalog
(potential.json) and valued by its rarity rank range or an explicit value.

Potential is kept out of headline stats: the calculator reports it as a
separate percentage-point diff.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from maplestory_gear.constants import EquipType, MAX_POTENTIAL_LINES, VALIDATION, clamp, equip_type_from_string
from maplestory_gear.stat_names import STAT_KEYS, normalize_stat_key
from maplestory_gear.stats import StatVector, EMPTY_STATS, safe_number

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================

class PotentialRank(Enum):
    """Potential rarity rank from lowest to highest."""
    RARE = "rare"
    EPIC = "epic"
    UNIQUE = "unique"
    LEGENDARY = "legendary"


DEFAULT_RANK = PotentialRank.UNIQUE


def rank_key(rank) -> str:
    """Normalize a rank to its lowercase catalog key. Missing rank is unique."""
    if isinstance(rank, PotentialRank):
        return rank.value
    if not rank:
        return DEFAULT_RANK.value
    return str(rank).strip().lower()


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class PotentialLineDef:
    """A potential line from the catalog, with its value range per rank."""
    line_id: str
    stat: str                                   # Canonical stat key
    name: str = ""
    is_percent: bool = True
    ranks: Mapping[str, Tuple[float, float]] = field(default_factory=dict)
    equip_type: EquipType = EquipType.ARMOR

    def __post_init__(self):
        object.__setattr__(self, "ranks", MappingProxyType(dict(self.ranks)))

    def get_range(self, rank) -> Optional[Tuple[float, float]]:
        """(min, max) for a rank, or None if the line can't roll at that rank."""
        return self.ranks.get(rank_key(rank))

    @classmethod
    def from_dict(cls, data: Dict, equip_type=EquipType.ARMOR) -> Optional['PotentialLineDef']:
        """Parse a potential.json line. Returns None if id, stat or ranks is unusable."""
        line_id = data.get("id")
        stat = normalize_stat_key(data.get("stat"))
        raw_ranks = data.get("ranks") or {}
        if not line_id or stat is None or not isinstance(raw_ranks, dict):
            return None

        ranks = {}
        for rank, bounds in raw_ranks.items():
            if isinstance(bounds, (list, tuple)) and len(bounds) == 2:
                ranks[rank_key(rank)] = (safe_number(bounds[0]), safe_number(bounds[1]))

        return cls(
            line_id=line_id,
            stat=stat,
            name=data.get("name", line_id),
            is_percent=data.get("percent", True) is True,
            ranks=ranks,
            equip_type=equip_type_from_string(equip_type),
        )


@dataclass
class PotentialLine:
    """
    A potential line on an item.

    value overrides the rank midpoint when set (the player's actual roll).
    """
    line_id: str
    rank: Optional[str] = None
    value: Optional[float] = None

    def to_dict(self) -> Dict:
        data = {"lineId": self.line_id}
        if self.rank is not None:
            data["rank"] = self.rank
        if self.value is not None:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'PotentialLine':
        return cls(
            line_id=data.get("lineId", data.get("line_id", "")),
            rank=data.get("rank"),
            value=data.get("value"),
        )


# =============================================================================
# AGGREGATION
# =============================================================================

def _has_explicit_value(value) -> bool:
    if value is None:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def resolve_line_value(line: PotentialLine, definition: PotentialLineDef) -> float:
    """
    Value a potential line contributes.

    The line's explicit value wins when it is a finite number; otherwise the
    midpoint of the rank's range is used. A rank the line can't roll at
    contributes 0, explicit value or not.
    """
    bounds = definition.get_range(line.rank)
    if bounds is None:
        return 0.0
    if _has_explicit_value(line.value):
        return float(line.value)
    low, high = bounds
    return (low + high) / 2


def aggregate_potential_stats(
    pot_lines: Optional[Iterable[PotentialLine]],
    potential_lines: Mapping[str, PotentialLineDef],
) -> StatVector:
    """
    Sum the stats from the first 3 potential lines.

    Args:
        pot_lines: Lines on the item; entries past the third are ignored
        potential_lines: Catalog, line id -> definition

    Returns:
        StatVector in percentage points (unknown line ids contribute 0)
    """
    if not pot_lines:
        return EMPTY_STATS

    totals: Dict[str, float] = {}
    for i, line in enumerate(pot_lines):
        if i >= MAX_POTENTIAL_LINES:
            break
        if line is None or not line.line_id:
            continue

        definition = potential_lines.get(line.line_id)
        if definition is None:
            logger.debug(f"aggregate_potential_stats: unknown potential line {line.line_id!r}")
            continue

        # all_stat_pct is its own StatVector key, same as flames
        if definition.stat in STAT_KEYS:
            totals[definition.stat] = totals.get(definition.stat, 0.0) + resolve_line_value(line, definition)

    return StatVector(**totals)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def clamp_potential_value(value) -> Optional[float]:
    """Clamp an explicit potential value to 0-100. Non-numeric input means no value."""
    if not _has_explicit_value(value):
        return None
    low, high = VALIDATION["potential_percent"]
    return clamp(value, low, high)


def get_lines_for(equip_type, potential_lines: Mapping[str, PotentialLineDef]) -> List[PotentialLineDef]:
    """Catalog lines listed under a category (weapon or armor)."""
    equip_type = equip_type_from_string(equip_type)
    return [d for d in potential_lines.values() if d.equip_type == equip_type]


__all__ = [
    'PotentialRank',
    'DEFAULT_RANK',
    'rank_key',
    'PotentialLineDef',
    'PotentialLine',
    'resolve_line_value',
    'aggregate_potential_stats',
    'clamp_potential_value',
    'get_lines_for',
]
