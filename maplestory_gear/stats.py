"""
MapleStory Gear Compare - Stat System
=====================================
Type-safe stat classes with enforced attribute names and operator overloading.

Core Classes:
- StatVector: Immutable container for the fourteen gear stats, supports + and -
- StatDiff: Pair of (headline stat diff, potential diff) for a gear comparison
"""

import math
from dataclasses import dataclass, fields
from typing import Dict, Iterable, Mapping, Optional

from maplestory_gear.stat_names import STAT_KEYS, PRIMARY_STAT_KEYS, normalize_stat_key


def safe_number(value) -> float:
    """Coerce to a finite float. Anything else (None, NaN, inf, junk) is 0."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    return v if math.isfinite(v) else 0.0


@dataclass(frozen=True)
class StatVector:
    """
    Immutable container for all gear stats. Supports + and - operators.

    Every field is always present and always a finite float; bad input is
    coerced to 0 on construction. Percent stats are stored as percentage
    points (9% all stat is 9.0, not 0.09).
    """
    # Main stats (flat)
    str_flat: float = 0.0
    dex_flat: float = 0.0
    int_flat: float = 0.0
    luk_flat: float = 0.0

    # Attack
    attack_flat: float = 0.0
    magic_attack_flat: float = 0.0

    # Defense
    defense: float = 0.0
    max_hp: float = 0.0

    # Percent stats
    boss_damage: float = 0.0
    def_pen: float = 0.0
    damage_pct: float = 0.0
    all_stat_pct: float = 0.0
    max_hp_pct: float = 0.0
    max_mp_pct: float = 0.0

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, safe_number(getattr(self, f.name)))

    def __add__(self, other: 'StatVector') -> 'StatVector':
        """Add two StatVectors together."""
        if not isinstance(other, StatVector):
            return NotImplemented
        return StatVector(**{k: getattr(self, k) + getattr(other, k) for k in STAT_KEYS})

    def __radd__(self, other):
        """Support sum() by handling 0 + StatVector."""
        if other == 0:
            return self
        return self.__add__(other)

    def __sub__(self, other: 'StatVector') -> 'StatVector':
        """Key-wise difference (self - other)."""
        if not isinstance(other, StatVector):
            return NotImplemented
        return StatVector(**{k: getattr(self, k) - getattr(other, k) for k in STAT_KEYS})

    def __neg__(self) -> 'StatVector':
        return StatVector(**{k: -getattr(self, k) for k in STAT_KEYS})

    def is_zero(self) -> bool:
        return all(getattr(self, k) == 0 for k in STAT_KEYS)

    def get(self, stat_key: str) -> float:
        """Value for a stat key (canonical or alias). Unknown keys are 0."""
        key = normalize_stat_key(stat_key)
        if key in STAT_KEYS:
            return getattr(self, key)
        return 0.0

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization (canonical key order)."""
        return {k: getattr(self, k) for k in STAT_KEYS}

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> 'StatVector':
        """
        Create StatVector from dictionary.

        Accepts canonical keys and original tool keys (str, watk, bossDmg, ...).
        Unknown keys are ignored; duplicate keys after aliasing are summed.
        """
        values: Dict[str, float] = {}
        for raw_key, raw_value in (data or {}).items():
            key = normalize_stat_key(raw_key)
            if key not in STAT_KEYS:
                continue
            values[key] = values.get(key, 0.0) + safe_number(raw_value)
        return cls(**values)

    @classmethod
    def primary_stats(cls, value: float, **kwargs) -> 'StatVector':
        """StatVector with STR/DEX/INT/LUK all set to value."""
        block_kwargs = dict(kwargs)
        for key in PRIMARY_STAT_KEYS:
            block_kwargs[key] = value
        return cls(**block_kwargs)


# Empty stat vector singleton for convenience
EMPTY_STATS = StatVector()


def sum_stats(vectors: Iterable[StatVector]) -> StatVector:
    """Key-wise sum of any number of vectors. Empty input is EMPTY_STATS."""
    return sum(vectors, EMPTY_STATS)


@dataclass(frozen=True)
class StatDiff:
    """
    Result of comparing gear B against gear A.

    stat_diff holds headline stats (base, star force, flames, set effects).
    potential_diff holds potential lines only, in percentage points; the two
    are never summed together.
    """
    stat_diff: StatVector = EMPTY_STATS
    potential_diff: StatVector = EMPTY_STATS

    def __add__(self, other: 'StatDiff') -> 'StatDiff':
        if not isinstance(other, StatDiff):
            return NotImplemented
        return StatDiff(
            stat_diff=self.stat_diff + other.stat_diff,
            potential_diff=self.potential_diff + other.potential_diff,
        )

    def __radd__(self, other):
        """Support sum() by handling 0 + StatDiff."""
        if other == 0:
            return self
        return self.__add__(other)

    def is_zero(self) -> bool:
        return self.stat_diff.is_zero() and self.potential_diff.is_zero()

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "stat_diff": self.stat_diff.to_dict(),
            "potential_diff": self.potential_diff.to_dict(),
        }


EMPTY_DIFF = StatDiff()


# Export list
__all__ = [
    'safe_number',
    'StatVector',
    'EMPTY_STATS',
    'sum_stats',
    'StatDiff',
    'EMPTY_DIFF',
]
