"""
MapleStory Gear Compare - Equipment Set Effects
===============================================
Set effects grant cumulative stats once enough pieces of the same set are
equipped. Tables in set_effects.json are already cumulative and only list
the piece counts that unlock something (e.g. 2, 3, 4, 5).
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from maplestory_gear.constants import DEFAULT_SET_MAX_PIECES, MIN_SET_PIECES_FOR_BONUS, clamp
from maplestory_gear.stats import StatVector, EMPTY_STATS, safe_number

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class SetDefinition:
    """
    One equipment set.

    cumulative maps piece-count threshold -> total bonus at that count.
    Counts with no entry grant nothing; there is no interpolation.
    """
    set_id: str
    name: str = ""
    max_pieces: int = DEFAULT_SET_MAX_PIECES
    cumulative: Mapping[int, StatVector] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "cumulative", MappingProxyType(dict(self.cumulative)))

    def get_bonus(self, piece_count: int) -> StatVector:
        """Cumulative bonus at exactly piece_count pieces."""
        return self.cumulative.get(piece_count, EMPTY_STATS)

    def to_dict(self) -> Dict:
        """Serialize to the set_effects.json shape."""
        return {
            "name": self.name,
            "maxPieces": self.max_pieces,
            "cumulative": {str(k): v.to_dict() for k, v in sorted(self.cumulative.items())},
        }

    @classmethod
    def from_dict(cls, set_id: str, data: Dict) -> 'SetDefinition':
        """Deserialize a set_effects.json entry."""
        cumulative = {}
        thresholds = data.get("cumulative") or {}
        if not isinstance(thresholds, dict):
            logger.warning(f"Set {set_id!r}: cumulative must be an object, got {thresholds!r}")
            thresholds = {}
        for count, stats in thresholds.items():
            if not isinstance(stats, dict):
                logger.warning(f"Set {set_id!r}: skipping bad bonus for {count!r} pieces")
                continue
            try:
                cumulative[int(count)] = StatVector.from_dict(stats)
            except (TypeError, ValueError):
                logger.warning(f"Set {set_id!r}: skipping bad piece count {count!r}")
        max_pieces = int(safe_number(data.get("maxPieces"))) or DEFAULT_SET_MAX_PIECES
        return cls(
            set_id=set_id,
            name=data.get("name", set_id),
            max_pieces=max_pieces,
            cumulative=cumulative,
        )


# =============================================================================
# AGGREGATION
# =============================================================================

def aggregate_set_stats(
    set_id: Optional[str],
    piece_count,
    sets: Mapping[str, SetDefinition],
) -> StatVector:
    """
    Get the set effect for an item's set at a given piece count.

    Args:
        set_id: The item's set, or None
        piece_count: Pieces of the set equipped (clamped to the set's max)
        sets: Set catalog, set id -> definition

    Returns:
        Cumulative set bonus; zero for no set, unknown sets, or fewer than 2 pieces
    """
    if not set_id:
        return EMPTY_STATS
    count = safe_number(piece_count)
    if count < MIN_SET_PIECES_FOR_BONUS:
        return EMPTY_STATS

    set_def = sets.get(set_id)
    if set_def is None:
        logger.debug(f"aggregate_set_stats: unknown set {set_id!r}")
        return EMPTY_STATS

    count = int(min(count, set_def.max_pieces))
    return set_def.get_bonus(count)


def get_set_effect_delta(
    set_id: Optional[str],
    count_a,
    count_b,
    sets: Mapping[str, SetDefinition],
) -> StatVector:
    """Change in set bonus going from count_a to count_b pieces (B - A)."""
    return aggregate_set_stats(set_id, count_b, sets) - aggregate_set_stats(set_id, count_a, sets)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_max_set_pieces(set_id: Optional[str], sets: Mapping[str, SetDefinition]) -> int:
    """Max pieces for an item's set. 0 if the item has no (known) set."""
    if not set_id:
        return 0
    set_def = sets.get(set_id)
    if set_def is None:
        return 0
    return set_def.max_pieces


def clamp_set_pieces(set_id: Optional[str], piece_count, sets: Mapping[str, SetDefinition]) -> int:
    """Clamp a piece count to [0, max pieces of the set]."""
    return int(clamp(piece_count, 0, get_max_set_pieces(set_id, sets)))


__all__ = [
    'SetDefinition',
    'aggregate_set_stats',
    'get_set_effect_delta',
    'get_max_set_pieces',
    'clamp_set_pieces',
]
