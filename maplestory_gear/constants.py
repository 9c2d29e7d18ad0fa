"""
MapleStory Gear Compare - Shared Constants
==========================================
Enums, caps, and validation ranges used across modules.
"""

import math
from enum import Enum
from typing import Dict, FrozenSet, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class EquipType(Enum):
    """Star force category. Accessories use the armor tables."""
    WEAPON = "weapon"
    ARMOR = "armor"


class StarforceVariant(Enum):
    """Star force table shape."""
    NORMAL = "normal"
    SUPERIOR = "superior"


class EquipmentSlot(Enum):
    """All equipment slots."""
    HAT = "hat"
    OVERALL = "overall"
    TOP = "top"
    BOTTOM = "bottom"
    SHOES = "shoes"
    GLOVES = "gloves"
    CAPE = "cape"
    SHOULDER = "shoulder"
    WEAPON = "weapon"
    RING = "ring"
    PENDANT = "pendant"
    EARRINGS = "earrings"
    BELT = "belt"
    FACE = "face"
    EYE = "eye"


def equip_type_from_string(s) -> EquipType:
    """Parse equip type (case-insensitive). Anything unknown is armor."""
    if isinstance(s, EquipType):
        return s
    try:
        return EquipType(str(s).lower())
    except ValueError:
        return EquipType.ARMOR


def variant_from_string(s) -> StarforceVariant:
    """Parse star force variant (case-insensitive). Defaults to normal."""
    if isinstance(s, StarforceVariant):
        return s
    try:
        return StarforceVariant(str(s).lower())
    except ValueError:
        return StarforceVariant.NORMAL


# =============================================================================
# STAR FORCE
# =============================================================================

MAX_STARS_NORMAL = 30
MAX_STARS_SUPERIOR = 15

MAX_STARS_BY_VARIANT: Dict[StarforceVariant, int] = {
    StarforceVariant.NORMAL: MAX_STARS_NORMAL,
    StarforceVariant.SUPERIOR: MAX_STARS_SUPERIOR,
}

# Slots whose star force grants no HP
NO_HP_SLOTS: FrozenSet[str] = frozenset({
    EquipmentSlot.GLOVES.value,
    EquipmentSlot.SHOES.value,
    EquipmentSlot.FACE.value,
    EquipmentSlot.EYE.value,
})

# HP ramp: 5 at ★1, +25 per star, capped
STARFORCE_HP_BASE = 5
STARFORCE_HP_PER_STAR = 25
STARFORCE_HP_CAP = 255

# Used when an item has no level
DEFAULT_ITEM_LEVEL = 160


# =============================================================================
# ENHANCEMENT LIMITS
# =============================================================================

MAX_FLAME_LINES = 4
MAX_POTENTIAL_LINES = 3
DEFAULT_SET_MAX_PIECES = 7
MIN_SET_PIECES_FOR_BONUS = 2

# (min, max) for user-entered values
VALIDATION: Dict[str, Tuple[float, float]] = {
    "stars": (0, MAX_STARS_NORMAL),
    "set_pieces": (0, DEFAULT_SET_MAX_PIECES),
    "flame_flat": (0, 9999),
    "flame_percent": (0, 100),
    "potential_percent": (0, 100),
}


def clamp(value, low: float, high: float) -> float:
    """Clamp to [low, high]. Non-numeric or non-finite input returns low."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return low
    if not math.isfinite(v):
        return low
    return min(max(v, low), high)
