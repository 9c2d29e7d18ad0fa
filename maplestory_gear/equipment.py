"""
MapleStory Gear Compare - Equipment Items & Enhancement Configs
===============================================================
Static item definitions (from gear.json) and the per-comparison enhancement
config a player edits: stars, flames, potential, set pieces.

Items are read-only once loaded. Configs are plain editable records;
normalize_config() produces a clamped copy before calculation.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Sequence

from maplestory_gear.constants import (
    DEFAULT_ITEM_LEVEL,
    EquipType,
    MAX_FLAME_LINES,
    MAX_POTENTIAL_LINES,
    StarforceVariant,
    equip_type_from_string,
    variant_from_string,
)
from maplestory_gear.equipment_sets import SetDefinition, clamp_set_pieces
from maplestory_gear.flames import FlameLine, FlameType, clamp_flame_value
from maplestory_gear.potentials import PotentialLine, clamp_potential_value
from maplestory_gear.starforce import clamp_stars, get_max_stars_for_variant
from maplestory_gear.stats import StatVector, EMPTY_STATS, safe_number


# =============================================================================
# ITEM DEFINITION
# =============================================================================

@dataclass(frozen=True)
class ItemDefinition:
    """One piece of equipment from the gear catalog."""
    item_id: str
    name: str = ""
    level: int = DEFAULT_ITEM_LEVEL
    equip_type: EquipType = EquipType.ARMOR
    slot: str = ""
    base_stats: StatVector = EMPTY_STATS
    set_id: Optional[str] = None
    flameable: bool = False
    starforce_variant: StarforceVariant = StarforceVariant.NORMAL
    max_stars: Optional[int] = None       # Overrides the variant cap when set
    job_class: str = "all"

    @property
    def has_weapon_attack(self) -> bool:
        return self.base_stats.attack_flat > 0

    @property
    def has_magic_attack(self) -> bool:
        return self.base_stats.magic_attack_flat > 0

    def to_dict(self) -> Dict:
        """Serialize to the gear.json shape."""
        data = {
            "id": self.item_id,
            "name": self.name,
            "level": self.level,
            "equipType": self.equip_type.value,
            "slot": self.slot,
            "jobClass": self.job_class,
            "baseStats": {k: v for k, v in self.base_stats.to_dict().items() if v != 0},
            "flameable": self.flameable,
            "starforceType": self.starforce_variant.value,
        }
        if self.set_id:
            data["set"] = self.set_id
        if self.max_stars is not None:
            data["maxStars"] = self.max_stars
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'ItemDefinition':
        """Deserialize a gear.json entry. Missing level means 160."""
        max_stars = data.get("maxStars")
        return cls(
            item_id=str(data.get("id", "")),
            name=data.get("name", ""),
            level=int(safe_number(data.get("level"))) or DEFAULT_ITEM_LEVEL,
            equip_type=equip_type_from_string(data.get("equipType", "armor")),
            slot=data.get("slot", ""),
            base_stats=StatVector.from_dict(data.get("baseStats")),
            set_id=data.get("set") or None,
            flameable=data.get("flameable") is True,
            starforce_variant=variant_from_string(data.get("starforceType", "normal")),
            max_stars=int(safe_number(max_stars)) if max_stars is not None else None,
            job_class=data.get("jobClass", "all"),
        )


def get_max_stars(item: Optional[ItemDefinition]) -> int:
    """
    Star cap for an item.

    Uses the item's override when present, else 15 for Superior and 30 for
    normal gear. No item selected means the normal cap.
    """
    if item is None:
        return get_max_stars_for_variant(StarforceVariant.NORMAL)
    return get_max_stars_for_variant(item.starforce_variant, item.max_stars)


# =============================================================================
# ENHANCEMENT CONFIG
# =============================================================================

@dataclass
class EnhancementConfig:
    """
    How one item is enhanced in a comparison.

    stars: star force level
    flame_lines: up to 4 flame lines
    pot_lines: up to 3 potential lines
    set_piece_count: pieces of the item's set equipped (0 if no set)
    """
    stars: int = 0
    flame_lines: List[FlameLine] = field(default_factory=list)
    pot_lines: List[PotentialLine] = field(default_factory=list)
    set_piece_count: int = 0

    def to_dict(self) -> Dict:
        """Serialize for saving."""
        return {
            "stars": self.stars,
            "flameLines": [line.to_dict() for line in self.flame_lines],
            "potLines": [line.to_dict() for line in self.pot_lines],
            "setPieceCount": self.set_piece_count,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'EnhancementConfig':
        """Deserialize. Accepts camelCase (saved tool data) or snake_case keys."""
        data = data or {}
        flames = data.get("flameLines", data.get("flame_lines")) or []
        pots = data.get("potLines", data.get("pot_lines")) or []
        return cls(
            stars=int(safe_number(data.get("stars", 0))),
            flame_lines=[FlameLine.from_dict(f) for f in flames if isinstance(f, dict)],
            pot_lines=[PotentialLine.from_dict(p) for p in pots if isinstance(p, dict)],
            set_piece_count=int(safe_number(data.get("setPieceCount", data.get("set_piece_count", 0)))),
        )


def normalize_config(
    item: Optional[ItemDefinition],
    config: EnhancementConfig,
    sets: Mapping[str, SetDefinition],
    flame_types: Sequence[FlameType] = (),
) -> EnhancementConfig:
    """
    Return a copy of config clamped to what the item allows.

    - stars to [0, item max stars]
    - set pieces to [0, set max pieces] (0 when the item has no set)
    - first 4 flame lines, values clamped to 0-100 (percent) or 0-9999 (flat)
    - first 3 potential lines, explicit values clamped to 0-100
    """
    set_id = item.set_id if item is not None else None
    return replace(
        config,
        stars=clamp_stars(config.stars, get_max_stars(item)),
        set_piece_count=clamp_set_pieces(set_id, config.set_piece_count, sets),
        flame_lines=[
            FlameLine(line.stat, clamp_flame_value(line.stat, line.value, flame_types))
            for line in config.flame_lines[:MAX_FLAME_LINES]
            if line is not None and line.stat
        ],
        pot_lines=[
            PotentialLine(line.line_id, line.rank, clamp_potential_value(line.value))
            for line in config.pot_lines[:MAX_POTENTIAL_LINES]
            if line is not None and line.line_id
        ],
    )


__all__ = [
    'ItemDefinition',
    'get_max_stars',
    'EnhancementConfig',
    'normalize_config',
]
