"""
MapleStory Gear Compare - Gear Stat Calculator
==============================================
Combines base stats, star force, flames, potential, and set effects into one
StatVector per item, and compares two configurations of the same slot.

Every function here is pure: item, config and reference tables go in, a new
StatVector (or StatDiff) comes out.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from maplestory_gear.equipment import ItemDefinition, EnhancementConfig
from maplestory_gear.equipment_sets import aggregate_set_stats
from maplestory_gear.flames import aggregate_flame_stats
from maplestory_gear.potentials import aggregate_potential_stats
from maplestory_gear.reference_data import ReferenceTables
from maplestory_gear.starforce import lookup_starforce_stats
from maplestory_gear.stats import StatVector, StatDiff, EMPTY_STATS, EMPTY_DIFF


# =============================================================================
# SINGLE ITEM
# =============================================================================

def compose_stats(
    item: Optional[ItemDefinition],
    config: Optional[EnhancementConfig],
    tables: ReferenceTables,
) -> StatVector:
    """
    Headline stats for one item: base + star force + flames + set effect.

    Potential is not included; see compose_stats_with_potential().

    Args:
        item: The item (None gives the zero vector)
        config: Stars, flames, potential and set pieces (None = no enhancement)
        tables: Reference tables

    Returns:
        StatVector with the item's total headline stats
    """
    if item is None:
        return EMPTY_STATS
    config = config or EnhancementConfig()

    total = item.base_stats
    total += lookup_starforce_stats(
        item.level,
        config.stars,
        item.equip_type,
        item.has_weapon_attack,
        item.has_magic_attack,
        item.slot,
        item.starforce_variant,
        tables=tables.starforce,
        max_stars=item.max_stars,
    )
    if item.flameable and config.flame_lines:
        total += aggregate_flame_stats(config.flame_lines)
    total += aggregate_set_stats(item.set_id, config.set_piece_count, tables.sets)
    return total


def compose_stats_with_potential(
    item: Optional[ItemDefinition],
    config: Optional[EnhancementConfig],
    tables: ReferenceTables,
) -> StatVector:
    """Headline stats plus the potential lines folded in."""
    if item is None:
        return EMPTY_STATS
    config = config or EnhancementConfig()
    return compose_stats(item, config, tables) + aggregate_potential_stats(config.pot_lines, tables.potential_lines)


def get_potential_stats(config: Optional[EnhancementConfig], tables: ReferenceTables) -> StatVector:
    """Potential lines on a config, in percentage points."""
    if config is None:
        return EMPTY_STATS
    return aggregate_potential_stats(config.pot_lines, tables.potential_lines)


# =============================================================================
# COMPARISON
# =============================================================================

def calculate_difference(
    item_a: Optional[ItemDefinition],
    config_a: Optional[EnhancementConfig],
    item_b: Optional[ItemDefinition],
    config_b: Optional[EnhancementConfig],
    tables: ReferenceTables,
) -> StatDiff:
    """
    Compare gear B against gear A (B - A).

    stat_diff covers headline stats; potential_diff covers potential lines
    only and stays separate since it is in percentage points.

    Returns EMPTY_DIFF if either side has no item selected.
    """
    if item_a is None or item_b is None:
        return EMPTY_DIFF

    stat_diff = compose_stats(item_b, config_b, tables) - compose_stats(item_a, config_a, tables)
    potential_diff = get_potential_stats(config_b, tables) - get_potential_stats(config_a, tables)
    return StatDiff(stat_diff=stat_diff, potential_diff=potential_diff)


def sum_differences(diffs: Iterable[Optional[StatDiff]]) -> StatDiff:
    """Total many slot comparisons. Missing entries count as no difference."""
    return sum((d for d in diffs if d is not None), EMPTY_DIFF)


# =============================================================================
# MULTI-SLOT COMPARISON
# =============================================================================

@dataclass
class SlotComparison:
    """One slot being compared: current gear (A) vs candidate gear (B)."""
    label: str
    item_a: Optional[ItemDefinition] = None
    config_a: EnhancementConfig = field(default_factory=EnhancementConfig)
    item_b: Optional[ItemDefinition] = None
    config_b: EnhancementConfig = field(default_factory=EnhancementConfig)

    @property
    def is_complete(self) -> bool:
        """Both sides have an item selected."""
        return self.item_a is not None and self.item_b is not None


def compare_slots(
    comparisons: Sequence[SlotComparison],
    tables: ReferenceTables,
) -> Tuple[List[Tuple[str, StatDiff]], StatDiff]:
    """
    Diff every slot and total them.

    Slots missing an item on either side show EMPTY_DIFF, so they add nothing
    to the total.

    Returns:
        ([(label, diff), ...] in input order, total diff)
    """
    results = []
    for comparison in comparisons:
        diff = calculate_difference(
            comparison.item_a, comparison.config_a,
            comparison.item_b, comparison.config_b,
            tables,
        )
        results.append((comparison.label, diff))

    return results, sum_differences(diff for _, diff in results)


__all__ = [
    'compose_stats',
    'compose_stats_with_potential',
    'get_potential_stats',
    'calculate_difference',
    'sum_differences',
    'SlotComparison',
    'compare_slots',
]
