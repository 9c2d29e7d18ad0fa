"""
MapleStory Gear Compare - Core Module
=====================================
Gear stat composition (base + star force + flames + potential + set effects)
and gear-vs-gear comparison.

All other modules should import from here rather than implementing their own formulas.
"""

from .constants import (
    # Enums
    EquipType,
    StarforceVariant,
    EquipmentSlot,
    # Caps
    MAX_STARS_NORMAL,
    MAX_STARS_SUPERIOR,
    MAX_FLAME_LINES,
    MAX_POTENTIAL_LINES,
    NO_HP_SLOTS,
)

from .stats import (
    StatVector,
    EMPTY_STATS,
    sum_stats,
    StatDiff,
    EMPTY_DIFF,
)

from .starforce import (
    StarforceTables,
    DEFAULT_STARFORCE_TABLES,
    get_level_bracket,
    lookup_starforce_stats,
)

from .flames import (
    FlameType,
    FlameLine,
    aggregate_flame_stats,
)

from .potentials import (
    PotentialRank,
    PotentialLineDef,
    PotentialLine,
    aggregate_potential_stats,
)

from .equipment_sets import (
    SetDefinition,
    aggregate_set_stats,
    get_set_effect_delta,
)

from .equipment import (
    ItemDefinition,
    EnhancementConfig,
    get_max_stars,
    normalize_config,
)

from .reference_data import (
    ReferenceTables,
    load_reference_tables,
    load_item_catalog,
)

from .calculator import (
    compose_stats,
    compose_stats_with_potential,
    calculate_difference,
    sum_differences,
    SlotComparison,
    compare_slots,
)

__all__ = [
    # Constants
    'EquipType',
    'StarforceVariant',
    'EquipmentSlot',
    'MAX_STARS_NORMAL',
    'MAX_STARS_SUPERIOR',
    'MAX_FLAME_LINES',
    'MAX_POTENTIAL_LINES',
    'NO_HP_SLOTS',
    # Stats
    'StatVector',
    'EMPTY_STATS',
    'sum_stats',
    'StatDiff',
    'EMPTY_DIFF',
    # Star force
    'StarforceTables',
    'DEFAULT_STARFORCE_TABLES',
    'get_level_bracket',
    'lookup_starforce_stats',
    # Enhancements
    'FlameType',
    'FlameLine',
    'aggregate_flame_stats',
    'PotentialRank',
    'PotentialLineDef',
    'PotentialLine',
    'aggregate_potential_stats',
    'SetDefinition',
    'aggregate_set_stats',
    'get_set_effect_delta',
    # Items
    'ItemDefinition',
    'EnhancementConfig',
    'get_max_stars',
    'normalize_config',
    # Reference data
    'ReferenceTables',
    'load_reference_tables',
    'load_item_catalog',
    # Calculator
    'compose_stats',
    'compose_stats_with_potential',
    'calculate_difference',
    'sum_differences',
    'SlotComparison',
    'compare_slots',
]
