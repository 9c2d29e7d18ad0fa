"""
MapleStory Gear Compare - Job Class Filtering
=============================================
Maps the class selector to a job branch (for gear filtering) and to the stats
that class cares about (for flame/potential choices and diff display).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from maplestory_gear.equipment import ItemDefinition
from maplestory_gear.stat_names import (
    ALL_STAT_PCT,
    ATTACK_FLAT,
    BOSS_DAMAGE,
    DAMAGE_PCT,
    DEF_PEN,
    DEX_FLAT,
    INT_FLAT,
    LUK_FLAT,
    MAGIC_ATTACK_FLAT,
    MAX_HP,
    MAX_HP_PCT,
    STAT_KEYS,
    STR_FLAT,
)


class JobClass(Enum):
    """Job branches gear is restricted to."""
    WARRIOR = "warrior"
    MAGICIAN = "magician"
    BOWMAN = "bowman"
    THIEF = "thief"
    PIRATE = "pirate"


# Gear usable by every job
ALL_JOBS = "all"

# Damage stats every class benefits from
_COMMON_STATS: Tuple[str, ...] = (BOSS_DAMAGE, DEF_PEN, DAMAGE_PCT, ALL_STAT_PCT)


@dataclass(frozen=True)
class ClassProfile:
    """One entry in the class selector."""
    class_id: str
    display_name: str
    job: Optional[JobClass]             # None = show gear for every job
    beneficial_stats: Tuple[str, ...]


CLASS_PROFILES: Dict[str, ClassProfile] = {
    "all": ClassProfile("all", "All Classes", None, STAT_KEYS),
    "str-warrior": ClassProfile(
        "str-warrior", "Warrior (STR)", JobClass.WARRIOR,
        (STR_FLAT, DEX_FLAT, ATTACK_FLAT) + _COMMON_STATS,
    ),
    "int-magician": ClassProfile(
        "int-magician", "Magician (INT)", JobClass.MAGICIAN,
        (INT_FLAT, LUK_FLAT, MAGIC_ATTACK_FLAT) + _COMMON_STATS,
    ),
    "dex-bowman": ClassProfile(
        "dex-bowman", "Bowman (DEX)", JobClass.BOWMAN,
        (DEX_FLAT, STR_FLAT, ATTACK_FLAT) + _COMMON_STATS,
    ),
    "luk-thief": ClassProfile(
        "luk-thief", "Thief (LUK)", JobClass.THIEF,
        (LUK_FLAT, DEX_FLAT, ATTACK_FLAT) + _COMMON_STATS,
    ),
    "str-pirate": ClassProfile(
        "str-pirate", "Pirate (STR)", JobClass.PIRATE,
        (STR_FLAT, DEX_FLAT, ATTACK_FLAT) + _COMMON_STATS,
    ),
    "dex-pirate": ClassProfile(
        "dex-pirate", "Pirate (DEX)", JobClass.PIRATE,
        (DEX_FLAT, STR_FLAT, ATTACK_FLAT) + _COMMON_STATS,
    ),
    # Hybrid classes wear gear from several branches
    "xenon": ClassProfile(
        "xenon", "Xenon", None,
        (STR_FLAT, DEX_FLAT, LUK_FLAT, ATTACK_FLAT) + _COMMON_STATS,
    ),
    "demon-avenger": ClassProfile(
        "demon-avenger", "Demon Avenger", None,
        (MAX_HP, MAX_HP_PCT, STR_FLAT, ATTACK_FLAT) + _COMMON_STATS,
    ),
}


def get_job_for_class(class_id: str) -> Optional[JobClass]:
    """Job branch for a class selector id. None means no gear filtering."""
    profile = CLASS_PROFILES.get(class_id)
    return profile.job if profile else None


def get_beneficial_stats(class_id: str) -> List[str]:
    """Stats a class cares about. Unknown classes get every stat."""
    profile = CLASS_PROFILES.get(class_id)
    if profile is None:
        return list(STAT_KEYS)
    return list(profile.beneficial_stats)


def item_matches_class(item: ItemDefinition, class_id: str) -> bool:
    """
    Whether a class can use an item.

    Classes without a job (all, xenon, demon avenger) see everything;
    otherwise the item must be for that job or for all jobs.
    """
    job = get_job_for_class(class_id)
    if job is None:
        return True
    return item.job_class in (job.value, ALL_JOBS)


def filter_items(items: Iterable[ItemDefinition], slot: str, class_id: str = "all") -> List[ItemDefinition]:
    """Items for one slot that the class can use, in catalog order."""
    return [item for item in items if item.slot == slot and item_matches_class(item, class_id)]


__all__ = [
    'JobClass',
    'ALL_JOBS',
    'ClassProfile',
    'CLASS_PROFILES',
    'get_job_for_class',
    'get_beneficial_stats',
    'item_matches_class',
    'filter_items',
]
