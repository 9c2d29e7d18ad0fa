"""
Reference data loading for the gear calculator.

Reads the static JSON catalogs (gear, flames, potential, set effects, and an
optional star force override) once and hands back immutable tables that get
passed into every calculation.

Set MAPLE_GEAR_DATA_DIR to load from a different directory.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from maplestory_gear.equipment import ItemDefinition
from maplestory_gear.equipment_sets import SetDefinition
from maplestory_gear.flames import FlameType
from maplestory_gear.potentials import PotentialLineDef
from maplestory_gear.starforce import StarforceTables, DEFAULT_STARFORCE_TABLES

logger = logging.getLogger(__name__)

# Packaged reference data
DEFAULT_DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

GEAR_FILE = "gear.json"
FLAMES_FILE = "flames.json"
POTENTIAL_FILE = "potential.json"
SET_EFFECTS_FILE = "set_effects.json"
STARFORCE_FILE = "starforce.json"   # Optional; built-in tables otherwise


def get_data_dir() -> str:
    """Reference data directory (MAPLE_GEAR_DATA_DIR or the packaged data/)."""
    return os.environ.get("MAPLE_GEAR_DATA_DIR", DEFAULT_DATA_DIR)


@dataclass(frozen=True)
class ReferenceTables:
    """Everything the calculator looks up, shared read-only across calculations."""
    starforce: StarforceTables = DEFAULT_STARFORCE_TABLES
    flame_types: Tuple[FlameType, ...] = ()
    potential_lines: Mapping[str, PotentialLineDef] = field(default_factory=lambda: MappingProxyType({}))
    sets: Mapping[str, SetDefinition] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_data(
        cls,
        flames: Optional[Dict] = None,
        potential: Optional[Dict] = None,
        set_effects: Optional[Dict] = None,
        starforce: Optional[Dict] = None,
    ) -> 'ReferenceTables':
        """
        Build tables from already-parsed JSON documents.

        Entries that can't be parsed are skipped with a warning.
        """
        return cls(
            starforce=StarforceTables.from_dict(starforce) if starforce else DEFAULT_STARFORCE_TABLES,
            flame_types=_parse_flame_types(flames or {}),
            potential_lines=MappingProxyType(_parse_potential_lines(potential or {})),
            sets=MappingProxyType(_parse_sets(set_effects or {})),
        )


# =============================================================================
# PARSING
# =============================================================================

def _expect(value, kind, file_name: str, what: str):
    """value if it has the expected JSON type, else an empty one (with a warning)."""
    if value is None:
        return kind()
    if not isinstance(value, kind):
        logger.warning(f"{file_name}: {what} must be a {kind.__name__}, got {type(value).__name__}")
        return kind()
    return value


def _parse_flame_types(data: Dict) -> Tuple[FlameType, ...]:
    flame_types = []
    for entry in _expect(data.get("flameTypes"), list, FLAMES_FILE, "flameTypes"):
        flame_type = FlameType.from_dict(entry) if isinstance(entry, dict) else None
        if flame_type is None:
            logger.warning(f"{FLAMES_FILE}: skipping flame type {entry!r}")
            continue
        flame_types.append(flame_type)
    return tuple(flame_types)


def _parse_potential_lines(data: Dict) -> Dict[str, PotentialLineDef]:
    """Weapon and armor lines merged into one id -> definition map."""
    lines: Dict[str, PotentialLineDef] = {}
    for equip_type in ("weapon", "armor"):
        category = _expect(data.get(equip_type), dict, POTENTIAL_FILE, equip_type)
        for entry in _expect(category.get("lines"), list, POTENTIAL_FILE, f"{equip_type}.lines"):
            line = PotentialLineDef.from_dict(entry, equip_type) if isinstance(entry, dict) else None
            if line is None:
                logger.warning(f"{POTENTIAL_FILE}: skipping {equip_type} line {entry!r}")
                continue
            if line.line_id in lines:
                # First listed wins, matching catalog search order
                logger.warning(f"{POTENTIAL_FILE}: duplicate line id {line.line_id!r}")
                continue
            lines[line.line_id] = line
    return lines


def _parse_sets(data: Dict) -> Dict[str, SetDefinition]:
    sets: Dict[str, SetDefinition] = {}
    for set_id, entry in _expect(data.get("sets"), dict, SET_EFFECTS_FILE, "sets").items():
        if not isinstance(entry, dict):
            logger.warning(f"{SET_EFFECTS_FILE}: skipping set {set_id!r}")
            continue
        sets[set_id] = SetDefinition.from_dict(set_id, entry)
    return sets


def _parse_items(data: Dict) -> Dict[str, ItemDefinition]:
    items: Dict[str, ItemDefinition] = {}
    for entry in _expect(data.get("gear"), list, GEAR_FILE, "gear"):
        if not isinstance(entry, dict) or not entry.get("id"):
            logger.warning(f"{GEAR_FILE}: skipping gear entry {entry!r}")
            continue
        item = ItemDefinition.from_dict(entry)
        items[item.item_id] = item
    return items


# =============================================================================
# FILE LOADING
# =============================================================================

def _read_json(path: str, required_key: Optional[str] = None) -> Dict:
    """
    Read one reference file.

    Raises:
        FileNotFoundError: file is missing
        ValueError: file is not valid JSON or lacks its top-level key
    """
    name = os.path.basename(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{name}: invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ValueError(f"{name}: expected a JSON object at the top level")
    if required_key is not None and required_key not in data:
        raise ValueError(f"{name}: missing top-level key {required_key!r}")
    return data


def load_reference_tables(data_dir: Optional[str] = None) -> ReferenceTables:
    """
    Load flames, potential, set effects (and star force, if present).

    Args:
        data_dir: Directory holding the JSON files (default: get_data_dir())

    Returns:
        ReferenceTables ready to pass into the calculator
    """
    data_dir = data_dir or get_data_dir()

    starforce = None
    starforce_path = os.path.join(data_dir, STARFORCE_FILE)
    if os.path.exists(starforce_path):
        starforce = _read_json(starforce_path)

    tables = ReferenceTables.from_data(
        flames=_read_json(os.path.join(data_dir, FLAMES_FILE), "flameTypes"),
        potential=_read_json(os.path.join(data_dir, POTENTIAL_FILE)),
        set_effects=_read_json(os.path.join(data_dir, SET_EFFECTS_FILE), "sets"),
        starforce=starforce,
    )
    logger.info(
        f"Loaded reference data from {data_dir}: {len(tables.flame_types)} flame types, "
        f"{len(tables.potential_lines)} potential lines, {len(tables.sets)} sets"
        + (", custom star force tables" if starforce else "")
    )
    return tables


def load_item_catalog(data_dir: Optional[str] = None) -> Mapping[str, ItemDefinition]:
    """Load gear.json as a read-only item id -> ItemDefinition map."""
    data_dir = data_dir or get_data_dir()
    items = _parse_items(_read_json(os.path.join(data_dir, GEAR_FILE), "gear"))
    logger.info(f"Loaded {len(items)} items from {data_dir}")
    return MappingProxyType(items)


__all__ = [
    'DEFAULT_DATA_DIR',
    'get_data_dir',
    'ReferenceTables',
    'load_reference_tables',
    'load_item_catalog',
]
