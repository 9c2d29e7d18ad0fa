"""
Comparison tables for gear diffs.

Turns calculator results into pandas DataFrames: one row per compared slot,
one column per stat, with an optional Total row.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from maplestory_gear.stat_names import STAT_KEYS, get_stat_label
from maplestory_gear.stats import StatDiff, StatVector

TOTAL_ROW = "Total"


def stats_frame(
    rows: Sequence[Tuple[str, StatVector]],
    stat_keys: Optional[Iterable[str]] = None,
    use_labels: bool = True,
) -> pd.DataFrame:
    """
    Build a DataFrame from (row label, StatVector) pairs.

    Args:
        rows: Row label and vector for each row
        stat_keys: Columns to include, in order (default: all stats)
        use_labels: Use short labels (STR, WATK, Boss%) as column names
    """
    keys: List[str] = [k for k in (stat_keys or STAT_KEYS) if k in STAT_KEYS]
    data = []
    for _, vector in rows:
        values = vector.to_dict()
        data.append([values[k] for k in keys])
    columns = [get_stat_label(k) for k in keys] if use_labels else keys
    return pd.DataFrame(data, index=[label for label, _ in rows], columns=columns)


def stat_diff_frame(
    results: Sequence[Tuple[str, StatDiff]],
    total: Optional[StatDiff] = None,
    potential: bool = False,
    stat_keys: Optional[Iterable[str]] = None,
    only_non_zero: bool = False,
) -> pd.DataFrame:
    """
    Table of per-slot diffs, as returned by calculator.compare_slots().

    Args:
        results: (slot label, StatDiff) per slot
        total: Appended as a "Total" row when given
        potential: Show potential_diff instead of stat_diff
        stat_keys: Columns to include (default: all stats)
        only_non_zero: Drop columns that are 0 in every row
    """
    def pick(diff: StatDiff) -> StatVector:
        return diff.potential_diff if potential else diff.stat_diff

    rows = [(label, pick(diff)) for label, diff in results]
    if total is not None:
        rows.append((TOTAL_ROW, pick(total)))

    frame = stats_frame(rows, stat_keys)
    if only_non_zero:
        frame = frame.loc[:, (frame != 0).any(axis=0)]
    return frame


__all__ = [
    'TOTAL_ROW',
    'stats_frame',
    'stat_diff_frame',
]
