"""Trailing-window statistics anchored to the latest observed date."""

import logging
from typing import TypeAlias

import pandas as pd

from inventory_kpis.config import KpiConfig
from inventory_kpis.utils.transforms import finalize
from inventory_kpis.utils.types import GroupKey

logger = logging.getLogger(__name__)

WindowBounds: TypeAlias = tuple[pd.Timestamp, pd.Timestamp]


def resolve_anchor(facts: pd.DataFrame, config: KpiConfig) -> pd.Timestamp | None:
    """The pinned anchor_date, or else the latest fact date. None for an empty log."""
    pinned = config.anchor_timestamp()
    if pinned is not None:
        return pinned
    if facts.empty:
        return None
    return facts["date"].max().normalize()


def window_bounds(anchor: pd.Timestamp, window_days: int) -> WindowBounds:
    """Inclusive [start, anchor] range covering ``window_days`` calendar days."""
    start = anchor - pd.Timedelta(days=window_days - 1)
    return start, anchor


def trailing_window(facts: pd.DataFrame, config: KpiConfig) -> pd.DataFrame:
    """Facts dated inside the trailing window; everything else is dropped."""
    anchor = resolve_anchor(facts, config)
    if anchor is None:
        return facts.iloc[0:0]

    start, end = window_bounds(anchor, config.window_days)
    logger.debug(f"Trailing window {start.date()} .. {end.date()} ({config.window_days} days)")
    return facts[facts["date"].between(start, end, inclusive="both")]


def windowed_stats(
    facts: pd.DataFrame,
    config: KpiConfig,
    field: str,
    group_by: GroupKey,
    stats: tuple[str, ...] = ("mean", "max", "sum"),
) -> pd.DataFrame:
    """Per-group statistics of ``field`` over the trailing window.

    Output columns are named ``<stat>_<field>``. Groups with no facts in the
    window produce no row.
    """
    window = trailing_window(facts, config)
    agg = window.groupby(group_by).agg(
        **{f"{stat}_{field}": (field, stat) for stat in stats}
    ).reset_index()
    return finalize(agg, group_by)
