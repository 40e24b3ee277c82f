"""Ratio helpers with explicit zero-denominator handling.

Two policies live here and are deliberately separate:

* ``safe_ratio`` divides two aggregates; a zero denominator makes the whole
  ratio NaN.
* ``mean_of_daily_ratios`` divides per fact and averages; facts with a zero
  denominator drop out of the mean instead of voiding it.
"""

import pandas as pd

from inventory_kpis.utils.types import GroupKey


def safe_ratio(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Element-wise numerator / denominator, NaN where the denominator is zero."""
    return numerator.astype(float) / denominator.astype(float).where(denominator != 0)


def mean_of_daily_ratios(
    facts: pd.DataFrame,
    numerator: str,
    denominator: str,
    group_by: GroupKey,
    name: str,
) -> pd.DataFrame:
    """Average of per-fact ratios by group, skipping zero-denominator facts.

    A group whose every fact has a zero denominator is kept with NaN.
    """
    daily = facts[group_by].copy()
    daily[name] = safe_ratio(facts[numerator], facts[denominator])
    return daily.groupby(group_by)[name].mean().reset_index()
