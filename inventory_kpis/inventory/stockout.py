"""Stockout frequency per store and product."""

import pandas as pd

from inventory_kpis.utils.transforms import finalize
from inventory_kpis.utils.types import STORE_PRODUCT_KEY


def compute_stockout_rates(facts: pd.DataFrame) -> pd.DataFrame:
    """Share of days on which forecast demand exceeded inventory on hand."""
    flagged = facts[STORE_PRODUCT_KEY].copy()
    flagged["is_stockout"] = (facts["demand_forecast"] > facts["inventory_level"]).astype(int)

    rates = flagged.groupby(STORE_PRODUCT_KEY).agg(
        total_days=("is_stockout", "size"),
        stockout_days=("is_stockout", "sum"),
    ).reset_index()

    rates["total_days"] = rates["total_days"].astype(int)
    rates["stockout_days"] = rates["stockout_days"].astype(int)
    rates["stockout_rate_percent"] = (
        rates["stockout_days"] / rates["total_days"] * 100
    ).round(2)
    return finalize(rates, STORE_PRODUCT_KEY)
