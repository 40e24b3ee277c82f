"""Reorder points from recent sales velocity."""

import logging

import pandas as pd

from inventory_kpis.config import KpiConfig
from inventory_kpis.inventory.rolling import windowed_stats
from inventory_kpis.utils.types import STORE_PRODUCT_KEY

logger = logging.getLogger(__name__)

REORDER_COLUMNS = [*STORE_PRODUCT_KEY, "avg_daily_sales", "max_daily_sales", "reorder_point"]


def compute_reorder_points(facts: pd.DataFrame, config: KpiConfig) -> pd.DataFrame:
    """Reorder: trailing-window sales velocity per (store, product).

    reorder_point = avg_daily_sales * lead_time_multiplier. Pairs with no
    sales facts inside the window are absent.
    """
    stats = windowed_stats(facts, config, "units_sold", STORE_PRODUCT_KEY, stats=("mean", "max"))
    stats = stats.rename(columns={
        "mean_units_sold": "avg_daily_sales",
        "max_units_sold": "max_daily_sales",
    })

    stats["avg_daily_sales"] = stats["avg_daily_sales"].astype(float)
    stats["max_daily_sales"] = stats["max_daily_sales"].astype(float)
    stats["reorder_point"] = stats["avg_daily_sales"] * config.lead_time_multiplier

    logger.info(f"Reorder points computed for {len(stats)} store-product pairs")
    return stats[REORDER_COLUMNS]
