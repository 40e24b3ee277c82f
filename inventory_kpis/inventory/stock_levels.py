"""Point-in-time stock positions per store and product.

Everything here reads the most recent fact of each (store, product) pair.
When two facts share the latest date the one ingested last wins.
"""

import logging

import numpy as np
import pandas as pd

from inventory_kpis.config import KpiConfig
from inventory_kpis.inventory.transform import SEQUENCE_COL
from inventory_kpis.utils.transforms import finalize
from inventory_kpis.utils.types import STORE_PRODUCT_KEY, StockStatus

logger = logging.getLogger(__name__)


def resolve_latest_values(
    facts: pd.DataFrame,
    fields: str | list[str],
    group_by: list[str] | None = None,
) -> pd.DataFrame:
    """Pick each group's field values from its most recent fact.

    Returns one row per group with ``latest_date`` and the requested fields
    copied verbatim from that single fact.
    """
    group_by = group_by or STORE_PRODUCT_KEY
    if isinstance(fields, str):
        fields = [fields]

    order = ["date", SEQUENCE_COL] if SEQUENCE_COL in facts.columns else ["date"]
    latest = (
        facts.sort_values(order, kind="mergesort")
        .groupby(group_by, sort=False)
        .tail(1)
    )

    out = latest[[*group_by, "date", *fields]].rename(columns={"date": "latest_date"})
    return finalize(out, group_by)


def compute_current_stock(facts: pd.DataFrame) -> pd.DataFrame:
    """CurrentStock: latest inventory_level per (store, product)."""
    return resolve_latest_values(facts, "inventory_level")


def flag_low_inventory(facts: pd.DataFrame, config: KpiConfig) -> pd.DataFrame:
    """LowInventory: pairs whose latest inventory is below the latest forecast.

    Both values come from the same (latest) fact.
    """
    latest = resolve_latest_values(facts, ["inventory_level", "demand_forecast"])
    latest = latest.rename(columns={"demand_forecast": "latest_forecast"})

    threshold = latest["latest_forecast"] * config.low_inventory_threshold_ratio
    low = latest[latest["inventory_level"] < threshold]

    logger.info(f"Low inventory: {len(low)}/{len(latest)} store-product pairs flagged")
    return low.reset_index(drop=True)


def classify_stock_status(facts: pd.DataFrame, config: KpiConfig) -> pd.DataFrame:
    """Tag each pair's latest position as overstock, understock or balanced."""
    latest = resolve_latest_values(facts, ["inventory_level", "demand_forecast"])
    latest = latest.rename(columns={"demand_forecast": "latest_forecast"})

    level = latest["inventory_level"]
    forecast = latest["latest_forecast"]
    latest["stock_status"] = np.select(
        [
            level > forecast * config.overstock_threshold,
            level < forecast * config.understock_threshold,
        ],
        [StockStatus.OVERSTOCK.value, StockStatus.UNDERSTOCK.value],
        default=StockStatus.BALANCED.value,
    )
    return latest


def compute_avg_stock(facts: pd.DataFrame) -> pd.DataFrame:
    """AvgStock: mean inventory level across all days of each pair."""
    avg = facts.groupby(STORE_PRODUCT_KEY).agg(
        avg_inventory_level=("inventory_level", "mean"),
    ).reset_index()
    avg["avg_inventory_level"] = avg["avg_inventory_level"].astype(float)
    return finalize(avg, STORE_PRODUCT_KEY)
