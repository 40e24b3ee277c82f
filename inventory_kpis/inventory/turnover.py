"""Inventory turnover and inventory age at the product level.

Turnover = total units sold / average inventory level

Both metrics span every store carrying the product, so the same value is
repeated for each store when joined into the summary report.
"""

import logging

import pandas as pd

from inventory_kpis.inventory.ratios import mean_of_daily_ratios, safe_ratio
from inventory_kpis.utils.transforms import finalize
from inventory_kpis.utils.types import PRODUCT_KEY

logger = logging.getLogger(__name__)


def compute_turnover_ratios(facts: pd.DataFrame) -> pd.DataFrame:
    """Turnover per product; NaN ratio when the average inventory is zero."""
    turnover = facts.groupby(PRODUCT_KEY).agg(
        total_units_sold=("units_sold", "sum"),
        avg_inventory=("inventory_level", "mean"),
    ).reset_index()

    turnover["avg_inventory"] = turnover["avg_inventory"].astype(float)
    turnover["inventory_turnover_ratio"] = safe_ratio(
        turnover["total_units_sold"], turnover["avg_inventory"]
    )

    undefined = int(turnover["inventory_turnover_ratio"].isna().sum())
    if undefined:
        logger.info(f"Turnover undefined for {undefined} products with zero average inventory")

    return finalize(turnover, PRODUCT_KEY)


def compute_inventory_age(facts: pd.DataFrame) -> pd.DataFrame:
    """Average days of inventory on hand per product (inventory / units sold).

    Days without sales are excluded from the mean.
    """
    age = mean_of_daily_ratios(
        facts,
        numerator="inventory_level",
        denominator="units_sold",
        group_by=PRODUCT_KEY,
        name="avg_inventory_age_days",
    )
    return finalize(age, PRODUCT_KEY)
