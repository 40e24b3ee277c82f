"""Compose the per store-product summary report from independently computed KPIs."""

import logging

import pandas as pd

from inventory_kpis.utils.transforms import finalize, merge_datasets
from inventory_kpis.utils.types import PRODUCT_KEY, STORE_PRODUCT_KEY

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "store_id",
    "product_id",
    "total_days",
    "stockout_days",
    "stockout_rate_percent",
    "avg_inventory_age_days",
    "avg_inventory_level",
    "inventory_turnover_ratio",
    "avg_daily_sales",
    "max_daily_sales",
    "reorder_point",
]


def compose_summary_report(
    stockout: pd.DataFrame,
    inventory_age: pd.DataFrame,
    avg_stock: pd.DataFrame,
    turnover: pd.DataFrame,
    reorder: pd.DataFrame,
) -> pd.DataFrame:
    """Left-join every KPI onto the stockout rows.

    The stockout set fixes the output keys: one row per (store, product)
    present there, NaN where another KPI has no match. Age and turnover join
    on product alone; average stock and reorder join on (store, product).
    """
    parts = [
        (inventory_age[[*PRODUCT_KEY, "avg_inventory_age_days"]], PRODUCT_KEY),
        (avg_stock[[*STORE_PRODUCT_KEY, "avg_inventory_level"]], STORE_PRODUCT_KEY),
        (turnover[[*PRODUCT_KEY, "inventory_turnover_ratio"]], PRODUCT_KEY),
        (reorder[[*STORE_PRODUCT_KEY, "avg_daily_sales", "max_daily_sales", "reorder_point"]],
         STORE_PRODUCT_KEY),
    ]

    report = stockout[[*STORE_PRODUCT_KEY, "total_days", "stockout_days", "stockout_rate_percent"]]
    for part, key in parts:
        report = merge_datasets(report, part, on=key, how="left")

    for col in SUMMARY_COLUMNS[5:]:
        report[col] = report[col].astype(float)

    logger.info(f"Summary report: {len(report)} rows, "
                f"{int(report['reorder_point'].isna().sum())} without recent sales")
    return finalize(report[SUMMARY_COLUMNS], STORE_PRODUCT_KEY)
