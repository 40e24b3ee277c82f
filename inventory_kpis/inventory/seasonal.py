"""Seasonal demand by product category."""

import logging
from enum import StrEnum

import pandas as pd

from inventory_kpis.config import KpiConfig
from inventory_kpis.utils.transforms import finalize

logger = logging.getLogger(__name__)


class Season(StrEnum):
    WINTER = "Winter"
    SUMMER = "Summer"
    MONSOON = "Monsoon"
    FESTIVE = "Festive"


def classify_season(month: int) -> Season:
    """Map a calendar month (1-12) to its season."""
    match month:
        case 12 | 1 | 2:
            return Season.WINTER
        case 3 | 4 | 5 | 6:
            return Season.SUMMER
        case 7 | 8 | 9:
            return Season.MONSOON
        case 10 | 11:
            return Season.FESTIVE
        case other:
            raise ValueError(f"Invalid calendar month: {other!r}")


SEASON_BY_MONTH: dict[int, str] = {m: classify_season(m).value for m in range(1, 13)}


def compute_seasonal_demand(
    facts: pd.DataFrame,
    products: pd.DataFrame | None,
    config: KpiConfig,
) -> pd.DataFrame:
    """SeasonalDemand: units sold and mean forecast per category and season.

    Grouped by (category, month, season) by default; with
    ``seasonal_grain="season"`` the month level is collapsed. Facts whose
    product is missing from the reference table are left out.
    """
    by_month = config.seasonal_grain == "month"
    keys = ["category", "month", "season"] if by_month else ["category", "season"]
    columns = [*keys, "total_units_sold", "avg_forecast"]

    if products is None:
        logger.warning("No product reference table — seasonal demand skipped")
        return pd.DataFrame(columns=columns)

    joined = facts.drop(columns=["category"], errors="ignore").merge(
        products[["product_id", "category"]], on="product_id", how="inner"
    )
    dropped = len(facts) - len(joined)
    if dropped:
        logger.warning(f"Seasonal demand excludes {dropped} facts with unknown products")

    joined["month"] = joined["date"].dt.month.astype(int)
    joined["season"] = joined["month"].map(SEASON_BY_MONTH)

    seasonal = joined.groupby(keys).agg(
        total_units_sold=("units_sold", "sum"),
        avg_forecast=("demand_forecast", "mean"),
    ).reset_index()

    return finalize(seasonal[columns], keys)
