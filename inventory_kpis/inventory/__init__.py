"""Inventory KPIs — current stock, stockouts, reorder points, turnover and seasonal demand."""

import logging

import pandas as pd

from inventory_kpis.config import KpiConfig
from inventory_kpis.errors import MalformedInputError
from inventory_kpis.inventory.models import RANKED_SALES_SCHEMA, SUMMARY_REPORT_SCHEMA
from inventory_kpis.inventory.ranking import rank_monthly_sales
from inventory_kpis.inventory.reorder import compute_reorder_points
from inventory_kpis.inventory.report import compose_summary_report
from inventory_kpis.inventory.rolling import resolve_anchor
from inventory_kpis.inventory.seasonal import classify_season, compute_seasonal_demand
from inventory_kpis.inventory.stock_levels import (
    classify_stock_status,
    compute_avg_stock,
    compute_current_stock,
    flag_low_inventory,
)
from inventory_kpis.inventory.stockout import compute_stockout_rates
from inventory_kpis.inventory.transform import (
    check_referential_integrity,
    count_duplicate_keys,
    prepare_products,
    prepare_stores,
    prepare_transactions,
)
from inventory_kpis.inventory.turnover import compute_inventory_age, compute_turnover_ratios
from inventory_kpis.utils.types import KpiResults

logger = logging.getLogger(__name__)

RESULT_SETS = [
    "current_stock",
    "low_inventory",
    "stock_status",
    "avg_stock",
    "reorder",
    "turnover",
    "stockout",
    "inventory_age",
    "summary_report",
    "ranked_sales",
    "seasonal_demand",
    "referential_violations",
]


def validate(
    transactions: pd.DataFrame,
    stores: pd.DataFrame | None = None,
    products: pd.DataFrame | None = None,
) -> dict:
    """Check that the inputs are well-formed without computing any KPI."""
    try:
        facts = prepare_transactions(transactions, report_duplicates=False)
        stores = prepare_stores(stores) if stores is not None else None
        products = prepare_products(products) if products is not None else None
    except MalformedInputError as exc:
        return {"status": "error", "message": str(exc), "errors": exc.errors}

    violations = check_referential_integrity(facts, stores, products)
    return {
        "status": "ok",
        "row_count": len(facts),
        "referential_violations": len(violations),
        "duplicate_keys": count_duplicate_keys(facts),
    }


def validate_output(df: pd.DataFrame, result_set: str) -> pd.DataFrame:
    """Run pandera validation on a computed result set."""
    match result_set:
        case "summary_report":
            return SUMMARY_REPORT_SCHEMA.validate(df)
        case "ranked_sales":
            return RANKED_SALES_SCHEMA.validate(df)
        case other:
            raise ValueError(f"No schema registered for: {other}")


def run(
    transactions: pd.DataFrame,
    stores: pd.DataFrame | None = None,
    products: pd.DataFrame | None = None,
    config: KpiConfig | None = None,
) -> KpiResults:
    """Execute the full KPI pipeline over one snapshot of the transaction log.

    Pure function of its arguments: the same snapshot and config always
    produce the same result sets.
    """
    config = config or KpiConfig()

    facts = prepare_transactions(transactions)
    stores = prepare_stores(stores) if stores is not None else None
    products = prepare_products(products) if products is not None else None

    anchor = resolve_anchor(facts, config)
    logger.info(f"Running KPI pipeline over {len(facts)} facts, anchor date {anchor}")

    stockout = compute_stockout_rates(facts)
    inventory_age = compute_inventory_age(facts)
    avg_stock = compute_avg_stock(facts)
    turnover = compute_turnover_ratios(facts)
    reorder = compute_reorder_points(facts, config)

    results: KpiResults = {
        "current_stock": compute_current_stock(facts),
        "low_inventory": flag_low_inventory(facts, config),
        "stock_status": classify_stock_status(facts, config),
        "avg_stock": avg_stock,
        "reorder": reorder,
        "turnover": turnover,
        "stockout": stockout,
        "inventory_age": inventory_age,
        "summary_report": compose_summary_report(stockout, inventory_age, avg_stock, turnover, reorder),
        "ranked_sales": rank_monthly_sales(facts),
        "seasonal_demand": compute_seasonal_demand(facts, products, config),
        "referential_violations": check_referential_integrity(facts, stores, products),
    }

    validate_output(results["summary_report"], "summary_report")
    validate_output(results["ranked_sales"], "ranked_sales")

    for name in RESULT_SETS:
        logger.info(f"{name}: {len(results[name])} rows")
    return results
