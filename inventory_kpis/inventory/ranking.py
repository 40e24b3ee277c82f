"""Monthly best-seller ranking within each store."""

import pandas as pd

from inventory_kpis.utils.transforms import finalize

RANK_PARTITION = ["store_id", "sales_month"]


def assign_ranks(
    df: pd.DataFrame,
    partition_by: list[str],
    order_by: str,
    rank_col: str,
    ascending: bool = False,
) -> pd.DataFrame:
    """Rank rows within each partition by ``order_by``.

    Ties share the lowest rank of their block and the next distinct value
    skips past them, so [100, 100, 80] ranks as [1, 1, 3].
    """
    ranked = df.copy()
    ranked[rank_col] = (
        ranked.groupby(partition_by)[order_by]
        .rank(method="min", ascending=ascending)
        .astype(int)
    )
    return ranked


def monthly_sales(facts: pd.DataFrame) -> pd.DataFrame:
    """Units sold per (store, product, calendar month)."""
    monthly = facts[["store_id", "product_id", "units_sold"]].copy()
    monthly["sales_month"] = facts["date"].dt.strftime("%Y-%m")

    return monthly.groupby(["store_id", "product_id", "sales_month"]).agg(
        monthly_units_sold=("units_sold", "sum"),
    ).reset_index()


def rank_monthly_sales(facts: pd.DataFrame) -> pd.DataFrame:
    """RankedSales: products ranked by monthly units sold within store and month."""
    ranked = assign_ranks(
        monthly_sales(facts),
        partition_by=RANK_PARTITION,
        order_by="monthly_units_sold",
        rank_col="rank_in_store_month",
    )
    ranked = ranked[[
        "store_id", "product_id", "sales_month", "monthly_units_sold", "rank_in_store_month",
    ]]
    return finalize(ranked, [*RANK_PARTITION, "rank_in_store_month", "product_id"])
