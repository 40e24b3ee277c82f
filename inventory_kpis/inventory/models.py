"""Pandera schemas for the transaction log, reference tables and report outputs."""

import pandera as pa
from pandera import Column, Check, DataFrameSchema

TRANSACTION_KEY = ["date", "store_id", "product_id"]

# Daily fact rows. Only the attributes the KPIs read are required; the rest
# are type-checked when present.
TRANSACTION_SCHEMA = DataFrameSchema(
    columns={
        "date": Column("datetime64[ns]", nullable=False),
        "store_id": Column(str, Check.str_length(min_value=1), nullable=False),
        "product_id": Column(str, Check.str_length(min_value=1), nullable=False),
        "inventory_level": Column(int, nullable=False),
        "units_sold": Column(int, nullable=False),
        "demand_forecast": Column(float, nullable=False),
        "units_ordered": Column(int, required=False),
        "price": Column(float, required=False, nullable=True),
        "discount": Column(int, Check.in_range(0, 100), required=False),
        "weather_condition": Column(str, required=False, nullable=True),
        "holiday_promotion": Column(bool, required=False),
        "competitor_pricing": Column(float, required=False, nullable=True),
        "seasonality": Column(str, required=False, nullable=True),
    },
    strict=False,  # allow extra columns from source files
    coerce=True,
)

STORE_SCHEMA = DataFrameSchema(
    columns={
        "store_id": Column(str, unique=True, nullable=False),
        "region": Column(str, nullable=True),
    },
    strict=False,
    coerce=True,
)

PRODUCT_SCHEMA = DataFrameSchema(
    columns={
        "product_id": Column(str, unique=True, nullable=False),
        "category": Column(str, nullable=False),
    },
    strict=False,
    coerce=True,
)

SUMMARY_REPORT_SCHEMA = DataFrameSchema(
    columns={
        "store_id": Column(str),
        "product_id": Column(str),
        "total_days": Column(int, Check.gt(0)),
        "stockout_days": Column(int, Check.ge(0)),
        "stockout_rate_percent": Column(float, Check.in_range(0, 100)),
        "avg_inventory_age_days": Column(float, nullable=True),
        "avg_inventory_level": Column(float, nullable=True),
        "inventory_turnover_ratio": Column(float, nullable=True),
        "avg_daily_sales": Column(float, nullable=True),
        "max_daily_sales": Column(float, nullable=True),
        "reorder_point": Column(float, nullable=True),
    },
    strict=True,
)

RANKED_SALES_SCHEMA = DataFrameSchema(
    columns={
        "store_id": Column(str),
        "product_id": Column(str),
        "sales_month": Column(str, Check.str_matches(r"^\d{4}-\d{2}$")),
        "monthly_units_sold": Column(int, Check.ge(0)),
        "rank_in_store_month": Column(int, Check.ge(1)),
    },
    strict=True,
)
