"""Shared type definitions for the pipeline."""

from enum import StrEnum
from typing import TypeAlias

import pandas as pd


KpiResults: TypeAlias = dict[str, pd.DataFrame]
ValidationOutcome: TypeAlias = dict[str, bool | str | list[str]]
GroupKey: TypeAlias = list[str]

STORE_PRODUCT_KEY: GroupKey = ["store_id", "product_id"]
PRODUCT_KEY: GroupKey = ["product_id"]


class StockStatus(StrEnum):
    OVERSTOCK = "overstock"
    UNDERSTOCK = "understock"
    BALANCED = "balanced"
