"""Common data transformation utilities."""

from typing import TypeAlias

import pandas as pd

ColumnMapping: TypeAlias = dict[str, str]


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Normalize column names to snake_case and apply optional mapping."""
    df = df.copy()
    df.columns = [str(col).strip().lower().replace(" ", "_").replace("-", "_") for col in df.columns]

    if mapping:
        df = df.rename(columns=mapping)

    return df


def merge_datasets(
    left: pd.DataFrame,
    right: pd.DataFrame,
    on: str | list[str],
    how: str = "left",
) -> pd.DataFrame:
    """Merge two datasets, requiring the right side to be unique on the join key."""
    match how:
        case "left" | "right" | "inner" | "outer":
            result = pd.merge(left, right, on=on, how=how, validate="many_to_one")
        case other:
            raise ValueError(f"Unsupported merge type: {other}")

    return result


def finalize(df: pd.DataFrame, sort_by: list[str]) -> pd.DataFrame:
    """Sort a result set by its key columns and reset the index."""
    return df.sort_values(sort_by, kind="mergesort").reset_index(drop=True)
