"""Data validation utilities using pandera."""

import pandera as pa
import pandas as pd
from pandera import DataFrameSchema

from inventory_kpis.utils.types import ValidationOutcome


def validate_dataframe(
    df: pd.DataFrame,
    schema: DataFrameSchema,
) -> tuple[pd.DataFrame | None, ValidationOutcome]:
    """Validate a DataFrame against a pandera schema.

    Returns the coerced frame (None on failure) alongside the outcome dict.
    """
    try:
        validated = schema.validate(df, lazy=True)
        return validated, {"valid": True, "status": "ok", "errors": []}
    except pa.errors.SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val}:
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return None, {"valid": False, "status": "error", "errors": errors}


def validate_unique(df: pd.DataFrame, columns: list[str]) -> ValidationOutcome:
    """Check that specified columns form a unique key."""
    duplicates = df.duplicated(subset=columns, keep=False)
    dup_count = int(duplicates.sum())

    match dup_count:
        case 0:
            return {"valid": True, "status": "ok", "errors": []}
        case n:
            return {
                "valid": False,
                "status": "error",
                "errors": [f"Found {n} duplicate rows on columns {columns}"],
            }


def find_orphans(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> pd.Series:
    """Boolean mask of child rows whose key is absent from the parent table."""
    return ~child[child_key].isin(parent[parent_key])


def validate_referential_integrity(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> ValidationOutcome:
    """Validate that all child keys exist in parent."""
    orphans = sorted(set(child.loc[find_orphans(child, parent, child_key, parent_key), child_key]))

    match len(orphans):
        case 0:
            return {"valid": True, "status": "ok", "errors": []}
        case n:
            sample = orphans[:5]
            return {
                "valid": False,
                "status": "error",
                "errors": [f"Found {n} orphan {child_key} keys. Sample: {sample}"],
            }
