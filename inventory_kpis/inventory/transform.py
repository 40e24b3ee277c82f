"""Validate and normalize the transaction log and reference tables before KPI computation."""

import logging

import pandas as pd

from inventory_kpis.errors import MalformedInputError
from inventory_kpis.inventory.models import (
    PRODUCT_SCHEMA,
    STORE_SCHEMA,
    TRANSACTION_KEY,
    TRANSACTION_SCHEMA,
)
from inventory_kpis.utils.transforms import normalize_columns
from inventory_kpis.utils.validators import (
    find_orphans,
    validate_dataframe,
    validate_referential_integrity,
    validate_unique,
)

logger = logging.getLogger(__name__)

# ingestion order, used to break ties between facts sharing a date
SEQUENCE_COL = "_seq"

# Source exports use display headers ("Store ID", "Holiday/Promotion")
SOURCE_COLUMN_MAP: dict[str, str] = {
    "holiday/promotion": "holiday_promotion",
    "holiday_or_promotion": "holiday_promotion",
    "weather": "weather_condition",
}

VIOLATION_COLUMNS = ["date", "store_id", "product_id", "missing_reference"]


def _check(df: pd.DataFrame, schema, label: str) -> pd.DataFrame:
    validated, outcome = validate_dataframe(df, schema)
    match outcome:
        case {"valid": True}:
            return validated
        case {"valid": False, "errors": errs}:
            for err in errs[:10]:
                logger.error(f"{label}: {err}")
            raise MalformedInputError(f"{label} failed schema validation ({len(errs)} errors)", errs)


def prepare_transactions(raw_df: pd.DataFrame, report_duplicates: bool = True) -> pd.DataFrame:
    """Validate the fact log and attach the ingestion sequence.

    Column headers are normalized to snake_case, types are coerced through
    the pandera schema and dates are truncated to midnight. Duplicate
    (date, store, product) keys are logged but kept.
    """
    df = normalize_columns(raw_df, SOURCE_COLUMN_MAP)
    df = _check(df, TRANSACTION_SCHEMA, "transactions")

    df = df.reset_index(drop=True)
    df["date"] = df["date"].dt.normalize()
    df[SEQUENCE_COL] = range(len(df))

    if report_duplicates:
        count_duplicate_keys(df)

    logger.info(f"Prepared {len(df)} transactions for {df['store_id'].nunique()} stores, "
                f"{df['product_id'].nunique()} products")
    return df


def count_duplicate_keys(facts: pd.DataFrame) -> int:
    """Number of facts sharing their (date, store, product) key with another fact."""
    match validate_unique(facts, TRANSACTION_KEY):
        case {"valid": False, "errors": errs}:
            logger.warning(f"Transaction key is not unique: {errs[0]}")
            return int(facts.duplicated(subset=TRANSACTION_KEY, keep=False).sum())
        case _:
            return 0


def prepare_stores(raw_df: pd.DataFrame) -> pd.DataFrame:
    return _check(normalize_columns(raw_df), STORE_SCHEMA, "stores").reset_index(drop=True)


def prepare_products(raw_df: pd.DataFrame) -> pd.DataFrame:
    return _check(normalize_columns(raw_df), PRODUCT_SCHEMA, "products").reset_index(drop=True)


def check_referential_integrity(
    facts: pd.DataFrame,
    stores: pd.DataFrame | None,
    products: pd.DataFrame | None,
) -> pd.DataFrame:
    """List facts that reference an unknown store or product.

    One row per (fact, missing reference). Nothing is raised; the caller
    decides which computations exclude the offending rows.
    """
    parts = []
    for parent, key, label in ((stores, "store_id", "store"), (products, "product_id", "product")):
        if parent is None:
            continue

        outcome = validate_referential_integrity(facts, parent, key, key)
        if outcome["valid"]:
            continue

        logger.warning(f"Referential violation ({label}): {outcome['errors'][0]}")
        orphans = facts.loc[find_orphans(facts, parent, key, key), TRANSACTION_KEY].copy()
        orphans["missing_reference"] = label
        parts.append(orphans)

    if not parts:
        return pd.DataFrame(columns=VIOLATION_COLUMNS)

    violations = pd.concat(parts, ignore_index=True)
    return violations.sort_values(VIOLATION_COLUMNS, kind="mergesort").reset_index(drop=True)
