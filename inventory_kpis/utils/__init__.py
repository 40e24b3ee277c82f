"""Shared utilities for the KPI pipeline."""

from inventory_kpis.utils.io import read_csv_files, read_table, write_output
from inventory_kpis.utils.transforms import merge_datasets, normalize_columns
from inventory_kpis.utils.validators import validate_dataframe
from inventory_kpis.utils.types import KpiResults, ValidationOutcome
