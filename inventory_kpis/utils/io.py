"""File I/O utilities for reading inputs and writing result sets."""

import logging
from pathlib import Path
from typing import TypeAlias

import pandas as pd

FilePath: TypeAlias = str | Path

logger = logging.getLogger(__name__)


def read_csv_files(directory: FilePath, pattern: str = "*.csv") -> pd.DataFrame:
    """Read all CSV files from a directory and concatenate them in name order."""
    directory = Path(directory)
    chunks = []

    for csv_file in sorted(directory.glob(pattern)):
        logger.info(f"Reading {csv_file.name}")
        chunks.append(pd.read_csv(csv_file))

    if not chunks:
        raise FileNotFoundError(f"No files matching {pattern} in {directory}")

    return pd.concat(chunks, ignore_index=True)


def read_table(path: FilePath) -> pd.DataFrame:
    """Read a single table from CSV, Parquet or JSON, or a directory of CSVs."""
    path = Path(path)
    if path.is_dir():
        return read_csv_files(path)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")

    match path.suffix:
        case ".csv":
            return pd.read_csv(path)
        case ".parquet":
            return pd.read_parquet(path)
        case ".json":
            return pd.read_json(path, orient="records")
        case ext:
            raise ValueError(f"Unsupported input format: {ext}")


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> Path:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            df.to_csv(path, index=False)
        case "parquet":
            df.to_parquet(path, index=False)
        case "json":
            df.to_json(path, orient="records", indent=2, date_format="iso")
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    logger.info(f"Wrote {len(df)} rows to {path}")
    return path
