"""Command-line runner — validates inputs and writes every KPI result set."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from inventory_kpis import inventory
from inventory_kpis.config import get_env_config, load_kpi_config
from inventory_kpis.errors import KpiPipelineError
from inventory_kpis.utils.io import read_table, write_output

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute inventory KPIs from a transaction log")
    parser.add_argument("--transactions", required=True, help="CSV/Parquet file or directory of CSVs")
    parser.add_argument("--stores", help="Store reference table")
    parser.add_argument("--products", help="Product reference table")
    parser.add_argument("--config", help="YAML or TOML config file")
    parser.add_argument("--anchor-date", help="Pin the trailing-window anchor (YYYY-MM-DD)")
    parser.add_argument("--output-dir", default="output", help="Where result sets are written")
    parser.add_argument("--format", choices=["csv", "json", "parquet"], default="csv")
    parser.add_argument("--validate", action="store_true", help="Only validate, don't compute")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _print_validation(result: dict) -> None:
    match result:
        case {"status": "ok", "row_count": n, "referential_violations": v, "duplicate_keys": d}:
            console.print(
                f"[green]✓[/green] {n} transactions valid, "
                f"{v} referential violations, {d} rows with duplicate keys"
            )
        case {"status": "error", "message": msg, "errors": errs}:
            console.print(f"[red]✗ {msg}[/red]")
            for err in errs[:10]:
                console.print(f"  [red]{err}[/red]")


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = load_kpi_config(args.config) if args.config else get_env_config()
        if args.anchor_date:
            config = replace(config, anchor_date=args.anchor_date)

        transactions = read_table(args.transactions)
        stores = read_table(args.stores) if args.stores else None
        products = read_table(args.products) if args.products else None
    except (KpiPipelineError, FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(2)

    if args.validate:
        result = inventory.validate(transactions, stores, products)
        _print_validation(result)
        if result["status"] != "ok":
            sys.exit(1)
        return

    try:
        results = inventory.run(transactions, stores, products, config)
    except KpiPipelineError as exc:
        console.print(f"[red]Pipeline failed: {exc}[/red]")
        sys.exit(1)

    table = Table(title="KPI Result Sets")
    table.add_column("Result set")
    table.add_column("Rows", justify="right")
    table.add_column("Output")

    output_dir = Path(args.output_dir)
    for name, df in results.items():
        path = write_output(df, output_dir / f"{name}.{args.format}", fmt=args.format)
        table.add_row(name, str(len(df)), str(path))

    console.print(table)


if __name__ == "__main__":
    main()
