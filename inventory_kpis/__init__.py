"""Inventory KPI pipeline — stock, stockouts, reorder points, turnover and seasonal demand."""

from inventory_kpis.config import KpiConfig, load_kpi_config
from inventory_kpis.errors import (
    InvalidConfigurationError,
    KpiPipelineError,
    MalformedInputError,
)

__version__ = "0.3.0"
