"""KPI pipeline configuration and config file loading."""

import tomllib
from dataclasses import dataclass, fields
from datetime import date, datetime
from pathlib import Path
from typing import TypeAlias

import pandas as pd
import yaml

from inventory_kpis.errors import InvalidConfigurationError

ConfigDict: TypeAlias = dict[str, str | int | float | None]

SEASONAL_GRAINS = ("month", "season")

# anchor - window must stay inside the pandas Timestamp range (1677-2262)
MAX_WINDOW_DAYS = 36_600


@dataclass(frozen=True)
class KpiConfig:
    window_days: int = 30
    lead_time_multiplier: float = 2
    low_inventory_threshold_ratio: float = 1.0
    overstock_threshold: float = 1.5
    understock_threshold: float = 0.5
    anchor_date: date | str | None = None
    seasonal_grain: str = "month"

    def __post_init__(self):
        match self.window_days:
            case bool():
                raise InvalidConfigurationError("window_days must be an integer, got a bool")
            case int(n) if 0 < n <= MAX_WINDOW_DAYS:
                pass
            case int(n) if n > MAX_WINDOW_DAYS:
                raise InvalidConfigurationError(
                    f"window_days must be at most {MAX_WINDOW_DAYS}, got {n}"
                )
            case other:
                raise InvalidConfigurationError(f"window_days must be a positive integer, got {other!r}")

        if not _is_number(self.lead_time_multiplier) or self.lead_time_multiplier < 0:
            raise InvalidConfigurationError(
                f"lead_time_multiplier must be >= 0, got {self.lead_time_multiplier!r}"
            )

        for name in ("low_inventory_threshold_ratio", "overstock_threshold", "understock_threshold"):
            value = getattr(self, name)
            if not _is_number(value) or value <= 0:
                raise InvalidConfigurationError(f"{name} must be > 0, got {value!r}")

        if self.understock_threshold > self.overstock_threshold:
            raise InvalidConfigurationError(
                f"understock_threshold ({self.understock_threshold}) exceeds "
                f"overstock_threshold ({self.overstock_threshold})"
            )

        if self.seasonal_grain not in SEASONAL_GRAINS:
            raise InvalidConfigurationError(
                f"seasonal_grain must be one of {SEASONAL_GRAINS}, got {self.seasonal_grain!r}"
            )

        anchor = self.anchor_timestamp()
        if anchor is not None:
            try:
                anchor - pd.Timedelta(days=self.window_days - 1)
            except (OverflowError, pd.errors.OutOfBoundsDatetime) as exc:
                raise InvalidConfigurationError(
                    f"window_days={self.window_days} reaches before the earliest "
                    f"representable date from anchor {anchor.date()}"
                ) from exc

    def anchor_timestamp(self) -> pd.Timestamp | None:
        """Return the pinned anchor date as a midnight Timestamp, if any."""
        if self.anchor_date is None:
            return None
        try:
            ts = pd.Timestamp(self.anchor_date)
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationError(f"anchor_date is not a date: {self.anchor_date!r}") from exc
        if pd.isna(ts):
            raise InvalidConfigurationError(f"anchor_date is not a date: {self.anchor_date!r}")
        return ts.normalize()


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def config_from_dict(data: ConfigDict) -> KpiConfig:
    """Build a KpiConfig from a plain mapping, rejecting unknown keys."""
    known = {f.name for f in fields(KpiConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidConfigurationError(f"Unknown configuration options: {unknown}")

    values = dict(data)
    if isinstance(values.get("anchor_date"), datetime):
        values["anchor_date"] = values["anchor_date"].date()
    return KpiConfig(**values)


def load_kpi_config(path: str | Path | None = None) -> KpiConfig:
    """Load configuration from a YAML or TOML file.

    A pyproject.toml is read from its ``[tool.inventory_kpis]`` table; any
    other TOML file is taken as the options table itself. With no path the
    defaults are returned.
    """
    if path is None:
        return KpiConfig()

    path = Path(path)
    match path.suffix:
        case ".yaml" | ".yml":
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        case ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("inventory_kpis", {})
        case ext:
            raise InvalidConfigurationError(f"Unsupported config format: {ext}")

    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Config file {path} does not hold a mapping")
    return config_from_dict(data)


def get_env_config() -> KpiConfig:
    """Read pipeline defaults from the project's pyproject.toml."""
    pyproject = Path(__file__).parent.parent / "pyproject.toml"
    if not pyproject.exists():
        return KpiConfig()
    return load_kpi_config(pyproject)
