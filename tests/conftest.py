"""
Shared fixtures for KPI pipeline tests
"""
import pandas as pd
import pytest

from inventory_kpis.config import KpiConfig
from inventory_kpis.inventory.transform import prepare_transactions


def make_facts(rows: list[dict]) -> pd.DataFrame:
    """Build a transaction frame, filling attributes the test doesn't care about."""
    defaults = {
        "inventory_level": 100,
        "units_sold": 10,
        "demand_forecast": 50.0,
        "units_ordered": 0,
        "price": 9.99,
        "discount": 0,
        "weather_condition": "Sunny",
        "holiday_promotion": False,
        "competitor_pricing": 10.49,
        "seasonality": "Winter",
    }
    return pd.DataFrame([{**defaults, **row} for row in rows])


@pytest.fixture
def facts_factory():
    """Raw rows -> validated, sequenced fact frame."""
    def _build(rows: list[dict]) -> pd.DataFrame:
        return prepare_transactions(make_facts(rows))
    return _build


@pytest.fixture
def raw_transactions() -> pd.DataFrame:
    """Two stores, three products, spread across January and February 2024."""
    return make_facts([
        {"date": "2024-01-01", "store_id": "S1", "product_id": "P1", "inventory_level": 120,
         "units_sold": 20, "demand_forecast": 110.0},
        {"date": "2024-01-15", "store_id": "S1", "product_id": "P1", "inventory_level": 90,
         "units_sold": 30, "demand_forecast": 95.0},
        {"date": "2024-02-10", "store_id": "S1", "product_id": "P1", "inventory_level": 40,
         "units_sold": 25, "demand_forecast": 60.0},
        {"date": "2024-01-20", "store_id": "S1", "product_id": "P2", "inventory_level": 300,
         "units_sold": 0, "demand_forecast": 80.0},
        {"date": "2024-02-10", "store_id": "S1", "product_id": "P2", "inventory_level": 280,
         "units_sold": 20, "demand_forecast": 90.0},
        {"date": "2024-02-05", "store_id": "S2", "product_id": "P1", "inventory_level": 60,
         "units_sold": 15, "demand_forecast": 50.0},
        {"date": "2024-02-09", "store_id": "S2", "product_id": "P3", "inventory_level": 0,
         "units_sold": 0, "demand_forecast": 12.0},
    ])


@pytest.fixture
def stores() -> pd.DataFrame:
    return pd.DataFrame({"store_id": ["S1", "S2"], "region": ["North", "South"]})


@pytest.fixture
def products() -> pd.DataFrame:
    return pd.DataFrame({
        "product_id": ["P1", "P2", "P3"],
        "category": ["Groceries", "Toys", "Groceries"],
    })


@pytest.fixture
def facts(raw_transactions) -> pd.DataFrame:
    return prepare_transactions(raw_transactions)


@pytest.fixture
def config() -> KpiConfig:
    return KpiConfig()
