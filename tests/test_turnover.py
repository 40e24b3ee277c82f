"""
Unit Tests - Ratios, turnover, inventory age and stockout rates
"""
import math

import pandas as pd
import pytest

from inventory_kpis.inventory.ratios import mean_of_daily_ratios, safe_ratio
from inventory_kpis.inventory.stockout import compute_stockout_rates
from inventory_kpis.inventory.turnover import compute_inventory_age, compute_turnover_ratios


class TestSafeRatio:
    def test_zero_denominator_is_nan(self):
        result = safe_ratio(pd.Series([10, 5]), pd.Series([2, 0]))

        assert result.iloc[0] == 5.0
        assert math.isnan(result.iloc[1])

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(safe_ratio(pd.Series([0]), pd.Series([0])).iloc[0])

    def test_mean_of_daily_ratios_skips_zero_days(self):
        df = pd.DataFrame({
            "product_id": ["P1", "P1", "P1"],
            "num": [100, 50, 70],
            "den": [10, 0, 7],
        })

        result = mean_of_daily_ratios(df, "num", "den", ["product_id"], "ratio")

        assert result["ratio"].iloc[0] == pytest.approx(10.0)


class TestTurnover:
    """Tests for compute_turnover_ratios"""

    def test_ratio_is_sum_over_mean(self, facts):
        result = compute_turnover_ratios(facts).set_index("product_id")
        p1 = facts[facts["product_id"] == "P1"]

        expected = p1["units_sold"].sum() / p1["inventory_level"].mean()
        assert result.loc["P1", "inventory_turnover_ratio"] == expected
        assert result.loc["P1", "total_units_sold"] == 90

    def test_zero_average_inventory_is_undefined(self, facts):
        result = compute_turnover_ratios(facts).set_index("product_id")

        assert result.loc["P3", "avg_inventory"] == 0
        assert math.isnan(result.loc["P3", "inventory_turnover_ratio"])

    def test_one_row_per_product(self, facts):
        result = compute_turnover_ratios(facts)

        assert result["product_id"].tolist() == ["P1", "P2", "P3"]


class TestInventoryAge:
    """Tests for compute_inventory_age"""

    def test_zero_sales_days_excluded_not_zeroed(self, facts):
        result = compute_inventory_age(facts).set_index("product_id")

        # P2: 300/0 is dropped, only 280/20 remains
        assert result.loc["P2", "avg_inventory_age_days"] == pytest.approx(14.0)

    def test_product_without_any_sales_is_nan(self, facts):
        result = compute_inventory_age(facts).set_index("product_id")

        assert "P3" in result.index
        assert math.isnan(result.loc["P3", "avg_inventory_age_days"])

    def test_mean_across_stores(self, facts):
        result = compute_inventory_age(facts).set_index("product_id")

        expected = (120 / 20 + 90 / 30 + 40 / 25 + 60 / 15) / 4
        assert result.loc["P1", "avg_inventory_age_days"] == pytest.approx(expected)


class TestStockoutRates:
    """Tests for compute_stockout_rates"""

    def test_counts_days_forecast_exceeds_inventory(self, facts):
        result = compute_stockout_rates(facts).set_index(["store_id", "product_id"])
        row = result.loc[("S1", "P1")]

        # 110 < 120, 95 > 90, 60 > 40
        assert row["total_days"] == 3
        assert row["stockout_days"] == 2
        assert row["stockout_rate_percent"] == pytest.approx(66.67)

    def test_equal_forecast_is_not_stockout(self, facts_factory):
        df = facts_factory([
            {"date": "2024-01-01", "store_id": "S1", "product_id": "P1",
             "inventory_level": 50, "demand_forecast": 50.0},
        ])

        assert compute_stockout_rates(df)["stockout_days"].tolist() == [0]
