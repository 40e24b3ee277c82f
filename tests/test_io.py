"""
Unit Tests - File I/O boundary
"""
import pandas as pd
import pytest

from inventory_kpis.utils.io import read_csv_files, read_table, write_output
from inventory_kpis.utils.transforms import normalize_columns


class TestReadTable:
    def test_directory_of_csvs_concatenated_in_name_order(self, tmp_path):
        pd.DataFrame({"a": [2]}).to_csv(tmp_path / "b.csv", index=False)
        pd.DataFrame({"a": [1]}).to_csv(tmp_path / "a.csv", index=False)

        result = read_table(tmp_path)

        assert result["a"].tolist() == [1, 2]

    def test_empty_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_csv_files(tmp_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_table(tmp_path / "nope.csv")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "data.xml"
        path.write_text("<x/>")

        with pytest.raises(ValueError):
            read_table(path)


class TestWriteOutput:
    def test_json_round_trip(self, tmp_path):
        df = pd.DataFrame({"store_id": ["S1"], "reorder_point": [8.0]})

        path = write_output(df, tmp_path / "nested" / "reorder.json", fmt="json")

        assert read_table(path).to_dict("records") == [{"store_id": "S1", "reorder_point": 8.0}]

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValueError):
            write_output(pd.DataFrame(), tmp_path / "x.txt", fmt="txt")


class TestNormalizeColumns:
    def test_display_headers_to_snake_case(self):
        df = pd.DataFrame(columns=["Store ID", "Units-Sold", "Holiday/Promotion"])

        result = normalize_columns(df, {"holiday/promotion": "holiday_promotion"})

        assert list(result.columns) == ["store_id", "units_sold", "holiday_promotion"]
