"""
Tests for column classification, statistics and derived views.
"""
import math

import pytest

from insight_agent.data_handler import (
    ColumnStats,
    DataHandler,
    classify_columns,
    compute_stats,
    dataset_overview,
    detect_anomalies,
    generate_insights,
    numeric_columns,
)
from insight_agent.charts import project
from insight_agent.dataset import create_dataset
from insight_agent.parser import parse
from insight_agent.values import Missing, Number, Text, tag, to_number


class TestCoercion:
    """Tests for cell tagging and numeric coercion."""

    def test_tag(self):
        """Test the three cell kinds."""
        assert tag(None) == Missing()
        assert tag(3) == Number(3.0)
        assert tag("abc") == Text("abc")

    def test_to_number(self):
        """Test successful and failed coercions."""
        assert to_number("12.5") == 12.5
        assert to_number(" 7 ") == 7.0
        assert to_number(4) == 4.0
        assert to_number("") is None
        assert to_number("abc") is None
        assert to_number(None) is None
        assert to_number(True) is None
        assert to_number("nan") is None
        assert math.isinf(to_number("inf"))

    def test_to_number_accepts_plain_notation_only(self):
        """Test that only ASCII decimal and exponent notation parses."""
        assert to_number("1e3") == 1000.0
        assert to_number("-.5") == -0.5
        assert to_number("+2.") == 2.0
        assert to_number("1_000") is None
        assert to_number("１２") is None
        assert to_number("0x10") is None
        assert to_number("1e") is None

    def test_integer_wider_than_float(self):
        """Test that an integer too large for a float tags as infinity."""
        assert tag(int("9" * 400)) == Number(math.inf)
        assert tag(-int("9" * 400)) == Number(-math.inf)
        assert to_number(int("9" * 400)) == math.inf


class TestClassifier:
    """Tests for first-record column classification."""

    def test_end_to_end_csv(self):
        """Test classification of the Product/Sales example."""
        ds = parse("Product,Sales\nWidget A,100\nWidget B,200\n", "csv")

        assert ds.row_count == 2
        assert classify_columns(ds) == {"Product": "categorical", "Sales": "numeric"}

    def test_first_record_only(self):
        """Test that an empty or text first value makes the column categorical."""
        ds = parse("a,b,c\n,abc,12.5\n1,2,x\n3,4,y\n", "csv")

        assert classify_columns(ds) == {"a": "categorical", "b": "categorical", "c": "numeric"}

    def test_infinite_first_value_is_categorical(self):
        """Test that a non-finite first value is not numeric."""
        ds = create_dataset("x", [{"v": "inf"}, {"v": "1"}], "csv")

        assert classify_columns(ds) == {"v": "categorical"}

    def test_json_numbers(self):
        """Test that JSON numbers classify as numeric."""
        ds = parse('[{"n": 3, "s": "q", "z": null}]', "json")

        assert classify_columns(ds) == {"n": "numeric", "s": "categorical", "z": "categorical"}

    def test_empty_dataset(self, empty_dataset):
        """Test that a dataset without rows has no columns to classify."""
        assert classify_columns(empty_dataset) == {}
        assert numeric_columns(classify_columns(empty_dataset)) == []


class TestStatistics:
    """Tests for the statistics aggregator."""

    def test_skips_unparsable_cells(self):
        """Test that unparsable cells are skipped rather than failing the column."""
        ds = create_dataset("x", [{"v": "10"}, {"v": "x"}, {"v": "20"}], "csv")

        assert compute_stats(ds, ["v"]) == {"v": ColumnStats(min=10.0, max=20.0, avg=15.0, count=2)}

    def test_end_to_end_csv(self):
        """Test statistics for the Product/Sales example."""
        ds = parse("Product,Sales\nWidget A,100\nWidget B,200\n", "csv")

        assert compute_stats(ds) == {"Sales": ColumnStats(min=100.0, max=200.0, avg=150.0, count=2)}

    def test_column_without_values_omitted(self):
        """Test that a column with no parsable values is left out."""
        ds = create_dataset("x", [{"v": "1", "w": 1}, {"v": "a", "w": 2}], "csv")
        out = compute_stats(ds, ["v", "w"])

        assert set(out) == {"v", "w"}
        ds2 = create_dataset("x", [{"v": "a"}, {"v": "b"}], "csv")
        assert compute_stats(ds2, ["v"]) == {}

    def test_no_numeric_columns(self):
        """Test that a fully categorical dataset yields empty statistics."""
        ds = parse("a,b\nx,y\n", "csv")

        assert compute_stats(ds) == {}

    def test_underscore_digits_are_text(self):
        """Test that digit-group underscores do not make a column numeric."""
        ds = parse("a\n1_000\n", "csv")

        assert classify_columns(ds) == {"a": "categorical"}
        assert compute_stats(ds) == {}
        assert compute_stats(ds, ["a"]) == {}

    def test_oversized_json_integer(self):
        """Test that an integer literal wider than a float does not break derivation."""
        ds = parse('[{"v": ' + "9" * 400 + '}]', "json")

        assert classify_columns(ds) == {"v": "categorical"}
        assert compute_stats(ds, ["v"]) == {"v": ColumnStats(min=math.inf, max=math.inf, avg=math.inf, count=1)}
        chart = project(ds, "pie")
        assert len(chart.slices) == 1


class TestDerivedViews:
    """Tests for overview, insights and anomaly detection."""

    def test_overview(self, sales_dataset):
        """Test the overview counts."""
        assert dataset_overview(sales_dataset) == {
            "name": "Sales.csv",
            "rows": 3,
            "columns": 3,
            "numeric_columns": 1,
            "type": "CSV",
        }

    def test_insights(self, sales_dataset):
        """Test that insight cards interpolate counts."""
        cards = generate_insights(sales_dataset)

        assert [c["title"] for c in cards] == ["Data Quality", "Key Patterns", "Recommendations"]
        assert "3 complete records" in cards[0]["text"]
        assert "Found 1 numeric columns" in cards[1]["text"]

    def test_detect_anomalies(self):
        """Test that a single extreme value is flagged by position."""
        rows = [{"v": "10"} for _ in range(20)] + [{"v": "bad"}, {"v": "1000"}]
        ds = create_dataset("x", rows, "csv")

        assert detect_anomalies(ds, "v") == [21]

    def test_detect_anomalies_constant_column(self):
        """Test that a constant column has no anomalies."""
        ds = create_dataset("x", [{"v": 5}] * 10, "json")

        assert detect_anomalies(ds, "v") == []

    def test_detect_anomalies_unknown_column(self, sales_dataset):
        """Test that an unknown column raises ValueError."""
        with pytest.raises(ValueError):
            detect_anomalies(sales_dataset, "Missing")


class TestDataHandler:
    """Tests for the DataHandler facade."""

    def test_facade(self, sales_dataset):
        """Test that the handler delegates to the pure functions."""
        handler = DataHandler(sales_dataset, preview_rows=2)

        assert handler.get_columns() == ["Product", "Sales", "Region"]
        assert handler.get_numeric_columns() == ["Sales"]
        assert handler.get_summary()["Sales"].count == 3
        assert len(handler.preview()) == 2
        assert handler.dataset is sales_dataset
