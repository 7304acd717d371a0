"""
Shared fixtures for the insight agent tests.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from insight_agent.parser import parse


SALES_CSV = "Product,Sales,Region\nWidget A,1500,North\nWidget B,2300,South\nWidget C,1800,East\n"


@pytest.fixture
def sales_csv():
    """Raw CSV text with one categorical and one numeric column plus a region."""
    return SALES_CSV


@pytest.fixture
def sales_dataset():
    """Parsed three-row sales dataset."""
    return parse(SALES_CSV, "csv", name="Sales.csv")


@pytest.fixture
def empty_dataset():
    """Dataset with a header line but no data rows."""
    return parse("Product,Sales\n", "csv", name="empty.csv")


@pytest.fixture
def wide_dataset():
    """Fifteen rows with one categorical and four numeric columns."""
    lines = ["Name,A,B,C,D"]
    for i in range(15):
        lines.append(f"row{i},{i},{i * 2},{i * 3},{i * 4}")
    return parse("\n".join(lines), "csv", name="wide.csv")
