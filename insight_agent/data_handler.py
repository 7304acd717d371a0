"""Column classification and statistics for the insight agent.

The functions in this module are pure: each takes a ``Dataset`` and returns
a derived value without touching any shared state.  ``DataHandler`` bundles
them around a single dataset for callers that prefer an object, such as the
CLI and the chat agent.

Column classification samples only the first record.  A column whose first
value is numeric stays numeric even if later cells are text; the statistics
aggregator simply skips cells that do not coerce to a number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import numpy as np
from scipy import stats

from .dataset import Dataset
from .values import is_finite_number, to_number

NUMERIC = "numeric"
CATEGORICAL = "categorical"


@dataclass(frozen=True)
class ColumnStats:
    """Summary statistics for one numeric column."""

    min: float
    max: float
    avg: float
    count: int


def classify_columns(dataset: Dataset) -> Dict[str, str]:
    """Label each column ``"numeric"`` or ``"categorical"`` from the first record.

    Returns an empty mapping for a dataset without rows.
    """
    if not dataset.rows:
        return {}
    first = dataset.rows[0]
    return {
        col: NUMERIC if is_finite_number(dataset.cell(first, col)) else CATEGORICAL
        for col in dataset.columns
    }


def numeric_columns(classification: Dict[str, str]) -> List[str]:
    return [c for c, kind in classification.items() if kind == NUMERIC]


def categorical_columns(classification: Dict[str, str]) -> List[str]:
    return [c for c, kind in classification.items() if kind == CATEGORICAL]


def _column_values(dataset: Dataset, column: str) -> np.ndarray:
    values = [to_number(dataset.cell(r, column)) for r in dataset.rows]
    return np.array([v for v in values if v is not None], dtype=float)


def compute_stats(dataset: Dataset, columns: Optional[Iterable[str]] = None) -> Dict[str, ColumnStats]:
    """Compute min, max, mean and count for numeric columns.

    Parameters
    ----------
    dataset : Dataset
        Dataset to summarise.
    columns : iterable of str, optional
        Columns to summarise.  Defaults to the numeric columns found by
        ``classify_columns``.

    Returns
    -------
    Dict[str, ColumnStats]
        One entry per column with at least one parsable value.  Columns
        where no cell parses are omitted rather than reported as zero.
    """
    if columns is None:
        columns = numeric_columns(classify_columns(dataset))
    out: Dict[str, ColumnStats] = {}
    for col in columns:
        values = _column_values(dataset, col)
        if values.size == 0:
            continue
        out[col] = ColumnStats(
            min=float(values.min()),
            max=float(values.max()),
            avg=float(values.sum() / values.size),
            count=int(values.size),
        )
    return out


def dataset_overview(dataset: Dataset) -> Dict[str, object]:
    """Return the headline counts shown above the workspace."""
    classification = classify_columns(dataset)
    return {
        "name": dataset.name,
        "rows": dataset.row_count,
        "columns": len(dataset.columns),
        "numeric_columns": len(numeric_columns(classification)),
        "type": dataset.source_kind.upper(),
    }


def generate_insights(dataset: Dataset) -> List[Dict[str, str]]:
    """Return the three canned insight cards for a dataset."""
    n_numeric = len(numeric_columns(classify_columns(dataset)))
    return [
        {
            "title": "Data Quality",
            "text": f"Dataset appears to be well-structured with {dataset.row_count} complete records.",
        },
        {
            "title": "Key Patterns",
            "text": f"Found {n_numeric} numeric columns suitable for statistical analysis.",
        },
        {
            "title": "Recommendations",
            "text": "Consider exploring correlations between numeric variables for deeper insights.",
        },
    ]


def detect_anomalies(dataset: Dataset, column: str, z_thresh: float = 3.0) -> List[int]:
    """Detect anomalies in a column using z-score.

    Cells that do not coerce to a number are ignored.

    Parameters
    ----------
    dataset : Dataset
        Dataset to inspect.
    column : str
        Column name on which to detect anomalies.
    z_thresh : float, optional
        Z-score threshold beyond which a value is considered an anomaly.
        Default is 3.0.

    Returns
    -------
    List[int]
        Zero-based positions in ``dataset.rows`` considered anomalous.

    Raises
    ------
    ValueError
        If ``column`` is not one of the dataset's columns.
    """
    if column not in dataset.columns:
        raise ValueError(f"Column '{column}' not found in dataset.")
    positions: List[int] = []
    values: List[float] = []
    for i, row in enumerate(dataset.rows):
        v = to_number(dataset.cell(row, column))
        if v is not None and np.isfinite(v):
            positions.append(i)
            values.append(v)
    # zscore is undefined for fewer than two distinct values
    if len(values) < 2 or np.ptp(values) == 0:
        return []
    z_scores = np.abs(stats.zscore(np.array(values)))
    return [positions[i] for i in np.where(z_scores > z_thresh)[0].tolist()]


@dataclass
class DataHandler:
    """Encapsulates the analytical views of a single dataset.

    Parameters
    ----------
    dataset : Dataset
        The dataset to analyse.  It is referenced, not copied.
    preview_rows : int, optional
        Number of records returned by ``preview``.
    """

    dataset: Dataset
    preview_rows: int = 10

    def infer_schema(self) -> Dict[str, str]:
        """Return the column classification of the dataset."""
        return classify_columns(self.dataset)

    def get_columns(self) -> List[str]:
        """Return the list of column names."""
        return self.dataset.columns

    def get_numeric_columns(self) -> List[str]:
        return numeric_columns(self.infer_schema())

    def get_summary(self) -> Dict[str, ColumnStats]:
        """Compute summary statistics for numeric columns."""
        return compute_stats(self.dataset, self.get_numeric_columns())

    def overview(self) -> Dict[str, object]:
        return dataset_overview(self.dataset)

    def insights(self) -> List[Dict[str, str]]:
        return generate_insights(self.dataset)

    def preview(self) -> List[dict]:
        return self.dataset.preview(self.preview_rows)

    def detect_anomalies(self, feature: str, z_thresh: float = 3.0) -> List[int]:
        return detect_anomalies(self.dataset, feature, z_thresh)
