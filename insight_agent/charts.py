"""Chart-ready projections of a dataset.

A projection is a small, bounded view of the first rows of a dataset that a
chart widget can render directly.  Nothing here draws; renderers receive a
``ChartData`` descriptor or the ``NO_DATA`` sentinel and show an empty state
for the latter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .data_handler import categorical_columns, classify_columns, numeric_columns
from .dataset import Dataset
from .values import to_number

CHART_KINDS = ("bar", "line", "pie", "scatter")

COLORS = ("#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6", "#06B6D4")

MAX_CHART_ROWS = 10
MAX_PIE_SLICES = 6
MAX_SERIES = 3
INDEX_KEY = "index"


class NoData:
    """Sentinel returned when a dataset has no rows to chart."""

    _instance: Optional["NoData"] = None

    def __new__(cls) -> "NoData":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DATA"


NO_DATA = NoData()


@dataclass(frozen=True)
class Series:
    key: str
    color: str


@dataclass
class ChartData:
    """Descriptor for one chart.

    ``rows`` always holds the capped source rows with ``index`` injected.
    Bar and line charts use ``x_key`` and ``series``; scatter charts use
    ``x_key``, ``y_key`` and ``points``; pie charts use ``slices``.
    """

    kind: str
    rows: List[Dict[str, Any]]
    x_key: Optional[str] = None
    y_key: Optional[str] = None
    series: List[Series] = field(default_factory=list)
    slices: List[Dict[str, Any]] = field(default_factory=list)
    points: List[Dict[str, Optional[float]]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "rows": self.rows,
            "x_key": self.x_key,
            "y_key": self.y_key,
            "series": [{"key": s.key, "color": s.color} for s in self.series],
            "slices": self.slices,
            "points": self.points,
        }


def color_for(position: int) -> str:
    return COLORS[position % len(COLORS)]


def capped_rows(dataset: Dataset, limit: int = MAX_CHART_ROWS) -> List[Dict[str, Any]]:
    """Copy the first ``limit`` records, adding a 1-based ``index`` field."""
    out = []
    for i, row in enumerate(dataset.rows[:limit]):
        record = dict(row) if isinstance(row, dict) else {}
        record[INDEX_KEY] = i + 1
        out.append(record)
    return out


def _label(value: Any, position: int) -> str:
    if value is None or value == "":
        return f"Item {position + 1}"
    return str(value)


def project(dataset: Dataset, kind: str) -> Union[ChartData, NoData]:
    """Derive the projection for chart ``kind``.

    Raises
    ------
    ValueError
        If ``kind`` is not one of ``CHART_KINDS``.
    """
    if kind not in CHART_KINDS:
        raise ValueError(f"Unknown chart kind: {kind}")
    rows = capped_rows(dataset)
    if not rows:
        return NO_DATA

    classification = classify_columns(dataset)
    numeric = numeric_columns(classification)
    categorical = categorical_columns(classification)
    x_key = categorical[0] if categorical else INDEX_KEY

    if kind in ("bar", "line"):
        series = [Series(col, color_for(i)) for i, col in enumerate(numeric[:MAX_SERIES])]
        return ChartData(kind=kind, rows=rows, x_key=x_key, series=series)

    if kind == "pie":
        value_key = numeric[0] if numeric else None
        slices = []
        for i, row in enumerate(rows[:MAX_PIE_SLICES]):
            value = to_number(row.get(value_key)) if value_key else None
            slices.append({
                "name": _label(row.get(x_key), i),
                "value": value if value is not None else 0,
                "color": color_for(i),
            })
        return ChartData(kind=kind, rows=rows[:MAX_PIE_SLICES], x_key=x_key, y_key=value_key, slices=slices)

    # scatter
    sx = numeric[0] if numeric else None
    sy = numeric[1] if len(numeric) > 1 else sx
    points = [
        {
            "x": to_number(row.get(sx)) if sx else None,
            "y": to_number(row.get(sy)) if sy else None,
        }
        for row in rows
    ]
    return ChartData(kind=kind, rows=rows, x_key=sx, y_key=sy, series=[Series(sy, COLORS[0])] if sy else [], points=points)
