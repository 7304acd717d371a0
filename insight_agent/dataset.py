"""Normalized in-memory dataset.

A ``Dataset`` is created once, from a single input, and never mutated in
place.  Re-uploading the same file yields a new ``Dataset`` with a new
identity but equal ``name``, ``rows`` and ``source_kind``.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

SOURCE_KINDS = ("csv", "json", "scraped", "unknown")

Record = Dict[str, Any]


def _now_id() -> str:
    return time.strftime("%Y%m%d_%H%M%S") + "_" + uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class Dataset:
    """An ordered sequence of records plus provenance metadata.

    Parameters
    ----------
    name : str
        Display name, usually the uploaded file name.
    rows : tuple of dict
        Records mapping column name to raw cell value.  JSON uploads whose
        top-level value is not a list or object produce a single
        non-mapping row, which is treated as having no columns.
    source_kind : str
        Provenance tag: ``"csv"``, ``"json"``, ``"scraped"`` or ``"unknown"``.
    size_bytes : int, optional
        Size of the uploaded file, provenance only.
    url : str, optional
        Source URL for scraped datasets.
    """

    name: str
    rows: Tuple[Any, ...]
    source_kind: str = "unknown"
    size_bytes: Optional[int] = None
    url: Optional[str] = None
    id: str = field(default_factory=_now_id, compare=False)
    uploaded_at: datetime = field(default_factory=datetime.now, compare=False)

    def __hash__(self) -> int:
        # records are dicts, so hash only the hashable compared fields
        return hash((self.name, self.source_kind, len(self.rows), self.size_bytes, self.url))

    @property
    def columns(self) -> List[str]:
        """Column names taken from the first record, in order."""
        if not self.rows or not isinstance(self.rows[0], dict):
            return []
        return list(self.rows[0].keys())

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def cell(self, row: Any, column: str) -> Any:
        """Return ``row[column]``, treating absent keys and non-mapping rows as missing."""
        if not isinstance(row, dict):
            return None
        return row.get(column)

    def preview(self, n: int = 10) -> List[Record]:
        return [dict(r) if isinstance(r, dict) else r for r in self.rows[:n]]

    def to_frame(self) -> pd.DataFrame:
        """Return the records as a DataFrame restricted to the dataset's columns."""
        cols = self.columns
        records = [{c: self.cell(r, c) for c in cols} for r in self.rows]
        return pd.DataFrame.from_records(records, columns=cols)

    def to_handoff(self) -> Dict[str, Any]:
        """Return the ``{name, data, type, size?, url?}`` handoff mapping."""
        out: Dict[str, Any] = {
            "name": self.name,
            "data": self.preview(len(self.rows)),
            "type": self.source_kind,
        }
        if self.size_bytes is not None:
            out["size"] = self.size_bytes
        if self.url is not None:
            out["url"] = self.url
        return out


def create_dataset(
    name: str,
    rows: Iterable[Any],
    source_kind: str = "unknown",
    size_bytes: Optional[int] = None,
    url: Optional[str] = None,
) -> Dataset:
    """Build a ``Dataset`` with a fresh identity.

    Raises
    ------
    ValueError
        If ``source_kind`` is not one of ``SOURCE_KINDS``.
    """
    if source_kind not in SOURCE_KINDS:
        raise ValueError(f"Unknown source kind: {source_kind}")
    return Dataset(
        name=name,
        rows=tuple(rows),
        source_kind=source_kind,
        size_bytes=size_bytes,
        url=url,
    )
