"""Tabular parser: raw uploaded text to ``Dataset``.

CSV parsing is deliberately naive: lines are split on ``,`` with no quoting
or escaping support, so a quoted field containing a comma is split in two.
JSON parsing keeps the decoded structure as-is.  Excel and HTML files pass
the type check but are not parsed; they produce an empty dataset.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

from .dataset import Dataset, create_dataset
from .exceptions import InvalidFileType, InvalidJson, ReadFailure

log = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = (".csv", ".json", ".xlsx", ".xls", ".html")

# substrings matched against the declared content type
ACCEPTED_CONTENT_TYPES = (
    "csv",
    "json",
    "vnd.ms-excel",
    "vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "html",
)


def check_file_type(filename: str, content_type: Optional[str] = "") -> None:
    """Raise ``InvalidFileType`` unless the name or content type is accepted."""
    name = (filename or "").lower()
    ctype = (content_type or "").lower()
    if name.endswith(ACCEPTED_EXTENSIONS):
        return
    if ctype and any(t in ctype for t in ACCEPTED_CONTENT_TYPES):
        return
    raise InvalidFileType(f"Unsupported file type: {filename or content_type or 'unknown'}")


def source_kind_for(filename: str, content_type: Optional[str] = "") -> str:
    """Choose the parse mode, preferring the extension over the content type."""
    name = (filename or "").lower()
    ctype = (content_type or "").lower()
    if name.endswith(".csv"):
        return "csv"
    if name.endswith(".json"):
        return "json"
    if name.endswith((".xlsx", ".xls", ".html")):
        return "unknown"
    if "csv" in ctype:
        return "csv"
    if "json" in ctype:
        return "json"
    return "unknown"


def parse_csv(raw_text: str) -> List[Dict[str, str]]:
    lines = [ln.strip() for ln in raw_text.splitlines() if ln.strip()]
    if not lines:
        return []
    headers = [h.strip() for h in lines[0].split(",")]
    rows = []
    for ln in lines[1:]:
        values = [v.strip() for v in ln.split(",")]
        rows.append({h: (values[i] if i < len(values) else "") for i, h in enumerate(headers)})
    return rows


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(raw_text: str) -> List[Any]:
    try:
        parsed = json.loads(raw_text, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidJson(f"Invalid JSON format: {e}")
    except RecursionError:
        raise InvalidJson("Invalid JSON format: nesting too deep")
    if isinstance(parsed, list):
        return parsed
    return [parsed]


def parse(
    raw_text: str,
    source_hint: str,
    name: str = "",
    size_bytes: Optional[int] = None,
) -> Dataset:
    """Parse ``raw_text`` according to ``source_hint`` (``"csv"`` or ``"json"``).

    Any other hint produces an empty dataset tagged ``unknown``.

    Raises
    ------
    InvalidJson
        When ``source_hint`` is ``"json"`` and the text is not valid JSON.
    """
    if source_hint == "csv":
        rows: List[Any] = parse_csv(raw_text)
    elif source_hint == "json":
        rows = parse_json(raw_text)
    else:
        rows = []
        source_hint = "unknown"
    return create_dataset(name, rows, source_hint, size_bytes=size_bytes)


def _decode(content: Union[str, bytes, None]) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, (bytes, bytearray)):
        try:
            return bytes(content).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ReadFailure(f"Failed to read file as text: {e}")
    raise ReadFailure("Failed to read file as text")


def parse_upload(
    filename: str,
    content: Union[str, bytes, None],
    content_type: Optional[str] = "",
    size_bytes: Optional[int] = None,
) -> Dataset:
    """Type-check, read and parse a complete uploaded file.

    Raises
    ------
    InvalidFileType
        Before reading, when the file is not an accepted type.
    ReadFailure
        When the content is not text.
    InvalidJson
        When a JSON upload is malformed.
    """
    check_file_type(filename, content_type)
    kind = source_kind_for(filename, content_type)
    if size_bytes is None and isinstance(content, (str, bytes, bytearray)):
        size_bytes = len(content.encode("utf-8")) if isinstance(content, str) else len(content)
    if kind == "unknown":
        log.info("Accepted %s without parsing; no reader for this format", filename)
        return create_dataset(filename, [], "unknown", size_bytes=size_bytes)
    text = _decode(content)
    dataset = parse(text, kind, name=filename, size_bytes=size_bytes)
    log.info("Parsed %s as %s: %d rows", filename, kind, dataset.row_count)
    return dataset
