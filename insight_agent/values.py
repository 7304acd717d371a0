"""Cell values and numeric coercion.

Cells arrive loosely typed: CSV cells are always strings, JSON cells may be
numbers, strings, ``null`` or nested values.  ``tag`` sorts a raw cell into
one of three kinds and ``to_number`` is the single coercion used by the
column classifier, the statistics aggregator and the chart projector.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

# plain decimal or exponent notation, or an infinity; ASCII only
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?inf(?:inity)?", re.ASCII | re.I)


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Missing:
    pass


CellValue = Union[Text, Number, Missing]

MISSING = Missing()


def tag(raw: Any) -> CellValue:
    """Classify a raw cell as ``Text``, ``Number`` or ``Missing``.

    Booleans and nested JSON values are treated as text, using their
    ``str`` form.
    """
    if raw is None:
        return MISSING
    if isinstance(raw, bool):
        return Text(str(raw).lower())
    if isinstance(raw, (int, float)):
        try:
            return Number(float(raw))
        except OverflowError:
            # integers wider than a double
            return Number(math.inf if raw > 0 else -math.inf)
    if isinstance(raw, str):
        return Text(raw)
    return Text(str(raw))


def to_number(raw: Any) -> Optional[float]:
    """Coerce a raw cell to ``float``, returning ``None`` on failure.

    Strings are stripped before parsing; empty strings, non-numeric text,
    booleans, missing cells and NaN all count as failures.  Infinities
    parse successfully; callers that need finite values check for them.
    """
    cell = tag(raw)
    if isinstance(cell, Number):
        value = cell.value
    elif isinstance(cell, Text):
        text = cell.value.strip()
        if not text or isinstance(raw, bool) or not _NUMBER_RE.fullmatch(text):
            return None
        value = float(text)
    else:
        return None
    if math.isnan(value):
        return None
    return value


def is_finite_number(raw: Any) -> bool:
    value = to_number(raw)
    return value is not None and math.isfinite(value)
