"""Runtime settings for the insight agent.

Every field defaults from an environment variable so the CLI and tests can
override timings without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Settings:
    """Tunable timings and presentation limits.

    Parameters
    ----------
    response_delay : float
        Seconds the chat agent waits before answering, modelling a backend
        round trip.  Read from ``INSIGHT_RESPONSE_DELAY``.
    scrape_delay : float
        Seconds the placeholder scrape waits before returning its canned
        dataset.  Read from ``INSIGHT_SCRAPE_DELAY``.
    preview_rows : int
        Number of records shown in a data preview.  Read from
        ``INSIGHT_PREVIEW_ROWS``.
    log_level : str
        Root logging level used by the CLI.  Read from ``INSIGHT_LOG_LEVEL``.
    """

    response_delay: float = field(default_factory=lambda: _env_float("INSIGHT_RESPONSE_DELAY", 2.0))
    scrape_delay: float = field(default_factory=lambda: _env_float("INSIGHT_SCRAPE_DELAY", 2.0))
    preview_rows: int = field(default_factory=lambda: _env_int("INSIGHT_PREVIEW_ROWS", 10))
    log_level: str = field(default_factory=lambda: os.getenv("INSIGHT_LOG_LEVEL", "WARNING"))

    def __post_init__(self) -> None:
        if self.response_delay < 0 or self.scrape_delay < 0:
            raise ValueError("Delays must be non-negative.")
        if self.preview_rows < 1:
            raise ValueError("preview_rows must be at least 1.")
        self.log_level = (self.log_level or "WARNING").upper()
