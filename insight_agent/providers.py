"""Dataset providers: sources that produce a dataset from a URL.

Only a placeholder provider exists.  It validates the URL, waits for the
configured delay and returns a fixed product table; it never contacts the
network.  A real extractor would subclass ``DatasetProvider`` and be
passed to ``AppState`` in its place.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List
from urllib.parse import urlparse

from .dataset import Dataset, create_dataset
from .exceptions import EmptyInput, IngestionError

log = logging.getLogger(__name__)

PLACEHOLDER_ROWS: List[Dict[str, Any]] = [
    {"Product": "Widget A", "Sales": 1500, "Region": "North"},
    {"Product": "Widget B", "Sales": 2300, "Region": "South"},
    {"Product": "Widget C", "Sales": 1800, "Region": "East"},
    {"Product": "Widget D", "Sales": 2100, "Region": "West"},
]


def hostname_of(url: str) -> str:
    """Return the hostname of ``url``.

    Raises
    ------
    EmptyInput
        If ``url`` is blank.
    IngestionError
        If ``url`` cannot be parsed or has no hostname.
    """
    if not url or not url.strip():
        raise EmptyInput("Please enter a valid URL to scrape data from.")
    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname
    except ValueError as e:
        raise IngestionError(f"Invalid URL: {e}")
    if not parsed.scheme or not host:
        raise IngestionError(f"Invalid URL: {url}")
    return host


class DatasetProvider:
    """Interface for URL-based dataset sources."""

    async def fetch(self, url: str) -> Dataset:
        raise NotImplementedError()


class PlaceholderScrapeProvider(DatasetProvider):
    """Returns a canned dataset after ``delay`` seconds.

    The URL is validated before the delay starts.  Once started the delay
    always runs to completion and the result always succeeds.
    """

    def __init__(self, delay: float = 2.0) -> None:
        self.delay = delay

    async def fetch(self, url: str) -> Dataset:
        host = hostname_of(url)
        await asyncio.sleep(self.delay)
        log.info("Returning placeholder data for %s", host)
        return create_dataset(
            f"Scraped Data - {host}",
            [dict(r) for r in PLACEHOLDER_ROWS],
            "scraped",
            url=url.strip(),
        )
