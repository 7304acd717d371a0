"""Application state and the ingestion boundary.

``AppState`` owns the dataset collection, the active dataset and the active
view.  Its upload and scrape methods are the only place ingestion errors are
caught: each failure becomes a ``Notification`` and the previous state is
left untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .config import Settings
from .dataset import Dataset
from .exceptions import IngestionError
from .parser import parse_upload
from .providers import DatasetProvider, PlaceholderScrapeProvider

log = logging.getLogger(__name__)

VIEWS = ("upload", "workspace", "query", "models", "reports", "settings")


@dataclass(frozen=True)
class Notification:
    kind: str
    title: str
    description: str
    error: bool = False


def _failure(exc: IngestionError) -> Notification:
    if exc.code == "unsupported-type":
        return Notification("invalid-file-type", "Invalid file type",
                            "Please upload a CSV, Excel, JSON, or HTML file.", error=True)
    if exc.code == "invalid-json":
        return Notification("invalid-json", "Upload failed", "Invalid JSON format", error=True)
    if exc.code == "url-required":
        return Notification("url-required", "URL required",
                            "Please enter a valid URL to scrape data from.", error=True)
    return Notification("upload-failed", "Upload failed",
                        str(exc) or "Failed to process the file.", error=True)


@dataclass
class AppState:
    """Process-wide state shared by the views.

    Parameters
    ----------
    settings : Settings, optional
        Timing configuration; defaults are read from the environment.
    provider : DatasetProvider, optional
        Source used by ``scrape_url``.  Defaults to the placeholder scraper
        using ``settings.scrape_delay``.
    """

    settings: Settings = field(default_factory=Settings)
    provider: Optional[DatasetProvider] = None
    datasets: List[Dataset] = field(default_factory=list)
    active_dataset: Optional[Dataset] = None
    active_view: str = "upload"
    notifications: List[Notification] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.provider is None:
            self.provider = PlaceholderScrapeProvider(delay=self.settings.scrape_delay)

    def upload_dataset(self, dataset: Dataset) -> Dataset:
        """Add ``dataset`` to the collection, make it active and open the workspace."""
        self.datasets.append(dataset)
        self.active_dataset = dataset
        self.active_view = "workspace"
        return dataset

    def select_dataset(self, dataset_id: str) -> Dataset:
        """Make the dataset with ``dataset_id`` active and open the workspace.

        Raises
        ------
        KeyError
            If no dataset in the collection has that id.
        """
        for ds in self.datasets:
            if ds.id == dataset_id:
                self.active_dataset = ds
                self.active_view = "workspace"
                return ds
        raise KeyError(f"Dataset '{dataset_id}' not found")

    def set_view(self, view: str) -> None:
        if view not in VIEWS:
            raise ValueError(f"Unknown view: {view}")
        self.active_view = view

    def _notify(self, note: Notification) -> Notification:
        self.notifications.append(note)
        return note

    def upload_file(
        self,
        filename: str,
        content: Union[str, bytes, None],
        content_type: str = "",
        size_bytes: Optional[int] = None,
    ) -> Tuple[Optional[Dataset], Notification]:
        """Parse an uploaded file and, on success, make it the active dataset."""
        try:
            dataset = parse_upload(filename, content, content_type, size_bytes)
        except IngestionError as e:
            log.warning("Upload of %s failed: %s", filename, e)
            return None, self._notify(_failure(e))
        self.upload_dataset(dataset)
        note = Notification("upload-succeeded", "Dataset uploaded successfully!",
                            f"{filename} has been processed and is ready for analysis.")
        return dataset, self._notify(note)

    async def scrape_url(self, url: str) -> Tuple[Optional[Dataset], Notification]:
        """Run the configured provider for ``url`` and make the result active."""
        try:
            dataset = await self.provider.fetch(url)
        except IngestionError as e:
            log.warning("Scrape of %r failed: %s", url, e)
            return None, self._notify(_failure(e))
        self.upload_dataset(dataset)
        note = Notification("scrape-succeeded", "Data scraped successfully!",
                            "Web data has been extracted and is ready for analysis.")
        return dataset, self._notify(note)
