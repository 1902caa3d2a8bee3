"""
Dataset store — loads the three mercuriales.

Each mercuriale is a JSON array of flat objects, read from `data_dir` or
fetched from `data_base_url`. The three reads run concurrently and are
joined: if any of them fails, nothing is exposed.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import requests
import structlog

from config import Settings, get_settings
from exceptions import DatasetLoadError
from models.mercuriale import Dataset, ProductRecord, SourceTag

logger = structlog.get_logger(__name__)


class MercurialeStore:
    """The three loaded mercuriales, keyed by source tag."""

    def __init__(self, datasets: dict[SourceTag, Dataset]):
        missing = [s.value for s in SourceTag if s not in datasets]
        if missing:
            raise ValueError(f"Missing datasets: {missing}")
        self._datasets = dict(datasets)

    def get(self, source: SourceTag) -> Dataset:
        """Dataset for a source tag."""
        return self._datasets[SourceTag(source)]

    def counts(self) -> dict[SourceTag, int]:
        """Record count per source, in load order."""
        return {source: len(self._datasets[source]) for source in SourceTag}

    @property
    def folkestone(self) -> Dataset:
        return self._datasets[SourceTag.FOLKESTONE]

    @property
    def vendome(self) -> Dataset:
        return self._datasets[SourceTag.VENDOME]

    @property
    def washington(self) -> Dataset:
        return self._datasets[SourceTag.WASHINGTON]


def parse_records(source: SourceTag, document: Any) -> tuple[ProductRecord, ...]:
    """
    Check a decoded JSON document is an array of objects.

    Field names and values are kept verbatim; no schema is enforced.

    Raises:
        DatasetLoadError: If the document is not an array of objects
    """
    if not isinstance(document, list):
        raise DatasetLoadError(
            source.value,
            f"expected a JSON array, got {type(document).__name__}"
        )

    for index, item in enumerate(document):
        if not isinstance(item, dict):
            raise DatasetLoadError(
                source.value,
                f"item {index} is {type(item).__name__}, expected an object"
            )

    return tuple(document)


class DatasetService:
    """
    Reads the mercuriale documents.

    Sources are local files unless `data_base_url` is configured, in which
    case they are fetched over HTTP.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    # ===================
    # LOCATIONS
    # ===================

    def file_name(self, source: SourceTag) -> str:
        return self.settings.source_files[SourceTag(source).value]

    def location(self, source: SourceTag) -> str:
        """Path or URL the source is read from."""
        name = self.file_name(source)
        if self.settings.data_base_url:
            return f"{self.settings.data_base_url.rstrip('/')}/{name}"
        return str(Path(self.settings.data_dir) / name)

    # ===================
    # READ OPERATIONS
    # ===================

    def fetch(self, source: SourceTag) -> Dataset:
        """
        Read and parse a single mercuriale.

        Args:
            source: Source tag to read

        Returns:
            Dataset

        Raises:
            DatasetLoadError: If the read or JSON parse fails
        """
        source = SourceTag(source)
        location = self.location(source)
        logger.debug("fetching_dataset", source=source.value, location=location)

        try:
            if self.settings.data_base_url:
                response = requests.get(location, timeout=self.settings.load_timeout_seconds)
                response.raise_for_status()
                document = response.json()
            else:
                document = json.loads(Path(location).read_text(encoding="utf-8-sig"))
        except (OSError, ValueError, requests.RequestException) as e:
            logger.error(
                "fetch_dataset_failed",
                source=source.value,
                location=location,
                error=str(e)
            )
            raise DatasetLoadError(source.value, str(e)) from e

        records = parse_records(source, document)
        logger.debug("dataset_fetched", source=source.value, count=len(records))
        return Dataset(source=source, records=records)

    async def load(self) -> MercurialeStore:
        """
        Load all three mercuriales concurrently.

        All-or-nothing: the first failure is raised and no dataset is kept.

        Returns:
            MercurialeStore

        Raises:
            DatasetLoadError: If any mercuriale fails to load
        """
        logger.info("loading_datasets", sources=[s.value for s in SourceTag])

        datasets = await asyncio.gather(
            *(asyncio.to_thread(self.fetch, source) for source in SourceTag)
        )
        store = MercurialeStore({dataset.source: dataset for dataset in datasets})

        logger.info(
            "datasets_loaded",
            **{source.value: count for source, count in store.counts().items()}
        )
        return store

