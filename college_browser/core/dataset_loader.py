from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

from college_browser.config.model import GlobalConfig
from college_browser.core.dataset import Dataset
from college_browser.core.exceptions import DatasetSchemaError
from college_browser.core.records import Record

logger = logging.getLogger(__name__)


class DatasetProvider(ABC):
    """
    Abstract source of college records (JSON file, in-memory rows, ...).

    load_all() is called once per engine; the returned order is the
    "original order" every derived listing falls back to.
    """

    @abstractmethod
    def load_all(self) -> Sequence[Record]:
        pass


def _validate_rows(rows: Any, source: str) -> List[Dict[str, Any]]:
    if not isinstance(rows, list):
        msg = f"Dataset '{source}' must be a JSON array of objects, got {type(rows).__name__}"
        logger.error(msg, extra={"source": source})
        raise DatasetSchemaError(msg)

    seen = set()
    duplicates = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            msg = f"Dataset '{source}': row {i} is {type(row).__name__}, expected an object"
            logger.error(msg, extra={"source": source, "row": i})
            raise DatasetSchemaError(msg)
        if "id" not in row:
            continue
        try:
            key = row["id"]
            hash(key)
        except TypeError:
            raise DatasetSchemaError(f"Dataset '{source}': row {i} has an unhashable id {row['id']!r}")
        if key in seen:
            duplicates.append(key)
        seen.add(key)

    if duplicates:
        raise DatasetSchemaError(f"Duplicate record ids in dataset '{source}': {duplicates}")
    return rows


class InMemoryDatasetProvider(DatasetProvider):
    def __init__(self, rows: Iterable[Dict[str, Any]], name: str = "in-memory"):
        self.name = name
        self._rows = _validate_rows(list(rows), name)

    def load_all(self) -> Sequence[Record]:
        return Dataset.from_rows(self.name, self._rows)


class JsonDatasetProvider(DatasetProvider):
    """
    Reads a JSON array of college rows from disk.

    A missing file is not an error: absence of data yields an empty dataset.
    """

    def __init__(self, path: Path | str, name: str | None = None):
        self.path = Path(path)
        self.name = name or self.path.stem

    def load_all(self) -> Sequence[Record]:
        if not self.path.is_file():
            logger.warning(
                "Dataset file not found; starting with an empty dataset",
                extra={"path": str(self.path)},
            )
            return Dataset(name=self.name, records=(), source_path=self.path)

        try:
            with self.path.open(encoding="utf-8") as f:
                rows = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetSchemaError(f"Invalid JSON in dataset file {self.path}: {e}") from e

        rows = _validate_rows(rows, str(self.path))
        dataset = Dataset.from_rows(self.name, rows, source_path=self.path)
        logger.info(
            "Dataset loaded",
            extra={"dataset": self.name, "path": str(self.path), "n_records": len(dataset)},
        )
        return dataset


def provider_from_config(cfg: GlobalConfig) -> DatasetProvider:
    if cfg.data_file is None:
        logger.warning("No data_file configured; using an empty dataset")
        return InMemoryDatasetProvider([], name="empty")
    return JsonDatasetProvider(cfg.data_file)


def from_config(cfg: GlobalConfig) -> Dataset:
    """
    Materialise the configured Dataset once.
    """
    records = provider_from_config(cfg).load_all()
    if isinstance(records, Dataset):
        return records
    return Dataset(name="dataset", records=records, source_path=cfg.data_file)
