from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, overload

import pandas as pd

from college_browser.core.records import Record

# Flat column order used when a listing is exported as a table
EXPORT_COLUMNS = [
    "id",
    "name",
    "address",
    "course",
    "fees",
    "courseType",
    "feesDescription",
    "placement",
    "highestPackage",
    "reviewsScore",
    "reviewsCount",
    "rankingPosition",
    "rankingHighlight",
    "rankingYear",
]


class Dataset(Sequence[Record]):
    """
    Immutable, ordered collection of college records.

    Loaded once per session by a dataset provider and never mutated afterwards:
    every derived listing (filtered, sorted, revealed) is a new sequence built
    from these records.
    """

    def __init__(
        self,
        name: str,
        records: Iterable[Record],
        source_path: Optional[Path] = None,
    ) -> None:
        self.name = name
        self.source_path = source_path
        self._records = tuple(records)

    @classmethod
    def from_rows(cls, name: str, rows: Iterable[Dict[str, Any]], source_path: Optional[Path] = None) -> Dataset:
        return cls(
            name=name,
            records=[Record.from_raw(row, index=i) for i, row in enumerate(rows)],
            source_path=source_path,
        )

    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Record]: ...

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"Dataset(name={self.name!r}, n_records={len(self)})"

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @property
    def ids(self) -> List[Any]:
        return [r.id for r in self._records]

    # -------------------------------------------------------------------------
    # Tabular export
    # -------------------------------------------------------------------------
    @staticmethod
    def to_frame(records: Iterable[Record]) -> pd.DataFrame:
        """
        Flatten records (profile fields lifted to top level) into a DataFrame.

        Values are kept as they appear in the source, formatting included,
        so an export reads the same as the listing.
        """
        rows = []
        for r in records:
            row = {col: r.get(col) for col in EXPORT_COLUMNS}
            row["id"] = r.id
            row["name"] = r.name
            row["address"] = r.address
            row["course"] = r.course
            rows.append(row)
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)
