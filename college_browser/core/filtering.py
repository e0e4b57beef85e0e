from __future__ import annotations

from typing import Iterable, List

from college_browser.core.records import Record


def name_matches(record: Record, query: str) -> bool:
    name = record.name
    if name is None:
        return False
    return query.casefold() in name.casefold()


def filter_records(records: Iterable[Record], query: str) -> List[Record]:
    """
    Keep records whose college name contains `query`, case-insensitively.

    An empty query keeps everything in the original order. Records without a
    usable name never match a non-empty query.
    """
    if not query:
        return list(records)
    return [r for r in records if name_matches(r, query)]
