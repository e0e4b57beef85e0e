from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Sequence, Tuple

from college_browser.core.filtering import filter_records
from college_browser.core.records import Record
from college_browser.core.sorting import ASC, DESC, SORTABLE_FIELDS, sort_records


@dataclass(frozen=True)
class SortConfig:
    """
    Active sort selection.

    - key: raw field name ("fees", "rating", "reviewsScore"); "" means no sort
    - direction: "asc" or "desc"
    """
    key: str = ""
    direction: str = ASC

    def toggled(self, key: str) -> SortConfig:
        """Same key flips asc <-> desc; a new key starts ascending."""
        if key == self.key and self.direction == ASC:
            return SortConfig(key=key, direction=DESC)
        return SortConfig(key=key, direction=ASC)

    def direction_for(self, key: str) -> str:
        return self.direction if key == self.key else ASC

    @property
    def is_active(self) -> bool:
        return self.key in SORTABLE_FIELDS

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "direction": self.direction}

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> SortConfig:
        data = data or {}
        direction = data.get("direction", ASC)
        return cls(
            key=str(data.get("key") or ""),
            direction=direction if direction in (ASC, DESC) else ASC,
        )


@dataclass(frozen=True)
class ViewState:
    """
    Everything the presentation layer reads, derived in one step from
    (records, query, sort, reveal_window).
    """
    filtered: Tuple[Record, ...]
    sorted: Tuple[Record, ...]
    visible: Tuple[Record, ...]
    reveal_window: int

    @property
    def total(self) -> int:
        return len(self.sorted)

    @property
    def has_more(self) -> bool:
        return len(self.visible) < len(self.sorted)


def visible_prefix(records: Sequence[Record], reveal_window: int) -> Tuple[Record, ...]:
    """Leading `reveal_window` records, clamped to [0, len(records)]."""
    count = min(max(int(reveal_window), 0), len(records))
    return tuple(records[:count])


def recompute(
    records: Iterable[Record],
    query: str,
    sort: SortConfig,
    reveal_window: int,
) -> ViewState:
    """
    Pure derivation: dataset -> filter -> sort -> visible prefix.
    """
    filtered = tuple(filter_records(records, query or ""))
    ordered = tuple(sort_records(filtered, sort.key, sort.direction))
    return ViewState(
        filtered=filtered,
        sorted=ordered,
        visible=visible_prefix(ordered, reveal_window),
        reveal_window=reveal_window,
    )
