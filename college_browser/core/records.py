from __future__ import annotations

import copy
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

# Raw keys of the sort-eligible, numeric-bearing fields
FEES = "fees"
RATING = "rating"
REVIEWS_SCORE = "reviewsScore"


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Record:
    """
    One college listing entry.

    Wraps the raw row exactly as the dataset provider supplied it, so that
    formatting artifacts in numeric-bearing fields ("4,50,000", "", missing)
    survive until the sort stage decides how to read them.

    Fields:

    - raw: read-only view of the source row
    - index: position of the row in the source sequence (fallback identity)
    """
    raw: Mapping[str, Any]
    index: int

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], index: int) -> Record:
        return cls(raw=MappingProxyType(copy.deepcopy(dict(raw))), index=index)

    @property
    def id(self) -> Any:
        return self.raw.get("id", self.index)

    @property
    def profile(self) -> Mapping[str, Any]:
        college = self.raw.get("college")
        return college if isinstance(college, Mapping) else {}

    @property
    def name(self) -> Optional[str]:
        return _text(self.profile.get("name"))

    @property
    def address(self) -> Optional[str]:
        return _text(self.profile.get("address"))

    @property
    def logo(self) -> Optional[str]:
        return _text(self.profile.get("logo"))

    @property
    def course(self) -> Optional[str]:
        return _text(self.profile.get("course"))

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(dict(self.raw))
