from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Union

from college_browser.core.records import FEES, RATING, REVIEWS_SCORE, Record

logger = logging.getLogger(__name__)

ASC = "asc"
DESC = "desc"

Number = Union[int, float]

# Leading-number grammar: whitespace, optional sign, digits; trailing residue ignored
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_grouped_int(value: Any) -> int:
    """
    Read a monetary/rating value such as "4,50,000".

    Missing or empty values count as "0"; thousands separators are stripped and
    the leading integer is taken. Anything unreadable is 0, including digit
    runs too long for int() to convert.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0

    text = str(value or "0").replace(",", "")
    match = _LEADING_INT.match(text)
    if match is None:
        logger.debug("Unparseable integer field value, using 0", extra={"value": repr(value)})
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        logger.debug("Integer field value too long to convert, using 0", extra={"n_chars": len(text)})
        return 0


def parse_decimal(value: Any) -> float:
    """
    Read a review score such as "8.4" directly (no separator stripping).
    Anything unreadable is 0. "Infinity", NaN and values that overflow a
    float also read as 0, so they sort with the other unreadable scores
    rather than above every real one.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            value = float(value)
        except OverflowError:
            return 0.0
        return value if value == value and abs(value) != float("inf") else 0.0

    match = _LEADING_FLOAT.match(str(value))
    if match is None:
        logger.debug("Unparseable decimal field value, using 0", extra={"value": repr(value)})
        return 0.0
    parsed = float(match.group(1))
    return parsed if abs(parsed) != float("inf") else 0.0


SORT_PARSERS: Dict[str, Callable[[Any], Number]] = {
    FEES: parse_grouped_int,
    RATING: parse_grouped_int,
    REVIEWS_SCORE: parse_decimal,
}

SORTABLE_FIELDS = tuple(SORT_PARSERS)


def sort_value(record: Record, field: str) -> Number:
    return SORT_PARSERS[field](record.get(field))


def sort_records(records: Iterable[Record], field: str, direction: str = ASC) -> List[Record]:
    """
    Return a new list ordered by the numeric reading of `field`.

    Only fees, rating and reviewsScore are sortable; an empty or unknown field
    returns the input order unchanged. Equal values keep their input order for
    both directions (sorted() stays stable with reverse=True).
    """
    ordered = list(records)
    if field not in SORT_PARSERS:
        return ordered

    parse = SORT_PARSERS[field]
    return sorted(
        ordered,
        key=lambda r: parse(r.get(field)),
        reverse=(direction == DESC),
    )
