from __future__ import annotations

import pytest

from college_browser.core.dataset import Dataset
from college_browser.core.sorting import (
    ASC,
    DESC,
    parse_decimal,
    parse_grouped_int,
    sort_records,
)
from college_browser.core.view_state import SortConfig, recompute


def _make_dataset(field: str, values) -> Dataset:
    rows = [
        {"id": i, "college": {"name": f"College {i}"}, field: v}
        for i, v in enumerate(values)
    ]
    return Dataset.from_rows("test", rows)


def _ids(records):
    return [r.id for r in records]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("4,50,000", 450000),
        ("1,000", 1000),
        ("12", 12),
        ("  7", 7),
        ("12abc", 12),
        ("", 0),
        (None, 0),
        ("abc", 0),
        ("n/a", 0),
        (1500, 1500),
        (0, 0),
        (3.9, 3),
        ("-5", -5),
        ("9" * 5000, 0),
        ("1," + "9" * 5000, 0),
    ],
)
def test_parse_grouped_int(raw, expected):
    assert parse_grouped_int(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("8.4", 8.4),
        ("9", 9.0),
        (".5", 0.5),
        ("8.4/10", 8.4),
        ("1,234.5", 1.0),  # no separator stripping for review scores
        ("", 0.0),
        (None, 0.0),
        ("great", 0.0),
        (7.25, 7.25),
        ("Infinity", 0.0),
        ("1e400", 0.0),
        (10 ** 400, 0.0),
    ],
)
def test_parse_decimal(raw, expected):
    assert parse_decimal(raw) == pytest.approx(expected)


def test_rating_descending_with_empty_value_lands_low():
    ds = _make_dataset("rating", ["3", "1", "", "5", "2"])
    out = sort_records(ds, "rating", DESC)
    assert _ids(out) == [3, 0, 4, 1, 2]


def test_fees_ascending_strips_thousands_separators():
    ds = _make_dataset("fees", ["2,09,550", "50,000", "1,45,000", "9,999"])
    out = sort_records(ds, "fees", ASC)
    assert _ids(out) == [3, 1, 2, 0]


def test_missing_field_treated_as_zero():
    rows = [
        {"id": "a", "fees": "100"},
        {"id": "b"},
        {"id": "c", "fees": "50"},
    ]
    ds = Dataset.from_rows("test", rows)
    assert _ids(sort_records(ds, "fees", ASC)) == ["b", "c", "a"]


def test_reviews_score_sorts_as_decimal():
    ds = _make_dataset("reviewsScore", ["8.6", "8.10", "9", "bad"])
    out = sort_records(ds, "reviewsScore", DESC)
    assert _ids(out) == [2, 0, 1, 3]


@pytest.mark.parametrize("direction", [ASC, DESC])
def test_ties_keep_input_order(direction):
    ds = _make_dataset("rating", ["2", "1", "2", "", "1", "x", "2"])
    out = sort_records(ds, "rating", direction)

    by_value = {}
    for r in out:
        by_value.setdefault(parse_grouped_int(r.get("rating")), []).append(r.id)
    for ids in by_value.values():
        assert ids == sorted(ids)


def test_desc_is_exact_reverse_of_asc_without_ties():
    ds = _make_dataset("fees", ["300", "1,000", "20", "4,000", "5"])
    asc = sort_records(ds, "fees", ASC)
    desc = sort_records(asc, "fees", DESC)
    assert desc == list(reversed(asc))


@pytest.mark.parametrize("field", ["", "unknownField", "placement", "college"])
def test_unknown_or_empty_field_is_identity(field):
    ds = _make_dataset("rating", ["3", "1", "2"])
    out = sort_records(ds, field, DESC)
    assert out == list(ds)


def test_sort_returns_new_list_and_leaves_input_alone():
    records = list(_make_dataset("rating", ["3", "1", "2"]))
    before = list(records)
    out = sort_records(records, "rating", ASC)
    assert out is not records
    assert records == before


def test_empty_input():
    assert sort_records([], "fees", ASC) == []


def test_oversized_fee_sorts_as_zero_without_raising():
    ds = Dataset.from_rows(
        "test",
        [
            {"id": 1, "fees": "9" * 5000},
            {"id": 2, "fees": "1,000"},
            {"id": 3, "fees": "50"},
        ],
    )
    assert _ids(sort_records(ds, "fees", ASC)) == [1, 3, 2]

    view = recompute(ds, "", SortConfig("fees", "desc"), 10)
    assert _ids(view.visible) == [2, 3, 1]
