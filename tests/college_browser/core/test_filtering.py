from __future__ import annotations

from college_browser.core.dataset import Dataset
from college_browser.core.filtering import filter_records


def _make_dataset() -> Dataset:
    rows = [
        {"id": 1, "college": {"name": "IIT Madras"}},
        {"id": 2, "college": {"name": "IIT Delhi"}},
        {"id": 3, "college": {"name": "Anna University"}},
        {"id": 4, "college": {"name": "NIT Trichy"}},
        {"id": 5, "college": {}},                   # missing name
        {"id": 6},                                  # missing profile
        {"id": 7, "college": {"name": 1234}},       # non-string name
        {"id": 8, "college": "not a mapping"},
        {"id": 9, "college": {"name": "iit hyderabad"}},
    ]
    return Dataset.from_rows("test", rows)


def test_empty_query_returns_everything_in_original_order():
    ds = _make_dataset()
    out = filter_records(ds, "")
    assert [r.id for r in out] == ds.ids


def test_query_is_case_insensitive_substring():
    ds = _make_dataset()
    out = filter_records(ds, "iIt")
    assert [r.id for r in out] == [1, 2, 9]


def test_every_kept_record_matches_and_every_dropped_record_does_not():
    ds = _make_dataset()
    query = "an"
    kept = filter_records(ds, query)
    kept_ids = {r.id for r in kept}

    for r in ds:
        name = r.name
        matches = name is not None and query.lower() in name.lower()
        assert (r.id in kept_ids) == matches


def test_malformed_names_never_match_and_never_raise():
    ds = _make_dataset()
    out = filter_records(ds, "1234")
    assert out == []


def test_filtering_is_idempotent():
    ds = _make_dataset()
    once = filter_records(ds, "it")
    twice = filter_records(once, "it")
    assert once == twice


def test_filter_does_not_mutate_dataset():
    ds = _make_dataset()
    before = list(ds)
    filter_records(ds, "delhi")
    assert list(ds) == before


def test_empty_dataset():
    assert filter_records(Dataset("empty", ()), "anything") == []
