from __future__ import annotations

from typing import Iterable, List

from dash import html

from college_browser.core.records import FEES, RATING, REVIEWS_SCORE, Record
from college_browser.core.view_state import SortConfig, ViewState

# (sort key, button caption) in display order
SORT_BUTTONS = [
    (FEES, "Sort by Fees"),
    (RATING, "Sort by Rating"),
    (REVIEWS_SCORE, "Sort by User Review Rating"),
]

TABLE_COLUMNS = ["CD Rank", "Colleges", "Course Fees", "Placement", "User Reviews", "Ranking"]


def sort_button_label(caption: str, key: str, sort: SortConfig) -> str:
    return f"{caption} ({sort.direction_for(key)})"


def sort_button_labels(sort: SortConfig) -> List[str]:
    return [sort_button_label(caption, key, sort) for key, caption in SORT_BUTTONS]


def result_summary(view: ViewState) -> str:
    if view.total == 0:
        return "No colleges match your search."
    return f"Showing {len(view.visible)} of {view.total} colleges"


def _or_blank(value) -> str:
    return "" if value is None else str(value)


def _college_cell(record: Record) -> html.Td:
    return html.Td(
        [
            html.Div(
                [
                    html.Img(
                        src=record.logo or "",
                        alt=record.name or "",
                        className="cb-college-logo",
                    ),
                    html.Div(
                        [
                            html.Strong(record.name or "(unnamed college)"),
                            html.Br(),
                            html.Span(record.address or ""),
                        ]
                    ),
                ],
                className="d-flex align-items-center mb-2",
            ),
            html.Div(record.course or "", className="cb-course text-truncate"),
        ]
    )


def _fees_cell(record: Record) -> html.Td:
    return html.Td(
        [
            html.Div(f"₹ {_or_blank(record.get('fees'))}", className="text-success"),
            html.Div(_or_blank(record.get("courseType"))),
            html.Div(f"- {_or_blank(record.get('feesDescription'))}"),
        ]
    )


def _placement_cell(record: Record) -> html.Td:
    return html.Td(
        [
            html.Div(f"₹ {_or_blank(record.get('placement'))}", className="text-success"),
            html.Div("Average Package"),
            html.Div(f"₹ {_or_blank(record.get('highestPackage'))}", className="text-success"),
            html.Div("Highest Package"),
        ]
    )


def _reviews_cell(record: Record) -> html.Td:
    return html.Td(
        [
            html.Div(_or_blank(record.get("reviewsScore"))),
            html.Div(f"Based on {_or_blank(record.get('reviewsCount'))} User Reviews"),
        ]
    )


def _ranking_cell(record: Record) -> html.Td:
    return html.Td(
        [
            html.Div(
                [
                    _or_blank(record.get("rankingPosition")),
                    html.Span(_or_blank(record.get("rankingHighlight")), className="text-warning"),
                    " in India",
                ]
            ),
            html.Div(_or_blank(record.get("rankingYear"))),
        ]
    )


def build_table_row(record: Record) -> html.Tr:
    return html.Tr(
        [
            html.Td(_or_blank(record.id)),
            _college_cell(record),
            _fees_cell(record),
            _placement_cell(record),
            _reviews_cell(record),
            _ranking_cell(record),
        ],
        key=str(record.id),
    )


def build_table_rows(records: Iterable[Record]) -> List[html.Tr]:
    return [build_table_row(r) for r in records]
