from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from college_browser.core.view_state import SortConfig
from college_browser.ui.helpers import SORT_BUTTONS, sort_button_label
from college_browser.ui.ids import IDs, sort_button_id


def build_controls_panel(sort: SortConfig) -> dbc.Card:
    """
    Search box + one toggle button per sortable field.
    """
    sort_buttons = [
        dbc.Button(
            sort_button_label(caption, key, sort),
            id=sort_button_id(key),
            color="secondary",
            outline=True,
            size="sm",
            className="me-2",
            n_clicks=0,
        )
        for key, caption in SORT_BUTTONS
    ]

    return dbc.Card(
        dbc.CardBody(
            [
                dcc.Input(
                    id=IDs.Control.SEARCH_INPUT,
                    type="text",
                    placeholder="Search by College Name",
                    value="",
                    debounce=False,
                    className="form-control mb-3",
                ),
                html.Div(sort_buttons, className="d-flex flex-wrap"),
            ]
        ),
        className="cb-controls mt-3",
    )
