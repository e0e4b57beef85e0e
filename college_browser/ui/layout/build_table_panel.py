from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from college_browser.config.model import EngineConfig
from college_browser.ui.helpers import TABLE_COLUMNS
from college_browser.ui.ids import IDs


def build_table_panel(settings: EngineConfig, rows: List[html.Tr], summary: str) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong(summary, id=IDs.Control.RESULT_SUMMARY),
                        dbc.Button(
                            "Download listing (CSV)",
                            id=IDs.Control.DOWNLOAD_CSV_BTN,
                            color="secondary",
                            size="sm",
                            className="ms-auto",
                        ),
                        dcc.Download(id=IDs.Control.DOWNLOAD_CSV),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dbc.Table(
                        [
                            html.Thead(html.Tr([html.Th(c) for c in TABLE_COLUMNS])),
                            html.Tbody(rows, id=IDs.Control.RESULTS_TABLE_BODY),
                        ],
                        bordered=True,
                        hover=True,
                        className="cb-results-table",
                    ),
                    html.Div(
                        "Loading...",
                        id=IDs.Control.LOADING_INDICATOR,
                        className="text-center p-3",
                        style={"display": "none"},
                    ),
                    # Clicked by assets/near_end.js when the page is scrolled near its end
                    html.Button(
                        id=IDs.Control.NEAR_END_TRIGGER,
                        n_clicks=0,
                        style={"display": "none"},
                        **{"data-threshold": str(settings.near_end_threshold_px)},
                    ),
                    dcc.Interval(
                        id=IDs.Control.SETTLE_TIMER,
                        interval=max(settings.settling_delay_ms, 1),
                        n_intervals=0,
                        max_intervals=0,
                        disabled=True,
                    ),
                ]
            ),
        ],
        className="cb-maincard mt-3",
    )
