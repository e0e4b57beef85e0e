from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

import dash
from dash import ALL, Input, Output, State, dcc, no_update

from college_browser.config.model import EngineConfig
from college_browser.core.dataset import Dataset
from college_browser.core.view_config import (
    ViewConfig,
    request_reveal,
    settle_reveal,
    toggle_sort,
    with_query,
)
from college_browser.core.view_state import recompute
from college_browser.ui.helpers import build_table_rows, result_summary, sort_button_labels
from college_browser.ui.ids import IDs

if TYPE_CHECKING:
    from college_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

# Event names understood by handle_view_event
EVENT_QUERY = "query"
EVENT_SORT = "sort"
EVENT_NEAR_END = "near_end"
EVENT_SETTLED = "settled"


def handle_view_event(
    cfg: ViewConfig,
    event: str,
    settings: EngineConfig,
    value: Any = None,
) -> Tuple[ViewConfig, bool]:
    """
    Apply one UI event to the committed ViewConfig.

    Returns (new config, settle timer enabled). The settle timer is a one-shot
    dcc.Interval: it is armed when a reveal is accepted and disarmed once the
    reveal settles or a config change cancels it.
    """
    if event == EVENT_QUERY:
        new_cfg = with_query(cfg, str(value or ""), settings)
    elif event == EVENT_SORT:
        new_cfg = toggle_sort(cfg, str(value), settings)
    elif event == EVENT_NEAR_END:
        new_cfg, _ = request_reveal(cfg)
    elif event == EVENT_SETTLED:
        new_cfg = settle_reveal(cfg, settings)
    else:
        raise ValueError(f"Unknown view event '{event}'")
    return new_cfg, new_cfg.loading


def settle_timer_props(
    before: ViewConfig,
    after: ViewConfig,
    n_intervals: Optional[int],
) -> Tuple[bool, Any]:
    """
    Return (disabled, max_intervals) for the settle dcc.Interval.

    A newly accepted reveal allows exactly one more tick past the current
    count, so a repeat tick that arrives with a stale store cannot settle
    the same reveal twice. max_intervals is left alone otherwise.
    """
    if after.loading and not before.loading:
        return False, (n_intervals or 0) + 1
    return not after.loading, no_update


def _parse_config(data: Optional[dict], settings: EngineConfig) -> ViewConfig:
    if not isinstance(data, dict) or not data:
        return ViewConfig.initial(settings)
    try:
        return ViewConfig.from_dict(data)
    except Exception:
        logger.exception("Invalid view-config: %r", data)
        return ViewConfig.initial(settings)


def register_view_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    dataset: Dataset = ctx.dataset if ctx.dataset is not None else Dataset("empty", ())
    settings = ctx.settings

    # ---------------------------------------------------------
    # UI events -> committed ViewConfig
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_CONFIG, "data"),
        Output(IDs.Control.SETTLE_TIMER, "disabled"),
        Output(IDs.Control.SETTLE_TIMER, "max_intervals"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input({"type": IDs.Pattern.SORT_BUTTON, "index": ALL}, "n_clicks"),
        Input(IDs.Control.NEAR_END_TRIGGER, "n_clicks"),
        Input(IDs.Control.SETTLE_TIMER, "n_intervals"),
        State(IDs.Store.VIEW_CONFIG, "data"),
        prevent_initial_call=True,
    )
    def update_view_config(search_value, _sort_clicks, _near_end_clicks, n_intervals, data):
        triggered = dash.ctx.triggered_id
        cfg = _parse_config(data, settings)

        if triggered == IDs.Control.SEARCH_INPUT:
            event, value = EVENT_QUERY, search_value
        elif isinstance(triggered, dict) and triggered.get("type") == IDs.Pattern.SORT_BUTTON:
            event, value = EVENT_SORT, triggered.get("index")
        elif triggered == IDs.Control.NEAR_END_TRIGGER:
            if cfg.loading:
                return no_update, no_update, no_update
            event, value = EVENT_NEAR_END, None
        elif triggered == IDs.Control.SETTLE_TIMER:
            event, value = EVENT_SETTLED, None
        else:
            return no_update, no_update, no_update

        new_cfg, _ = handle_view_event(cfg, event, settings, value)
        disabled, max_intervals = settle_timer_props(cfg, new_cfg, n_intervals)
        logger.debug(
            "View event applied",
            extra={"event": event, "reveal_window": new_cfg.reveal_window, "loading": new_cfg.loading},
        )
        return new_cfg.to_dict(), disabled, max_intervals

    # ---------------------------------------------------------
    # ViewConfig -> rendered listing
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.RESULTS_TABLE_BODY, "children"),
        Output(IDs.Control.RESULT_SUMMARY, "children"),
        Output(IDs.Control.LOADING_INDICATOR, "style"),
        Output({"type": IDs.Pattern.SORT_BUTTON, "index": ALL}, "children"),
        Input(IDs.Store.VIEW_CONFIG, "data"),
    )
    def render_listing(data):
        cfg = _parse_config(data, settings)
        view = recompute(dataset, cfg.query, cfg.sort, cfg.reveal_window)
        loading_style = {} if cfg.loading else {"display": "none"}
        return (
            build_table_rows(view.visible),
            result_summary(view),
            loading_style,
            sort_button_labels(cfg.sort),
        )

    # ---------------------------------------------------------
    # CSV export of the full filtered + sorted listing
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_CSV, "data"),
        Input(IDs.Control.DOWNLOAD_CSV_BTN, "n_clicks"),
        State(IDs.Store.VIEW_CONFIG, "data"),
        prevent_initial_call=True,
    )
    def download_listing(n_clicks, data):
        if not n_clicks:
            return no_update
        cfg = _parse_config(data, settings)
        view = recompute(dataset, cfg.query, cfg.sort, cfg.reveal_window)
        frame = Dataset.to_frame(view.sorted)
        logger.info("Listing exported", extra={"n_records": len(frame)})
        return dcc.send_data_frame(frame.to_csv, "colleges.csv", index=False)
