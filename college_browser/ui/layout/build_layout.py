from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from college_browser.core.view_config import ViewConfig
from college_browser.core.view_state import recompute
from college_browser.ui.helpers import build_table_rows, result_summary
from college_browser.ui.ids import IDs
from college_browser.ui.layout.build_controls_panel import build_controls_panel
from college_browser.ui.layout.build_navbar import build_navbar
from college_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from college_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    initial = ViewConfig.initial(ctx.settings)
    view = recompute(ctx.dataset or (), initial.query, initial.sort, initial.reveal_window)

    return dbc.Container(
        fluid=True,
        className="cb-root",
        children=[
            build_navbar(ctx.global_config),

            # Committed query/sort/reveal state for this browser session
            dcc.Store(id=IDs.Store.VIEW_CONFIG, data=initial.to_dict(), storage_type="memory"),

            build_controls_panel(initial.sort),
            build_table_panel(ctx.settings, build_table_rows(view.visible), result_summary(view)),
        ],
    )
