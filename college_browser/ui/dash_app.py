from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from college_browser.config.loader import load_global_config
from college_browser.core.dataset_loader import from_config
from college_browser.ui.callbacks.callbacks_view import register_view_callbacks
from college_browser.ui.config import AppConfig
from college_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Load the dataset once for the process; it is immutable from here on
    dataset = from_config(global_config)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        dataset=dataset,
    )
    ctx.validate()

    # Resolve the assets folder explicitly so near_end.js and styles.css are
    # found regardless of the working directory.
    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    register_view_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"config_root": str(config_root), "n_records": len(dataset)},
    )
    return app
